from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from .position import Position

if TYPE_CHECKING:
    from .piece import Piece


# Grid cells are indexed grid[row][column]
Grid = List[List[Optional["Piece"]]]
Offset = Tuple[int, int]

WHITE = "w"
BLACK = "b"

ORTHOGONAL: Tuple[Offset, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL: Tuple[Offset, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ALL_DIRECTIONS: Tuple[Offset, ...] = ORTHOGONAL + DIAGONAL
KNIGHT_JUMPS: Tuple[Offset, ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)


def validate_color(color: str) -> str:
    if color not in (WHITE, BLACK):
        raise ValueError(f"color must be 'w' or 'b', got {color!r}")
    return color


def opponent(color: str) -> str:
    return BLACK if validate_color(color) == WHITE else WHITE


def empty_grid() -> Grid:
    return [[None] * 8 for _ in range(8)]


def occupant(grid: Grid, pos: Position) -> Optional["Piece"]:
    return grid[pos.row][pos.column]


def step_targets(origin: Position, color: str, grid: Grid, offsets: Iterable[Offset]) -> List[Position]:
    """Single-step destinations: on the board and empty or enemy-occupied."""
    targets: List[Position] = []
    for drow, dcol in offsets:
        dest = origin.offset(drow, dcol)
        if dest is None:
            continue
        other = occupant(grid, dest)
        if other is None or other.color != color:
            targets.append(dest)
    return targets


def ray_targets(origin: Position, color: str, grid: Grid, directions: Iterable[Offset]) -> List[Position]:
    """Sliding destinations along each direction.

    A ray stops at the board edge or at the first occupied square; that square
    is included only when it holds an enemy piece.
    """
    targets: List[Position] = []
    for drow, dcol in directions:
        dest = origin.offset(drow, dcol)
        while dest is not None:
            other = occupant(grid, dest)
            if other is None:
                targets.append(dest)
            else:
                if other.color != color:
                    targets.append(dest)
                break
            dest = dest.offset(drow, dcol)
    return targets
