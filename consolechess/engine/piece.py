from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List

from .geometry import (
    ALL_DIRECTIONS,
    DIAGONAL,
    KNIGHT_JUMPS,
    ORTHOGONAL,
    WHITE,
    Grid,
    occupant,
    ray_targets,
    step_targets,
    validate_color,
)
from .position import Position


class PieceKind(Enum):
    PAWN = "P"
    KNIGHT = "N"
    BISHOP = "B"
    ROOK = "R"
    QUEEN = "Q"
    KING = "K"


PROMOTION_KINDS = {
    "Q": PieceKind.QUEEN,
    "R": PieceKind.ROOK,
    "B": PieceKind.BISHOP,
    "N": PieceKind.KNIGHT,
}


@dataclass
class Piece:
    """A piece on the board.

    One record type covers all six kinds; behaviour is looked up per ``kind``
    in ``_MOVE_GENERATORS`` rather than through subclasses.

    Attributes:
        kind (PieceKind): Which of the six pieces this is.
        color (str): ``'w'`` or ``'b'``.
        position (Position): Square currently occupied.
        has_moved (bool): Set once ``set_position`` has been called.
    """

    kind: PieceKind
    color: str
    position: Position
    has_moved: bool = False

    def __post_init__(self) -> None:
        validate_color(self.color)
        if not isinstance(self.kind, PieceKind):
            raise ValueError(f"unknown piece kind: {self.kind!r}")

    # --- Constructors ---
    @classmethod
    def pawn(cls, color: str, position: Position) -> "Piece":
        return cls(PieceKind.PAWN, color, position)

    @classmethod
    def knight(cls, color: str, position: Position) -> "Piece":
        return cls(PieceKind.KNIGHT, color, position)

    @classmethod
    def bishop(cls, color: str, position: Position) -> "Piece":
        return cls(PieceKind.BISHOP, color, position)

    @classmethod
    def rook(cls, color: str, position: Position) -> "Piece":
        return cls(PieceKind.ROOK, color, position)

    @classmethod
    def queen(cls, color: str, position: Position) -> "Piece":
        return cls(PieceKind.QUEEN, color, position)

    @classmethod
    def king(cls, color: str, position: Position) -> "Piece":
        return cls(PieceKind.KING, color, position)

    @classmethod
    def promotion(cls, letter: str, color: str, position: Position) -> "Piece":
        """Create the piece a pawn promotes into.

        Args:
            letter (str): One of ``Q``, ``R``, ``B``, ``N`` (case-insensitive).
            color (str): Color of the promoting pawn.
            position (Position): Square the pawn arrived on.

        Raises:
            ValueError: If ``letter`` does not name a promotion piece.
        """
        kind = PROMOTION_KINDS.get(letter.strip().upper()) if isinstance(letter, str) else None
        if kind is None:
            raise ValueError(f"invalid promotion piece: {letter!r} (choose Q, R, B or N)")
        return cls(kind, color, position)

    # --- State ---
    @property
    def is_white(self) -> bool:
        return self.color == WHITE

    def set_position(self, position: Position) -> None:
        self.position = position
        self.has_moved = True

    def copy(self) -> "Piece":
        return Piece(self.kind, self.color, self.position, self.has_moved)

    # --- Movement ---
    def possible_moves(self, grid: Grid) -> List[Position]:
        """Return every square this piece can reach on ``grid``.

        Geometry only: a move that leaves the own king attacked is still listed.
        Neither the grid nor the piece is modified.
        """
        return _MOVE_GENERATORS[self.kind](self, grid)

    def is_valid_move(self, target: Position, grid: Grid) -> bool:
        return target in self.possible_moves(grid)

    # --- Display ---
    @property
    def tag(self) -> str:
        """Two-letter display tag, e.g. ``wP`` or ``bK``."""
        return self.color + self.kind.value

    @property
    def symbol(self) -> str:
        """Single letter, upper-case for white and lower-case for black."""
        return self.kind.value if self.is_white else self.kind.value.lower()

    def __str__(self) -> str:
        return self.tag


def _pawn_moves(piece: Piece, grid: Grid) -> List[Position]:
    moves: List[Position] = []
    direction = -1 if piece.is_white else 1
    start_row = 6 if piece.is_white else 1
    origin = piece.position

    one = origin.offset(direction, 0)
    if one is not None and occupant(grid, one) is None:
        moves.append(one)
        if origin.row == start_row:
            two = origin.offset(2 * direction, 0)
            if two is not None and occupant(grid, two) is None:
                moves.append(two)

    for dcol in (-1, 1):
        diag = origin.offset(direction, dcol)
        if diag is None:
            continue
        target = occupant(grid, diag)
        if target is not None and target.color != piece.color:
            moves.append(diag)
    return moves


def _knight_moves(piece: Piece, grid: Grid) -> List[Position]:
    return step_targets(piece.position, piece.color, grid, KNIGHT_JUMPS)


def _bishop_moves(piece: Piece, grid: Grid) -> List[Position]:
    return ray_targets(piece.position, piece.color, grid, DIAGONAL)


def _rook_moves(piece: Piece, grid: Grid) -> List[Position]:
    return ray_targets(piece.position, piece.color, grid, ORTHOGONAL)


def _queen_moves(piece: Piece, grid: Grid) -> List[Position]:
    return ray_targets(piece.position, piece.color, grid, ALL_DIRECTIONS)


def _king_moves(piece: Piece, grid: Grid) -> List[Position]:
    return step_targets(piece.position, piece.color, grid, ALL_DIRECTIONS)


_MOVE_GENERATORS: Dict[PieceKind, Callable[[Piece, Grid], List[Position]]] = {
    PieceKind.PAWN: _pawn_moves,
    PieceKind.KNIGHT: _knight_moves,
    PieceKind.BISHOP: _bishop_moves,
    PieceKind.ROOK: _rook_moves,
    PieceKind.QUEEN: _queen_moves,
    PieceKind.KING: _king_moves,
}
