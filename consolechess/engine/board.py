from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .geometry import BLACK, WHITE, Grid, empty_grid, validate_color
from .piece import Piece, PieceKind
from .position import Position


logger = logging.getLogger(__name__)


BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

# (tag, has_moved) per cell, row-major, followed by captured tags
Snapshot = Tuple[Tuple[Optional[Tuple[str, bool]], ...], Tuple[str, ...]]


@dataclass
class Board:
    """8x8 grid of optional pieces plus the pieces captured so far.

    Notes:
    - ``grid[row][column]``; row 0 is black's back rank.
    - Mutation goes through ``move_piece``/``set_piece``/``remove_piece``.
      None of them check legality; callers validate with
      ``Piece.is_valid_move`` first.
    - Check and checkmate are recomputed on every query.
    """

    grid: Grid = field(default_factory=empty_grid)
    captured: List[Piece] = field(default_factory=list)

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board with the standard starting arrangement.

        Returns:
            Board: Black on rows 0-1, white on rows 6-7.
        """
        board = cls()
        for column, kind in enumerate(BACK_RANK):
            board.set_piece(Position(0, column), Piece(kind, BLACK, Position(0, column)))
            board.set_piece(Position(7, column), Piece(kind, WHITE, Position(7, column)))
        for column in range(8):
            board.set_piece(Position(1, column), Piece.pawn(BLACK, Position(1, column)))
            board.set_piece(Position(6, column), Piece.pawn(WHITE, Position(6, column)))
        return board

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    # --- Access ---
    @property
    def squares(self) -> Grid:
        """The live grid handed to piece move generation."""
        return self.grid

    @property
    def captured_pieces(self) -> List[Piece]:
        return self.captured

    def get_piece(self, pos: Position) -> Optional[Piece]:
        return self.grid[pos.row][pos.column]

    def set_piece(self, pos: Position, piece: Piece) -> None:
        """Place ``piece`` on ``pos``, replacing any occupant without capturing it.

        The piece's position field follows the square; its moved flag is kept.
        """
        piece.position = pos
        self.grid[pos.row][pos.column] = piece

    def remove_piece(self, pos: Position) -> Optional[Piece]:
        piece = self.grid[pos.row][pos.column]
        self.grid[pos.row][pos.column] = None
        return piece

    def pieces(self, color: Optional[str] = None) -> Iterator[Piece]:
        """Yield pieces in row-major order, optionally only those of ``color``."""
        if color is not None:
            validate_color(color)
        for row in self.grid:
            for piece in row:
                if piece is not None and (color is None or piece.color == color):
                    yield piece

    def find_king(self, color: str) -> Optional[Position]:
        for piece in self.pieces(color):
            if piece.kind is PieceKind.KING:
                return piece.position
        return None

    # --- Mutation ---
    def move_piece(self, from_pos: Position, to_pos: Position) -> bool:
        """Move whatever stands on ``from_pos`` to ``to_pos``.

        Args:
            from_pos (Position): Source square.
            to_pos (Position): Destination square; an occupant is captured.

        Returns:
            bool: False if ``from_pos`` is empty, True otherwise.
        """
        piece = self.get_piece(from_pos)
        if piece is None:
            return False
        target = self.get_piece(to_pos)
        if target is not None:
            self.captured.append(target)
        self.grid[from_pos.row][from_pos.column] = None
        self.grid[to_pos.row][to_pos.column] = piece
        piece.set_position(to_pos)
        return True

    # --- Status ---
    def is_check(self, color: str) -> bool:
        """Return True if the king of ``color`` is attacked by any enemy piece.

        A board without a king of ``color`` is never in check.
        """
        king_pos = self.find_king(color)
        if king_pos is None:
            return False
        for row in self.grid:
            for piece in row:
                if piece is None or piece.color == color:
                    continue
                if piece.is_valid_move(king_pos, self.grid):
                    logger.debug("check: %s attacks %s from %s", piece.tag, king_pos, piece.position)
                    return True
        return False

    def is_checkmate(self, color: str) -> bool:
        """Return True if ``color`` is in check and no move gets it out.

        Every possible move of every piece of ``color`` is tried on this board
        and undone before the next one; the board is unchanged on return.
        """
        if not self.is_check(color):
            return False
        trials = 0
        # Snapshot the movers first; trial moves rearrange the grid being scanned
        for piece in list(self.pieces(color)):
            for dest in piece.possible_moves(self.grid):
                trials += 1
                with self._trial_move(piece, dest):
                    escaped = not self.is_check(color)
                if escaped:
                    logger.debug(
                        "checkmate search: %s escapes with %s %s-%s after %d trials",
                        color,
                        piece.tag,
                        piece.position,
                        dest,
                        trials,
                    )
                    return False
        logger.debug("checkmate search: %s has no escape in %d trials", color, trials)
        return True

    @contextmanager
    def _trial_move(self, piece: Piece, dest: Position) -> Iterator[None]:
        """Temporarily move ``piece`` to ``dest``; restore everything on exit.

        The captured list is not touched, and the mover's moved flag is restored
        along with its position.
        """
        origin = piece.position
        had_moved = piece.has_moved
        displaced = self.get_piece(dest)
        self.grid[origin.row][origin.column] = None
        self.grid[dest.row][dest.column] = piece
        piece.set_position(dest)
        try:
            yield
        finally:
            self.grid[origin.row][origin.column] = piece
            self.grid[dest.row][dest.column] = displaced
            piece.position = origin
            piece.has_moved = had_moved

    # --- Utilities ---
    def copy(self) -> "Board":
        """Deep copy: grid pieces and captured pieces are new instances."""
        grid = [[piece.copy() if piece is not None else None for piece in row] for row in self.grid]
        return Board(grid=grid, captured=[piece.copy() for piece in self.captured])

    def snapshot(self) -> Snapshot:
        """Hashable structural summary of grid contents and captures."""
        cells = tuple(
            (piece.tag, piece.has_moved) if piece is not None else None
            for row in self.grid
            for piece in row
        )
        return cells, tuple(piece.tag for piece in self.captured)
