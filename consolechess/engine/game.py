from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board
from .geometry import BLACK, WHITE, opponent, validate_color
from .move import Move
from .piece import Piece, PieceKind
from .position import Position


logger = logging.getLogger(__name__)


DEFAULT_WHITE_NAME = "White Player"
DEFAULT_BLACK_NAME = "Black Player"

# Outcomes recorded in Game.result
CHECKMATE = "checkmate"
QUIT = "quit"


@dataclass
class Player:
    color: str
    name: str

    def __post_init__(self) -> None:
        validate_color(self.color)

    @property
    def is_white(self) -> bool:
        return self.color == WHITE

    @property
    def color_name(self) -> str:
        return "White" if self.is_white else "Black"


@dataclass(frozen=True)
class MoveRecord:
    """What happened on one half-move, for history and display."""

    mover: str
    from_pos: Position
    to_pos: Position
    captured: Optional[str] = None
    promotion: Optional[str] = None
    gives_check: bool = False
    gives_mate: bool = False

    def __str__(self) -> str:
        text = f"{self.mover} {self.from_pos}-{self.to_pos}"
        if self.captured:
            text += f" x{self.captured}"
        if self.promotion:
            text += f" ={self.promotion}"
        if self.gives_mate:
            text += "#"
        elif self.gives_check:
            text += "+"
        return text


@dataclass
class Game:
    """Game wrapper around a board with turn order and outcome.

    Responsibility: whose turn it is, rule checks a player must pass before
    the board is touched, pawn promotion, and end of game.
    """

    board: Board
    white: Player
    black: Player
    side_to_move: str = WHITE
    enforce_king_safety: bool = False
    history: List[MoveRecord] = field(default_factory=list)
    is_over: bool = False
    winner: Optional[Player] = None
    result: Optional[str] = None

    @classmethod
    def new(
        cls,
        white_name: str = DEFAULT_WHITE_NAME,
        black_name: str = DEFAULT_BLACK_NAME,
        *,
        enforce_king_safety: bool = False,
    ) -> "Game":
        return cls(
            board=Board.startpos(),
            white=Player(WHITE, white_name or DEFAULT_WHITE_NAME),
            black=Player(BLACK, black_name or DEFAULT_BLACK_NAME),
            enforce_king_safety=enforce_king_safety,
        )

    @property
    def current_player(self) -> Player:
        return self.white if self.side_to_move == WHITE else self.black

    @property
    def opponent_player(self) -> Player:
        return self.black if self.side_to_move == WHITE else self.white

    # --- State flags for the turn loop ---
    def in_check(self) -> bool:
        return self.board.is_check(self.side_to_move)

    def checkmate(self) -> bool:
        return self.board.is_checkmate(self.side_to_move)

    def evaluate_turn(self) -> bool:
        """End the game if the side to move is already checkmated.

        Returns:
            bool: True if the game is (now) over.
        """
        if not self.is_over and self.checkmate():
            self._finish(CHECKMATE, self.opponent_player)
        return self.is_over

    def quit(self) -> None:
        self._finish(QUIT, None)

    # --- Moves ---
    def validate_move(self, from_pos: Position, to_pos: Position) -> Piece:
        """Check that the side to move may play ``from_pos`` -> ``to_pos``.

        Returns:
            Piece: The piece that would move.

        Raises:
            ValueError: If the game is over, the source square is empty or holds
                an opponent piece, the destination is not reachable, or (with
                ``enforce_king_safety``) the move leaves the own king in check.
        """
        if self.is_over:
            raise ValueError("the game is over")
        piece = self.board.get_piece(from_pos)
        if piece is None:
            raise ValueError(f"No piece at {from_pos}")
        if piece.color != self.side_to_move:
            raise ValueError("That's not your piece")
        if not piece.is_valid_move(to_pos, self.board.squares):
            raise ValueError(f"Invalid move for {piece}")
        if self.enforce_king_safety and self.leaves_king_in_check(from_pos, to_pos):
            raise ValueError(f"{piece} {from_pos}-{to_pos} would leave your king in check")
        return piece

    def leaves_king_in_check(self, from_pos: Position, to_pos: Position) -> bool:
        """Play the move on a throw-away copy and report whether its mover is in check."""
        piece = self.board.get_piece(from_pos)
        if piece is None:
            return False
        scratch = self.board.copy()
        scratch.move_piece(from_pos, to_pos)
        return scratch.is_check(piece.color)

    def needs_promotion(self, from_pos: Position, to_pos: Position) -> bool:
        piece = self.board.get_piece(from_pos)
        if piece is None or piece.kind is not PieceKind.PAWN:
            return False
        return to_pos.row == (0 if piece.is_white else 7)

    def apply_move(
        self, from_pos: Position, to_pos: Position, promotion: Optional[str] = None
    ) -> MoveRecord:
        """Validate and play one half-move for the side to move.

        Args:
            from_pos (Position): Square of the piece to move.
            to_pos (Position): Destination square.
            promotion (Optional[str]): Q/R/B/N for a pawn reaching the last
                rank; defaults to a queen.

        Returns:
            MoveRecord: Summary of the half-move.

        Raises:
            ValueError: See ``validate_move``; also for an invalid promotion
                letter, in which case the board is left untouched.
        """
        piece = self.validate_move(from_pos, to_pos)
        promoted: Optional[Piece] = None
        if self.needs_promotion(from_pos, to_pos):
            promoted = Piece.promotion(promotion or "Q", piece.color, to_pos)

        target = self.board.get_piece(to_pos)
        captured = target.tag if target is not None else None
        mover = piece.tag
        self.board.move_piece(from_pos, to_pos)
        if promoted is not None:
            self.board.set_piece(to_pos, promoted)
            logger.info("promotion", extra={"square": str(to_pos), "piece": promoted.tag})

        moved_by = self.current_player
        self.side_to_move = opponent(self.side_to_move)
        gives_mate = self.board.is_checkmate(self.side_to_move)
        gives_check = gives_mate or self.board.is_check(self.side_to_move)
        record = MoveRecord(
            mover=mover,
            from_pos=from_pos,
            to_pos=to_pos,
            captured=captured,
            promotion=promoted.tag if promoted is not None else None,
            gives_check=gives_check,
            gives_mate=gives_mate,
        )
        self.history.append(record)
        logger.info(
            "move",
            extra={"player": moved_by.name, "move": str(record), "ply": len(self.history)},
        )
        if gives_mate:
            self._finish(CHECKMATE, moved_by)
        return record

    def play(self, move: Move) -> MoveRecord:
        return self.apply_move(move.from_pos, move.to_pos, move.promotion)

    def move_history(self) -> List[str]:
        return [str(r) for r in self.history]

    def _finish(self, result: str, winner: Optional[Player]) -> None:
        self.is_over = True
        self.result = result
        self.winner = winner
        logger.info(
            "game over",
            extra={"result": result, "winner": winner.name if winner is not None else None},
        )
