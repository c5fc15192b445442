from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ...engine.game import DEFAULT_BLACK_NAME, DEFAULT_WHITE_NAME, Game
from ...engine.move import Move, parse_move
from ...engine.piece import PROMOTION_KINDS
from .render import render_board, render_captured


logger = logging.getLogger(__name__)


# A reader takes a prompt and returns one line; it raises EOFError at end of input
Reader = Callable[[str], str]
Writer = Callable[[str], None]

QUIT_WORDS = ("QUIT", "EXIT")
RULE = "=" * 50


@dataclass
class ConsoleSettings:
    white_name: Optional[str] = None
    black_name: Optional[str] = None
    strict: bool = False
    ascii_pieces: bool = False
    log_level: str = "WARNING"


class ConsoleSession:
    """Interactive two-player game over a line reader and writer.

    Notes:
    - Core stays free of I/O; prompts and output live here.
    - Bad input is reported and asked for again in a loop.
    - End of input behaves like ``QUIT``.
    """

    def __init__(self, read: Reader, write: Writer, settings: Optional[ConsoleSettings] = None) -> None:
        self.read = read
        self.write = write
        self.settings = settings or ConsoleSettings()
        self.game: Optional[Game] = None

    # ---- Setup ----
    def setup(self) -> Game:
        self.write("Welcome to Console Chess Game!")
        self.write("===============================")
        white = self.settings.white_name
        if white is None:
            white = self._read("Enter name for White player: ") or ""
        black = self.settings.black_name
        if black is None:
            black = self._read("Enter name for Black player: ") or ""
        self.game = Game.new(
            white.strip() or DEFAULT_WHITE_NAME,
            black.strip() or DEFAULT_BLACK_NAME,
            enforce_king_safety=self.settings.strict,
        )
        self.write("")
        self.write("Game initialized!")
        self.write(f"White: {self.game.white.name}")
        self.write(f"Black: {self.game.black.name}")
        self.write("")
        self.write("Enter 'QUIT' at any time to exit the game.")
        self.write("Move format: FROM TO (e.g., E2 E4)")
        return self.game

    # ---- Main loop ----
    def run(self) -> Game:
        game = self.setup() if self.game is None else self.game
        while not game.is_over:
            self.display_state()
            player = game.current_player
            if game.in_check():
                self.write(f"CHECK! {player.name} is in check.")
                if game.evaluate_turn():
                    self.write(f"CHECKMATE! {player.name} loses!")
                    break

            move = self.request_move()
            if move is None:
                game.quit()
                self.write("Game ended by player choice.")
                break

            promotion = move.promotion
            if promotion is None and game.needs_promotion(move.from_pos, move.to_pos):
                promotion = self.request_promotion()
            try:
                record = game.apply_move(move.from_pos, move.to_pos, promotion)
            except ValueError as e:
                self.write(f"{e}. Please try again.")
                continue

            self.write(f"Move made: {record.mover} from {record.from_pos} to {record.to_pos}")
            if record.promotion:
                self.write(f"Pawn promoted to {record.promotion}")
            if record.gives_mate:
                self.display_state()
                self.write(f"CHECKMATE! {player.name} wins!")
        self.write("Thank you for playing!")
        return game

    def request_move(self) -> Optional[Move]:
        """Prompt until the current player enters a playable move.

        Returns:
            Optional[Move]: The move, or None if the player quit or input ended.
        """
        game = self._require_game()
        player = game.current_player
        prompt = f"{player.name} ({player.color_name}), enter your move (e.g., E2 E4): "
        while True:
            line = self._read(prompt)
            if line is None or line.strip().upper() in QUIT_WORDS:
                return None
            try:
                move = parse_move(line)
                game.validate_move(move.from_pos, move.to_pos)
            except ValueError as e:
                logger.debug("rejected input %r: %s", line, e)
                self.write(f"{e}. Please try again.")
                continue
            return move

    def request_promotion(self) -> str:
        line = self._read("Pawn promotion! Choose piece (Q/R/B/N): ")
        while line is not None and line.strip().upper() not in PROMOTION_KINDS:
            line = self._read("Invalid choice. Please enter Q, R, B, or N: ")
        # Out of input: fall back to a queen
        return line.strip().upper() if line is not None else "Q"

    # ---- Output ----
    def display_state(self) -> None:
        game = self._require_game()
        self.write("")
        self.write(RULE)
        for line in render_board(game.board, ascii_pieces=self.settings.ascii_pieces):
            self.write(line)
        player = game.current_player
        self.write(f"Current turn: {player.name} ({player.color_name})")
        if game.board.captured_pieces:
            self.write(f"Captured pieces: {render_captured(game.board.captured_pieces)}")
        self.write(RULE)

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return self.read(prompt)
        except EOFError:
            return None

    def _require_game(self) -> Game:
        if self.game is None:
            raise RuntimeError("session has not been set up")
        return self.game
