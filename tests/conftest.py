import os
import sys
from typing import Callable, Dict

import pytest


# Ensure the repository root is on sys.path for `from consolechess...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from consolechess.engine.board import Board  # noqa: E402
from consolechess.engine.piece import Piece, PieceKind  # noqa: E402
from consolechess.engine.position import Position  # noqa: E402


BoardBuilder = Callable[[Dict[str, str]], Board]


@pytest.fixture
def build_board() -> BoardBuilder:
    """Build a board from ``{"E1": "wK", "E8": "bK", ...}``."""

    def _build(layout: Dict[str, str]) -> Board:
        board = Board.empty()
        for square, tag in layout.items():
            pos = Position.from_algebraic(square)
            board.set_piece(pos, Piece(PieceKind(tag[1]), tag[0], pos))
        return board

    return _build
