from __future__ import annotations

from typing import List

from ...engine.board import Board
from ...engine.piece import Piece
from ...engine.position import FILES


def render_board(board: Board, *, ascii_pieces: bool = False) -> List[str]:
    """Render the board as text lines, rank 8 at the top.

    Empty dark squares are drawn as ``##``. With ``ascii_pieces`` each piece is
    a single letter (upper-case white) instead of its two-letter tag.
    """
    width = 1 if ascii_pieces else 2
    header = " " * 3 + "".join(f.ljust(width + 1) for f in FILES).rstrip()
    border = "  +" + ("-" * width + "+") * 8
    lines = ["", header, border]
    for row in range(8):
        rank = 8 - row
        cells = []
        for column, piece in enumerate(board.squares[row]):
            if piece is None:
                cells.append(("#" if (row + column) % 2 == 1 else " ") * width)
            else:
                cells.append(piece.symbol if ascii_pieces else piece.tag)
        lines.append(f"{rank} |" + "|".join(cells) + f"| {rank}")
    lines.extend([border, header, ""])
    return lines


def render_captured(pieces: List[Piece]) -> str:
    return " ".join(p.tag for p in pieces)
