from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .piece import PROMOTION_KINDS
from .position import Position


@dataclass(frozen=True)
class Move:
    """A requested move in board coordinates.

    Attributes:
        from_pos (Position): Origin square.
        to_pos (Position): Destination square.
        promotion (Optional[str]): Upper-case promotion letter, if given.
    """

    from_pos: Position
    to_pos: Position
    promotion: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.from_pos} {self.to_pos}"
        if self.promotion:
            text += f"={self.promotion}"
        return text


def parse_move(text: str) -> Move:
    """Parse a move typed as ``FROM TO``.

    Args:
        text (str): Two squares separated by whitespace, e.g. ``"e2 e4"``,
            optionally followed by a promotion letter (``"e7 e8 q"``).

    Returns:
        Move: Parsed move with upper-cased squares.

    Raises:
        ValueError: If the text is empty, has the wrong number of parts, names
            an invalid square, or an invalid promotion piece.
    """
    if not text or not text.strip():
        raise ValueError("move cannot be empty")
    parts = text.strip().upper().split()
    if len(parts) not in (2, 3):
        raise ValueError("move must be in format 'FROM TO' (e.g. 'E2 E4')")
    try:
        from_pos = Position.from_algebraic(parts[0])
        to_pos = Position.from_algebraic(parts[1])
    except ValueError as e:
        raise ValueError(f"invalid position in move: {e}") from e
    promotion: Optional[str] = None
    if len(parts) == 3:
        promotion = parts[2]
        if promotion not in PROMOTION_KINDS:
            raise ValueError(f"invalid promotion piece: {promotion!r}")
    return Move(from_pos, to_pos, promotion)
