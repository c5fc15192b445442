from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


FILES = "ABCDEFGH"
RANKS = "12345678"


@dataclass(frozen=True)
class Position:
    """Square on the 8x8 grid.

    Attributes:
        row (int): 0..7, where row 0 is rank 8 (black's back rank) and row 7 is
            rank 1.
        column (int): 0..7, where column 0 is file A.
    """

    row: int
    column: int

    def __post_init__(self) -> None:
        if not _in_range(self.row) or not _in_range(self.column):
            raise ValueError(
                f"row and column must be between 0 and 7, got ({self.row!r}, {self.column!r})"
            )

    @classmethod
    def from_algebraic(cls, text: str) -> "Position":
        """Parse a two-character square name such as ``"E4"``.

        Args:
            text (str): File letter ``A``..``H`` followed by rank digit ``1``..``8``.

        Returns:
            Position: The square named by ``text``.

        Raises:
            ValueError: If ``text`` is not exactly two characters or either
                character is out of range.
        """
        if not isinstance(text, str) or len(text) != 2:
            raise ValueError(f"algebraic notation must be 2 characters (e.g. 'E4'), got {text!r}")
        file, rank = text[0], text[1]
        if file not in FILES:
            raise ValueError(f"file must be between A and H, got {file!r}")
        if rank not in RANKS:
            raise ValueError(f"rank must be between 1 and 8, got {rank!r}")
        return cls(8 - int(rank), ord(file) - ord("A"))

    def to_algebraic(self) -> str:
        return FILES[self.column] + str(8 - self.row)

    def offset(self, drow: int, dcol: int) -> Optional["Position"]:
        """Return the square ``(drow, dcol)`` away, or None when off the board."""
        row = self.row + drow
        column = self.column + dcol
        if 0 <= row < 8 and 0 <= column < 8:
            return Position(row, column)
        return None

    def __str__(self) -> str:
        return self.to_algebraic()


def _in_range(value: object) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 7
