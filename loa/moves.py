from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .types import Direction, Piece, Square, in_bounds

if TYPE_CHECKING:
    from .board import Board

# Square designator: column letter a-h, then row digit 1-8
ROW_COL = re.compile(r"^[a-h][1-8]$")
MOVE_PATTERN = re.compile(r"^([a-h][1-8])-([a-h][1-8])$")


class InvalidSquareError(ValueError):
    """Raised for text that is not a square designator."""

    def __init__(self, text: str) -> None:
        super().__init__(f"bad square designator: {text!r}")
        self.text = text


# -----------------------------
# Square designators
# -----------------------------
def col_of(sq: str) -> int:
    """Column number (1..8) of designator SQ; 'a' is column 1."""
    if not ROW_COL.match(sq):
        raise InvalidSquareError(sq)
    return ord(sq[0]) - ord("a") + 1


def row_of(sq: str) -> int:
    """Row number (1..8) of designator SQ."""
    if not ROW_COL.match(sq):
        raise InvalidSquareError(sq)
    return ord(sq[1]) - ord("0")


def parse_square(sq: str) -> Square:
    return col_of(sq), row_of(sq)


def square_name(col: int, row: int) -> str:
    """Inverse of parse_square."""
    assert in_bounds(col, row), f"square ({col}, {row}) is off the board"
    return f"{chr(ord('a') + col - 1)}{row}"


@dataclass(frozen=True)
class Move:
    """A move from (col0, row0) to (col1, row1).

    ``moved`` and ``replaced`` are the pieces found on the origin and the
    destination when the move was built; they are snapshots and do not track
    later changes to the board.
    """

    col0: int
    row0: int
    col1: int
    row1: int
    moved: Piece
    replaced: Piece = Piece.EMPTY

    @classmethod
    def from_squares(cls, col0: int, row0: int, col1: int, row1: int,
                     board: "Board") -> "Move":
        """Build the move between two on-board squares against BOARD."""
        if not (in_bounds(col0, row0) and in_bounds(col1, row1)):
            raise ValueError("move squares must be on the board")
        if (col0, row0) == (col1, row1):
            raise ValueError("move must change squares")
        return cls(col0, row0, col1, row1,
                   board.get(col0, row0), board.get(col1, row1))

    @classmethod
    def create(cls, col0: int, row0: int, length: int, direction: Direction,
               board: "Board") -> Optional["Move"]:
        """The move of LENGTH squares from (col0, row0) toward DIRECTION.

        Returns None when the destination falls off the board.
        """
        if length <= 0 or direction is Direction.NOWHERE:
            return None
        col1 = col0 + direction.dc * length
        row1 = row0 + direction.dr * length
        if not in_bounds(col1, row1):
            return None
        return cls.from_squares(col0, row0, col1, row1, board)

    @classmethod
    def parse(cls, text: str, board: "Board") -> Optional["Move"]:
        """Parse "a2-e6" against BOARD; None if the text is not a move."""
        m = MOVE_PATTERN.match(text.strip().lower())
        if m is None:
            return None
        (c0, r0), (c1, r1) = parse_square(m.group(1)), parse_square(m.group(2))
        if (c0, r0) == (c1, r1):
            return None
        return cls.from_squares(c0, r0, c1, r1, board)

    @property
    def origin(self) -> Square:
        return self.col0, self.row0

    @property
    def destination(self) -> Square:
        return self.col1, self.row1

    def length(self) -> int:
        """Squares spanned, counting the destination but not the origin."""
        return max(abs(self.col1 - self.col0), abs(self.row1 - self.row0))

    def direction(self) -> Direction:
        """Only defined for linear moves; see is_linear()."""
        return Direction.of(self.col1 - self.col0, self.row1 - self.row0)

    def is_linear(self) -> bool:
        """True iff origin and destination share a row, column or diagonal."""
        dc, dr = abs(self.col1 - self.col0), abs(self.row1 - self.row0)
        return (dc, dr) != (0, 0) and (dc == 0 or dr == 0 or dc == dr)

    def is_capture(self) -> bool:
        return self.replaced is not Piece.EMPTY and self.replaced != self.moved

    def __str__(self) -> str:
        return f"{square_name(self.col0, self.row0)}-{square_name(self.col1, self.row1)}"


# Convenience functional API

def parse_move_str(s: str, board: "Board") -> Optional[Move]:
    """Parse a move string into a Move for BOARD, or None."""
    return Move.parse(s, board)
