"""
Type definitions and protocols for the Lines of Action engine.

This module provides:
- The closed ``Piece`` and ``Direction`` enumerations
- Type aliases for squares and search results
- A protocol for search engines
- Board geometry constants
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional, Protocol, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .board import Board
    from .moves import Move

# Board geometry
M: int = 8  # Board is M x M
MIN_INDEX: int = 1
MAX_INDEX: int = M

# Basic type aliases
Square = Tuple[int, int]  # (column, row), both 1..8
GameResult = Tuple[float, Optional["Move"]]  # (score, best_move)


class Piece(IntEnum):
    """Contents of one square. The integer codes are stored in the board grid."""

    EMPTY = 0
    BLACK = 1
    WHITE = -1

    @property
    def abbrev(self) -> str:
        """Single character used in the board dump."""
        return _ABBREVS[self]

    @property
    def full_name(self) -> str:
        return _NAMES[self]

    def opposite(self) -> "Piece":
        """Return the other side. Only defined for BLACK and WHITE."""
        assert self is not Piece.EMPTY, "EMPTY has no opposite"
        return Piece(-int(self))

    @classmethod
    def from_name(cls, name: str) -> "Piece":
        """Parse a full name or abbreviation ("black", "w", "-", ...)."""
        key = name.strip().lower()
        for piece in cls:
            if key in (piece.abbrev, piece.full_name):
                return piece
        raise ValueError(f"unknown piece: {name!r}")

    def __str__(self) -> str:
        return self.full_name


_ABBREVS = {Piece.EMPTY: "-", Piece.BLACK: "b", Piece.WHITE: "w"}
_NAMES = {Piece.EMPTY: "empty", Piece.BLACK: "black", Piece.WHITE: "white"}


class Direction(Enum):
    """Unit vectors (dcol, drow) in a fixed successor order.

    NOWHERE is only a starting marker for iteration; ``NOWHERE.succ()`` is N
    and ``NW.succ()`` is None.
    """

    NOWHERE = (0, 0)
    N = (0, 1)
    NE = (1, 1)
    E = (1, 0)
    SE = (1, -1)
    S = (0, -1)
    SW = (-1, -1)
    W = (-1, 0)
    NW = (-1, 1)

    @property
    def dc(self) -> int:
        return self.value[0]

    @property
    def dr(self) -> int:
        return self.value[1]

    def succ(self) -> Optional["Direction"]:
        """Return the next direction in N, NE, ..., NW order."""
        members = _ORDER
        i = members.index(self)
        return members[i + 1] if i + 1 < len(members) else None

    def inverse(self) -> "Direction":
        """Return the direction pointing the opposite way."""
        return Direction((-self.dc, -self.dr))

    @classmethod
    def of(cls, dc: int, dr: int) -> "Direction":
        """Return the direction of a coordinate delta.

        The delta is sign-normalized, so (3, -3) maps to SE. Raises ValueError
        for a zero delta; a delta off every row, column and diagonal is an
        AssertionError.
        """
        if dc == 0 and dr == 0:
            raise ValueError("zero-length delta has no direction")
        assert dc == 0 or dr == 0 or abs(dc) == abs(dr), f"delta ({dc}, {dr}) is not along a line"
        return cls((_sign(dc), _sign(dr)))


_ORDER = list(Direction)
DIRECTIONS: Tuple[Direction, ...] = tuple(d for d in _ORDER if d is not Direction.NOWHERE)


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


def in_bounds(col: int, row: int) -> bool:
    """True iff (col, row) lies on the board."""
    return MIN_INDEX <= col <= MAX_INDEX and MIN_INDEX <= row <= MAX_INDEX


class SearchEngineProtocol(Protocol):
    """Protocol for search engine implementations."""

    def search(self, board: "Board", side: Piece, depth: int) -> GameResult:
        """Search for the best move for SIDE on BOARD."""
        ...
