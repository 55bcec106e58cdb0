"""
Board state for Lines of Action.

The grid is an 8x8 numpy array of ``Piece`` codes indexed ``[row - 1, col - 1]``.
Moves are applied in place and undone from a history stack, so search code
must pair every ``make_move`` with a ``retract`` in strict LIFO order.
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple, Union, overload

import numpy as np
from numpy.typing import NDArray

from .moves import Move, col_of, row_of
from .types import DIRECTIONS, M, Direction, Piece, Square, in_bounds

BoardArray = NDArray[np.int8]

_E, _B, _W = Piece.EMPTY, Piece.BLACK, Piece.WHITE
_EMPTY = 0  # grid code of an empty square

# The standard starting position, row 1 first.
INITIAL_PIECES: Tuple[Tuple[Piece, ...], ...] = (
    (_E, _B, _B, _B, _B, _B, _B, _E),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_E, _B, _B, _B, _B, _B, _B, _E),
)

# 8-neighbourhood offsets (drow, dcol) used by the contiguity test
_NEIGHBOURS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


class Board:
    """A Lines of Action position with an undo history."""

    def __init__(self, contents: Optional[Sequence[Sequence[Piece]]] = None,
                 turn: Piece = Piece.BLACK) -> None:
        """A board holding CONTENTS (row 1 first) with TURN to move.

        With no CONTENTS the board is set to the standard initial position.
        """
        self._grid: BoardArray = np.zeros((M, M), dtype=np.int8)
        self._moves: List[Move] = []
        self._turn: Piece = Piece.BLACK
        self.initialize(INITIAL_PIECES if contents is None else contents, turn)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def initialize(self, contents: Sequence[Sequence[Piece]], side: Piece) -> None:
        """Set my state to CONTENTS with SIDE to move, clearing history."""
        grid = np.array([[int(p) for p in row] for row in contents], dtype=np.int8)
        if grid.shape != (M, M):
            raise ValueError(f"board contents must be {M}x{M}, got {grid.shape}")
        assert side is not Piece.EMPTY
        self._moves.clear()
        self._grid = grid
        self._turn = side

    def clear(self) -> None:
        """Return to the standard initial position with black to move."""
        self.initialize(INITIAL_PIECES, Piece.BLACK)

    def copy_from(self, board: "Board") -> None:
        """Set my state to a copy of BOARD."""
        if board is self:
            return
        self._grid = board._grid.copy()
        self._moves = list(board._moves)
        self._turn = board._turn

    def copy(self) -> "Board":
        new = Board.__new__(Board)
        new._grid = self._grid.copy()
        new._moves = list(self._moves)
        new._turn = self._turn
        return new

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    @overload
    def get(self, col: str) -> Piece: ...

    @overload
    def get(self, col: int, row: int) -> Piece: ...

    def get(self, col: Union[int, str], row: Optional[int] = None) -> Piece:
        """Contents of column COL, row ROW, or of the designator COL ("c4")."""
        if isinstance(col, str):
            col, row = col_of(col), row_of(col)
        assert row is not None and in_bounds(col, row), f"({col}, {row}) off board"
        return Piece(int(self._grid[row - 1, col - 1]))

    def set(self, col: int, row: int, piece: Piece,
            next_side: Optional[Piece] = None) -> None:
        """Put PIECE at (COL, ROW); if NEXT_SIDE is given it moves next."""
        assert in_bounds(col, row), f"({col}, {row}) off board"
        self._grid[row - 1, col - 1] = int(piece)
        if next_side is not None:
            self._turn = next_side

    @property
    def turn(self) -> Piece:
        """The side to move."""
        return self._turn

    @turn.setter
    def turn(self, side: Piece) -> None:
        assert side is not Piece.EMPTY
        self._turn = side

    @property
    def grid(self) -> BoardArray:
        """Read-only view of the grid, indexed [row - 1, col - 1]."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._moves)

    def moves_made(self) -> int:
        """Moves made and not retracted."""
        return len(self._moves)

    def count(self, side: Piece) -> int:
        return int(np.count_nonzero(self._grid == side))

    def positions(self, side: Piece) -> List[Square]:
        """Squares (col, row) holding SIDE, in row-major order."""
        return [(int(c) + 1, int(r) + 1) for r, c in np.argwhere(self._grid == side)]

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def make_move(self, move: Move) -> None:
        """Assuming is_legal(MOVE), make MOVE."""
        assert self.is_legal(move), f"illegal move {move}"
        self._moves.append(move)
        self.set(move.col1, move.row1, move.moved)
        self.set(move.col0, move.row0, Piece.EMPTY)
        self._turn = self._turn.opposite()

    def retract(self) -> None:
        """Undo the most recent move. Requires moves_made() > 0."""
        assert self._moves, "retract with no moves made"
        move = self._moves.pop()
        self.set(move.col1, move.row1, move.replaced)
        self.set(move.col0, move.row0, move.moved)
        self._turn = self._turn.opposite()

    def piece_count_along(self, col: int, row: int, direction: Direction) -> int:
        """Pieces of either colour on the whole line through (COL, ROW) along DIRECTION."""
        grid = self._grid
        dc, dr = direction.value
        count = 1 if grid[row - 1, col - 1] != _EMPTY else 0
        for sc, sr in ((dc, dr), (-dc, -dr)):
            c, r = col + sc, row + sr
            while 1 <= c <= M and 1 <= r <= M:
                if grid[r - 1, c - 1] != _EMPTY:
                    count += 1
                c += sc
                r += sr
        return count

    def _path_clear(self, col: int, row: int, dc: int, dr: int, length: int,
                    side: int) -> bool:
        """True iff the LENGTH - 1 squares after (COL, ROW) hold no enemy of SIDE."""
        grid = self._grid
        for step in range(1, length):
            p = grid[row + dr * step - 1, col + dc * step - 1]
            if p != _EMPTY and p != side:
                return False
        return True

    def is_legal(self, move: Move) -> bool:
        """True iff MOVE is legal for the side to move.

        MOVE's recorded pieces must still match the board.
        """
        if not move.is_linear():
            return False
        if (move.moved is not self.get(move.col0, move.row0)
                or move.replaced is not self.get(move.col1, move.row1)):
            return False
        if move.moved is not self._turn or move.replaced is self._turn:
            return False
        direction = move.direction()
        dc, dr = direction.value
        length = move.length()
        if length != self.piece_count_along(move.col0, move.row0, direction):
            return False
        return self._path_clear(move.col0, move.row0, dc, dr, length, int(self._turn))

    def legal_moves(self) -> Iterator[Move]:
        """Lazily yield the legal moves for the side to move.

        Order is rows 1..8, then columns 1..8, then directions N..NW. Search
        move ordering and tie-breaks depend on it.
        """
        grid = self._grid
        side = self._turn
        code = int(side)
        for row in range(1, M + 1):
            for col in range(1, M + 1):
                if grid[row - 1, col - 1] != code:
                    continue
                for direction in DIRECTIONS:
                    dc, dr = direction.value
                    length = self.piece_count_along(col, row, direction)
                    col1, row1 = col + dc * length, row + dr * length
                    if not (1 <= col1 <= M and 1 <= row1 <= M):
                        continue
                    target = int(grid[row1 - 1, col1 - 1])
                    if target == code or not self._path_clear(col, row, dc, dr, length, code):
                        continue
                    yield Move(col, row, col1, row1, side, Piece(target))

    def __iter__(self) -> Iterator[Move]:
        return self.legal_moves()

    def has_legal_move(self) -> bool:
        """True if the side to move has at least one legal move."""
        return next(self.legal_moves(), None) is not None

    # ------------------------------------------------------------------
    # Game end
    # ------------------------------------------------------------------
    def game_over(self) -> bool:
        """True iff either side has all its pieces contiguous."""
        return self.pieces_contiguous(Piece.BLACK) or self.pieces_contiguous(Piece.WHITE)

    def pieces_contiguous(self, side: Piece) -> bool:
        """True iff every SIDE piece is 8-connected to the first one.

        A side with no pieces counts as contiguous.
        """
        cells = np.argwhere(self._grid == side)
        if len(cells) == 0:
            return True
        start = int(cells[0][0]) * M + int(cells[0][1])
        visited = {start}
        stack = [start]
        while stack:
            r, c = divmod(stack.pop(), M)
            for dr, dc in _NEIGHBOURS:
                nr, nc = r + dr, c + dc
                if 0 <= nr < M and 0 <= nc < M and self._grid[nr, nc] == side:
                    idx = nr * M + nc
                    if idx not in visited:
                        visited.add(idx)
                        stack.append(idx)
        return len(visited) == len(cells)

    def winner(self) -> Optional[Piece]:
        """The winning side, or None while the game is in progress.

        If a move leaves both sides contiguous, the side that made it wins.
        """
        black = self.pieces_contiguous(Piece.BLACK)
        white = self.pieces_contiguous(Piece.WHITE)
        if black and white:
            return self._turn.opposite()
        if black:
            return Piece.BLACK
        if white:
            return Piece.WHITE
        return None

    # ------------------------------------------------------------------
    # Comparison and debug output
    # ------------------------------------------------------------------
    def key(self) -> Tuple[bytes, int]:
        """Hashable snapshot of the grid and side to move."""
        return self._grid.tobytes(), int(self._turn)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._turn is other._turn and np.array_equal(self._grid, other._grid)

    __hash__ = None  # type: ignore[assignment]

    def dump(self) -> str:
        """Fixed-format text dump, row 8 at the top."""
        lines = ["==="]
        for row in range(M, 0, -1):
            lines.append("    " + " ".join(self.get(col, row).abbrev for col in range(1, M + 1)))
        lines.append(f"Next move: {self._turn.full_name}")
        lines.append("===")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.dump()

    def __repr__(self) -> str:
        return f"Board(turn={self._turn.full_name}, moves_made={len(self._moves)})"


def initial_board() -> Board:
    """A new board in the standard initial position, black to move."""
    return Board()
