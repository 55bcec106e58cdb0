"""
Position evaluation for Lines of Action.

The heuristic rewards a side whose pieces are packed tightly around their own
centroid and sit close to the middle of the board, and penalizes the same
features for the opponent.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .board import Board
from .types import M, Piece

# Geometric centre of the board (columns and rows are 1..8)
CENTER_COL: float = 4.5
CENTER_ROW: float = 4.5

# Value of a term whose distance total is already minimal (zero denominator).
# Every finite term is at most 1.0.
PACKED_TERM: float = 2.0

_CORNERS = {(1, 1), (1, M), (M, 1), (M, M)}


def _coords(board: Board, side: Piece) -> Tuple[NDArray[np.int64], NDArray[np.int64]]:
    """Columns and rows (1-based) of SIDE's pieces."""
    cells = np.argwhere(board.grid == side)
    return cells[:, 1] + 1, cells[:, 0] + 1


def _king_distance(dc: NDArray, dr: NDArray) -> NDArray:
    return dc + dr - np.minimum(dc, dr)


def centroid(board: Board, side: Piece) -> Optional[Tuple[int, int, int]]:
    """(col, row, count) of SIDE's centre of mass, truncated to integers."""
    cols, rows = _coords(board, side)
    count = len(cols)
    if count == 0:
        return None
    return int(cols.sum()) // count, int(rows.sum()) // count, count


def distance_from(board: Board, side: Piece, col: int, row: int) -> int:
    """Sum of king-move distances from (COL, ROW) to each SIDE piece."""
    cols, rows = _coords(board, side)
    return int(_king_distance(np.abs(cols - col), np.abs(rows - row)).sum())


def theoretical_minimum(count: int, col: int, row: int) -> int:
    """Smallest distance total COUNT pieces could have around (COL, ROW)."""
    n = count - 1
    if (col, row) in _CORNERS:
        return n
    if col == 0 or row == 0:
        return n if n <= 5 else 5 + 2 * (n - 5)
    return n if n <= 8 else 8 + 2 * (n - 8)


def centralization_distance(board: Board, side: Piece) -> int:
    """Sum of truncated king-move distances of SIDE's pieces from the centre."""
    cols, rows = _coords(board, side)
    dc = np.trunc(np.abs(CENTER_COL - cols)).astype(np.int64)
    dr = np.trunc(np.abs(CENTER_ROW - rows)).astype(np.int64)
    return int(_king_distance(dc, dr).sum())


def compactness_term(board: Board, side: Piece) -> float:
    com = centroid(board, side)
    if com is None:
        return 0.0
    col, row, count = com
    excess = distance_from(board, side, col, row) - theoretical_minimum(count, col, row)
    return PACKED_TERM if excess <= 0 else 1.0 / excess


def centralization_term(board: Board, side: Piece) -> float:
    if board.count(side) == 0:
        return 0.0
    total = centralization_distance(board, side)
    return PACKED_TERM if total == 0 else 1.0 / total


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate_position(self, board: Board, side: Piece) -> float:  # pragma: no cover
        """Evaluate BOARD for SIDE; higher is better for SIDE."""
        raise NotImplementedError

    def __call__(self, board: Board, side: Piece) -> float:
        return self.evaluate_position(board, side)


class CompactnessEvaluator(Evaluator):
    """Compactness plus centralization, scored as own minus opponent's."""

    @staticmethod
    def side_score(board: Board, side: Piece) -> float:
        return compactness_term(board, side) + centralization_term(board, side)

    def evaluate_position(self, board: Board, side: Piece) -> float:
        return self.side_score(board, side) - self.side_score(board, side.opposite())


def evaluate(board: Board, side: Piece) -> float:
    """Evaluate BOARD for SIDE with the default heuristic."""
    return CompactnessEvaluator().evaluate_position(board, side)


# Factory to get an Evaluator-conforming object

def get_evaluator() -> Evaluator:
    return CompactnessEvaluator()


__all__ = [
    "Evaluator",
    "CompactnessEvaluator",
    "get_evaluator",
    "evaluate",
    "centroid",
    "distance_from",
    "theoretical_minimum",
    "centralization_distance",
    "compactness_term",
    "centralization_term",
    "PACKED_TERM",
]
