"""Lines of Action engine: thin re-exports of the public API.

Usage examples:
    from loa import Board, Move, Piece
    from loa import SearchEngine, MachinePlayer
"""
from __future__ import annotations

from .types import Direction, Piece, DIRECTIONS, M
from .moves import InvalidSquareError, Move, parse_move_str, parse_square, square_name
from .board import Board, INITIAL_PIECES, initial_board
from .eval import CompactnessEvaluator, Evaluator, evaluate, get_evaluator
from .search import (
    MachinePlayer,
    MinimaxSearchStrategy,
    SearchEngine,
    SearchStrategy,
    find_best_move,
    get_engine,
    get_search_strategy,
)

__all__ = [
    "Direction",
    "Piece",
    "DIRECTIONS",
    "M",
    "InvalidSquareError",
    "Move",
    "parse_move_str",
    "parse_square",
    "square_name",
    "Board",
    "INITIAL_PIECES",
    "initial_board",
    "CompactnessEvaluator",
    "Evaluator",
    "evaluate",
    "get_evaluator",
    "MachinePlayer",
    "MinimaxSearchStrategy",
    "SearchEngine",
    "SearchStrategy",
    "find_best_move",
    "get_engine",
    "get_search_strategy",
]
