"""
Move search for Lines of Action.

``SearchEngine`` is a depth-bounded minimax that threads a single cutoff bound
from parent to child. It is not alpha-beta: a child stops as soon as its best
value reaches the parent's current best, which prunes aggressively but can
discard moves a full search would prefer.
"""
from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import Optional

from config import get_engine_settings

from .board import Board
from .eval import Evaluator, get_evaluator
from .moves import Move
from .types import GameResult, Piece, SearchEngineProtocol

logger = logging.getLogger(__name__)

# Plies searched before the evaluator takes over
SEARCH_DEPTH: int = 2
# Score of a position whose side already has all pieces connected
WIN_SCORE: float = sys.float_info.max
# Score of a lost position, and the starting value at every node
WORST_SCORE: float = -100.0


class SearchEngine:
    """Minimax search with a one-sided cutoff over a working board copy."""

    def __init__(self, evaluator: Optional[Evaluator] = None,
                 trace: Optional[bool] = None) -> None:
        self.evaluator: Evaluator = evaluator or get_evaluator()
        self.trace: bool = get_engine_settings().trace_search if trace is None else trace
        self.nodes: int = 0

    def search(self, board: Board, side: Piece, depth: int = SEARCH_DEPTH) -> GameResult:
        """Return (score, best_move) for SIDE moving on BOARD.

        BOARD itself is not modified; the search runs on a copy with SIDE to move.
        """
        if depth < 0:
            raise ValueError(f"search depth must be non-negative, got {depth}")
        work = board.copy()
        work.turn = side
        self.nodes = 0
        score, move = self.find_best_move(side, work, depth, WIN_SCORE)
        logger.debug("searched %d nodes for %s: %s (%.4g)", self.nodes, side, move, score)
        return score, move

    def find_best_move(self, side: Piece, board: Board, depth: int,
                       cutoff: float) -> GameResult:
        """Best move DEPTH plies ahead for SIDE, pruning once CUTOFF is reached.

        BOARD must have SIDE to move. It is mutated during the search and
        restored before returning.
        """
        self.nodes += 1
        if board.pieces_contiguous(side):
            return WIN_SCORE, None
        if board.pieces_contiguous(side.opposite()):
            return WORST_SCORE, None
        if depth == 0:
            return self.guess_best_move(side, board)

        value = WORST_SCORE
        best: Optional[Move] = None
        for move in board.legal_moves():
            board.make_move(move)
            try:
                response, _ = self.find_best_move(side.opposite(), board, depth - 1, value)
            finally:
                board.retract()
            if -response > value:
                value = -response
                best = move
                if self.trace:
                    logger.debug("depth %d: %s improves %s to %.4g", depth, move, side, value)
                if value >= cutoff:
                    break
        return value, best

    def guess_best_move(self, side: Piece, board: Board) -> GameResult:
        """One ply of greedy search scored by the evaluator."""
        value = WORST_SCORE
        best: Optional[Move] = None
        for move in board.legal_moves():
            board.make_move(move)
            try:
                score = self.evaluator.evaluate_position(board, side)
            finally:
                board.retract()
            if score > value:
                value = score
                best = move
        return value, best


def get_engine() -> SearchEngine:
    """Get a new search engine instance."""
    return SearchEngine()


def find_best_move(board: Board, side: Piece, depth: int = SEARCH_DEPTH,
                   engine: Optional[SearchEngineProtocol] = None) -> Optional[Move]:
    """Search for SIDE, falling back to the first legal move if none is chosen."""
    _, move = (engine or get_engine()).search(board, side, depth)
    if move is None:
        probe = board.copy()
        probe.turn = side
        move = next(probe.legal_moves(), None)
    return move


class SearchStrategy(ABC):
    """Abstract interface for search strategies."""

    @abstractmethod
    def search(self, board: Board, side: Piece, depth: int) -> GameResult:  # pragma: no cover
        raise NotImplementedError


class MinimaxSearchStrategy(SearchStrategy):
    """Adapter around SearchEngine implementing the interface."""

    def __init__(self, engine: Optional[SearchEngine] = None) -> None:
        self._engine = engine or SearchEngine()

    def search(self, board: Board, side: Piece, depth: int = SEARCH_DEPTH) -> GameResult:
        return self._engine.search(board, side, depth)


def get_search_strategy() -> SearchStrategy:
    """Factory for the default search strategy."""
    return MinimaxSearchStrategy()


class MachinePlayer:
    """Chooses moves for one side at the fixed search depth."""

    def __init__(self, side: Piece, engine: Optional[SearchEngineProtocol] = None,
                 announce: Optional[bool] = None) -> None:
        assert side is not Piece.EMPTY
        self.side = side
        self.engine: SearchEngineProtocol = engine or SearchEngine()
        self.announce = get_engine_settings().announce_moves if announce is None else announce

    def make_move(self, board: Board) -> Optional[Move]:
        """The move to play on BOARD, or None if SIDE has no legal move."""
        move = find_best_move(board, self.side, engine=self.engine)
        if self.announce and move is not None:
            logger.info("%s::%s", self.side.abbrev.upper(), move)
        return move


__all__ = [
    "SearchEngine",
    "SearchStrategy",
    "MinimaxSearchStrategy",
    "MachinePlayer",
    "get_engine",
    "get_search_strategy",
    "find_best_move",
    "SEARCH_DEPTH",
    "WIN_SCORE",
    "WORST_SCORE",
]
