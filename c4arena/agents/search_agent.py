"""Search-based agent: negamax with optional alpha-beta pruning."""

from __future__ import annotations

import logging
import time
from typing import Optional

import numpy as np

from c4arena.agents.base import Agent
from c4arena.engine import Connect4Config, Stone
from c4arena.search import SearchResult, choose_move

logger = logging.getLogger(__name__)


class SearchAgent(Agent):
    """
    Looks ``max_depth`` plies ahead and scores the horizon with the positional
    evaluator.

    With ``pruning=False`` every node is expanded (plain minimax). Both modes pick
    the same move; pruning only saves work, which shows up in ``last_result.stats``.
    """

    def __init__(self, name: str, *, max_depth: int = 8, pruning: bool = True) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        self.name = name
        self.max_depth = max_depth
        self.pruning = pruning
        self.last_result: Optional[SearchResult] = None

    def select_move(self, cfg: Connect4Config, board: np.ndarray, color: Stone) -> int:
        start = time.perf_counter()
        result = choose_move(cfg, board, color, self.max_depth, pruning=self.pruning)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.last_result = result

        for move, value in result.root_scores.items():
            logger.debug("%s: index %d value %d", self.name, move, value)
        logger.info(
            "%s: played %d (score %d, depth %d) in %.1f ms, nodes %d, cut offs %d",
            self.name,
            result.move,
            result.score,
            result.depth,
            elapsed_ms,
            result.stats.nodes,
            result.stats.cutoffs,
        )
        return result.move
