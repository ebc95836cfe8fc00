"""Greedy baseline agent: plays the first free cell, column by column."""

from __future__ import annotations

import numpy as np

from c4arena.agents.base import Agent
from c4arena.engine import Connect4Config, Stone, lowest_empty_in_column


class GreedyAgent(Agent):
    def __init__(self, name: str) -> None:
        self.name = name

    def select_move(self, cfg: Connect4Config, board: np.ndarray, color: Stone) -> int:
        for col in range(cfg.width):
            index = lowest_empty_in_column(cfg, board, col)
            if index is not None:
                return index
        raise ValueError("cannot play at all")
