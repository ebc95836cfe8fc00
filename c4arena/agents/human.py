"""Human-in-the-loop agent that defers input handling to a CLI prompt function."""

from __future__ import annotations

from typing import Callable

import numpy as np

from c4arena.agents.base import Agent
from c4arena.engine import Connect4Config, Stone

PromptFn = Callable[[Connect4Config, np.ndarray, Stone, str], int]


class HumanAgent(Agent):
    def __init__(self, name: str, prompt_fn: PromptFn) -> None:
        self.name = name
        self.prompt_fn = prompt_fn

    def select_move(self, cfg: Connect4Config, board: np.ndarray, color: Stone) -> int:
        return self.prompt_fn(cfg, board, color, self.name)
