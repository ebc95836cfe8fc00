"""Abstract base class for Connect-4 agents."""

from __future__ import annotations

import abc

import numpy as np

from c4arena.engine import Connect4Config, Stone


class Agent(abc.ABC):
    """
    Anything that can pick a move.

    ``board`` is a copy owned by the caller for the duration of the call; agents
    may mutate it temporarily but must not keep a reference to it.
    """

    name: str

    @abc.abstractmethod
    def select_move(self, cfg: Connect4Config, board: np.ndarray, color: Stone) -> int:
        raise NotImplementedError
