"""Static positional evaluation used at the search horizon."""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from c4arena.engine import Connect4Config, Stone, winning_lines

# Hand-tuned table for the 7x4 board, bottom row first.
_REFERENCE_WEIGHTS = {
    (7, 4, 4): (
        3, 4, 6, 7, 6, 4, 3,
        2, 4, 6, 7, 6, 4, 2,
        2, 4, 6, 7, 6, 4, 2,
        3, 4, 6, 7, 6, 4, 3,
    ),
}


@lru_cache(maxsize=None)
def weight_table(cfg: Connect4Config) -> np.ndarray:
    """
    Positional weight per cell.

    Boards without a hand-tuned table weigh each cell by the number of winning
    lines passing through it.
    """

    reference = _REFERENCE_WEIGHTS.get((cfg.width, cfg.height, cfg.k))
    if reference is not None:
        weights = np.array(reference, dtype=np.int64)
    else:
        weights = np.zeros((cfg.size,), dtype=np.int64)
        np.add.at(weights, winning_lines(cfg).ravel(), 1)
        # Floor of 1 for cells outside every line.
        weights = np.maximum(weights, 1)
    weights.setflags(write=False)
    return weights


def max_score(cfg: Connect4Config) -> int:
    return int(weight_table(cfg).sum())


def score(cfg: Connect4Config, board: np.ndarray, color: Stone) -> int:
    # Cells are +1/-1/0, so the dot product is (RED weight - BLUE weight).
    return int(np.dot(weight_table(cfg), board.astype(np.int64))) * int(color)
