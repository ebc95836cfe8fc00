"""Board model, win detection and move enumeration for Connect-4.

The board is a flat ``int8`` buffer of length ``width * height``. Index ``i``
lives at row ``i // width`` and column ``i % width``; row 0 is the bottom row:

    21 22 23 24 25 26 27
    14 15 16 17 18 19 20
     7  8  9 10 11 12 13
     0  1  2  3  4  5  6

Cells hold ``0`` (empty), ``+1`` (RED) or ``-1`` (BLUE). Boards are mutated in
place; search code places a stone, recurses and removes it again.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

import numpy as np

NO_MOVE = -1

EMPTY = 0


class Stone(enum.IntEnum):
    RED = 1
    BLUE = -1

    def opponent(self) -> "Stone":
        return Stone(-self.value)

    @property
    def symbol(self) -> str:
        return "X" if self is Stone.RED else "O"


@dataclass(frozen=True)
class Connect4Config:
    width: int = 7
    height: int = 4
    k: int = 4

    @property
    def size(self) -> int:
        return self.width * self.height

    def validate(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("width/height must be >= 1")
        if self.k < 2:
            raise ValueError("k must be >= 2")
        if self.k > max(self.width, self.height):
            raise ValueError("k must be <= max(width, height)")


def new_board(cfg: Connect4Config) -> np.ndarray:
    cfg.validate()
    return np.zeros((cfg.size,), dtype=np.int8)


def to_index(cfg: Connect4Config, row: int, col: int) -> int:
    if not (0 <= row < cfg.height and 0 <= col < cfg.width):
        raise ValueError(f"({row}, {col}) is off the board")
    return row * cfg.width + col


def to_row_col(cfg: Connect4Config, index: int) -> Tuple[int, int]:
    if not (0 <= index < cfg.size):
        raise ValueError(f"index {index} out of range")
    return index // cfg.width, index % cfg.width


def is_empty(cfg: Connect4Config, board: np.ndarray, index: int) -> bool:
    return int(board[index]) == EMPTY


def is_legal_move(cfg: Connect4Config, board: np.ndarray, index: int) -> bool:
    """True if ``index`` is on the board, empty, and supported from below."""

    if index < 0 or index >= cfg.size:
        return False
    if int(board[index]) != EMPTY:
        return False
    return index < cfg.width or int(board[index - cfg.width]) != EMPTY


def place(cfg: Connect4Config, board: np.ndarray, index: int, color: Stone) -> None:
    if not is_legal_move(cfg, board, index):
        raise ValueError(f"cannot play to position {index} @ {to_debug_string(cfg, board)}")
    board[index] = color


def remove(cfg: Connect4Config, board: np.ndarray, index: int) -> None:
    """Take back the stone at ``index``; it must be the top stone of its column."""

    if int(board[index]) == EMPTY:
        raise ValueError(f"cannot remove from empty position {index}")
    above = index + cfg.width
    if above < cfg.size and int(board[above]) != EMPTY:
        raise ValueError(f"cannot remove position {index}: stone above it at {above}")
    board[index] = EMPTY


def lowest_empty_in_column(cfg: Connect4Config, board: np.ndarray, col: int) -> Optional[int]:
    for index in range(col, cfg.size, cfg.width):
        if int(board[index]) == EMPTY:
            return index
    return None


def empty_count(cfg: Connect4Config, board: np.ndarray) -> int:
    return int(np.count_nonzero(board == EMPTY))


def is_full(cfg: Connect4Config, board: np.ndarray) -> bool:
    return empty_count(cfg, board) == 0


@lru_cache(maxsize=None)
def column_order(cfg: Connect4Config) -> Tuple[int, ...]:
    # Center columns first, ties to the left.
    center = (cfg.width - 1) / 2.0
    return tuple(sorted(range(cfg.width), key=lambda c: abs(c - center)))


def legal_moves(cfg: Connect4Config, board: np.ndarray) -> List[int]:
    moves: List[int] = []
    for col in column_order(cfg):
        index = lowest_empty_in_column(cfg, board, col)
        if index is not None:
            moves.append(index)
    return moves


@lru_cache(maxsize=None)
def winning_lines(cfg: Connect4Config) -> np.ndarray:
    """
    Every run of ``k`` cells that wins the game, as an ``(n_lines, k)`` index array.

    Runs are generated from each start cell in four directions (right, up,
    up-right, up-left) and kept only if they stay on the board.
    """

    cfg.validate()
    lines: List[List[int]] = []
    for r in range(cfg.height):
        for c in range(cfg.width):
            for dr, dc in [(0, 1), (1, 0), (1, 1), (1, -1)]:
                end_r = r + dr * (cfg.k - 1)
                end_c = c + dc * (cfg.k - 1)
                if not (0 <= end_r < cfg.height and 0 <= end_c < cfg.width):
                    continue
                lines.append([(r + dr * i) * cfg.width + (c + dc * i) for i in range(cfg.k)])
    result = np.array(lines, dtype=np.intp).reshape(-1, cfg.k)
    result.setflags(write=False)
    return result


def is_winning(cfg: Connect4Config, board: np.ndarray, color: Stone) -> bool:
    lines = winning_lines(cfg)
    if lines.shape[0] == 0:
        return False
    return bool(np.any(np.all(board[lines] == int(color), axis=1)))


def winner(cfg: Connect4Config, board: np.ndarray) -> Optional[Stone]:
    for color in Stone:
        if is_winning(cfg, board, color):
            return color
    return None


def to_debug_string(cfg: Connect4Config, board: np.ndarray) -> str:
    """Single-line dump, bottom row first, each row terminated by ``-``."""

    sym = {EMPTY: ".", int(Stone.RED): "X", int(Stone.BLUE): "O"}
    parts: List[str] = []
    for r in range(cfg.height):
        parts.append("".join(sym[int(board[r * cfg.width + c])] for c in range(cfg.width)))
        parts.append("-")
    return "".join(parts)


def board_from_rows(cfg: Connect4Config, rows: Sequence[str]) -> np.ndarray:
    """
    Build a board from text rows given top row first, e.g. ``["....", "XO.."]``.

    ``X`` is RED, ``O`` is BLUE, ``.`` is empty. Floating stones are rejected.
    """

    if len(rows) != cfg.height:
        raise ValueError(f"expected {cfg.height} rows, got {len(rows)}")
    board = new_board(cfg)
    sym = {".": EMPTY, "X": int(Stone.RED), "O": int(Stone.BLUE)}
    for i, text in enumerate(rows):
        if len(text) != cfg.width:
            raise ValueError(f"row {i} has {len(text)} cells, expected {cfg.width}")
        r = cfg.height - 1 - i
        for c, ch in enumerate(text):
            if ch not in sym:
                raise ValueError(f"unknown cell symbol {ch!r}")
            board[r * cfg.width + c] = sym[ch]

    for index in range(cfg.width, cfg.size):
        if int(board[index]) != EMPTY and int(board[index - cfg.width]) == EMPTY:
            raise ValueError(f"floating stone at position {index}")
    return board
