"""Depth-limited negamax search with alpha-beta pruning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from c4arena.engine import Connect4Config, Stone, empty_count, is_winning, legal_moves, place, remove
from c4arena.evaluation import max_score, score

# A side that has already lost scores -WIN_SCORE; the evaluator never gets close.
WIN_SCORE = 10_000
# Root window bound, outside every reachable score.
INFINITY = 1_000_000


@dataclass
class SearchStats:
    nodes: int = 0
    cutoffs: int = 0


@dataclass(frozen=True)
class SearchResult:
    move: int
    score: int
    depth: int
    stats: SearchStats
    root_scores: Dict[int, int] = field(default_factory=dict)


def alphabeta(
    cfg: Connect4Config,
    board: np.ndarray,
    color: Stone,
    depth: int,
    alpha: int,
    beta: int,
    stats: SearchStats,
) -> int:
    """
    Best score reachable for ``color`` (the side to move) within ``depth`` plies.

    Negamax form: a child's score is negated to get it from our point of view, and
    the window is flipped to ``(-beta, -best)`` on the way down. ``best`` starts at
    ``alpha``, so it is both the best value found here and the lower bound handed
    to the remaining children. Once ``best >= beta`` the opponent would avoid this
    position and the rest of the moves are skipped.
    """

    stats.nodes += 1

    # The previous ply completed a line for the opponent.
    if is_winning(cfg, board, color.opponent()):
        return -WIN_SCORE

    moves = legal_moves(cfg, board)
    if depth == 0 or not moves:
        return score(cfg, board, color)

    best = alpha
    for move in moves:
        place(cfg, board, move, color)
        try:
            value = -alphabeta(cfg, board, color.opponent(), depth - 1, -beta, -best, stats)
        finally:
            remove(cfg, board, move)

        if value > best:
            best = value
        if best >= beta:
            stats.cutoffs += 1
            break
    return best


def minimax(
    cfg: Connect4Config,
    board: np.ndarray,
    color: Stone,
    depth: int,
    stats: SearchStats,
) -> int:
    """Full-width negamax; same terminal rules as :func:`alphabeta`, no pruning."""

    stats.nodes += 1

    if is_winning(cfg, board, color.opponent()):
        return -WIN_SCORE

    moves = legal_moves(cfg, board)
    if depth == 0 or not moves:
        return score(cfg, board, color)

    best = -INFINITY
    for move in moves:
        place(cfg, board, move, color)
        try:
            value = -minimax(cfg, board, color.opponent(), depth - 1, stats)
        finally:
            remove(cfg, board, move)
        if value > best:
            best = value
    return best


def choose_move(
    cfg: Connect4Config,
    board: np.ndarray,
    color: Stone,
    depth: int,
    *,
    pruning: bool = True,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """
    Pick a move for ``color`` by searching ``depth`` plies ahead.

    The board is borrowed: every provisional stone is removed again before this
    returns. Among equally scored moves the first one in :func:`legal_moves`
    order wins.
    """

    if depth < 1:
        raise ValueError("depth must be >= 1")
    if max_score(cfg) >= WIN_SCORE:
        raise ValueError("board too large for the evaluation range")
    if is_winning(cfg, board, color.opponent()):
        raise ValueError(f"{color.opponent().name} has already won")
    moves = legal_moves(cfg, board)
    if not moves:
        raise ValueError("no legal moves available")

    if stats is None:
        stats = SearchStats()
    # Never search past a full board.
    depth = min(depth, empty_count(cfg, board))
    before = board.copy()

    best = -INFINITY
    best_move = moves[0]
    root_scores: Dict[int, int] = {}
    for move in moves:
        place(cfg, board, move, color)
        try:
            if pruning:
                value = -alphabeta(cfg, board, color.opponent(), depth - 1, -INFINITY, -best, stats)
            else:
                value = -minimax(cfg, board, color.opponent(), depth - 1, stats)
        finally:
            remove(cfg, board, move)

        root_scores[move] = value
        if value > best:
            best = value
            best_move = move

    assert np.array_equal(board, before), "search left the board modified"
    return SearchResult(move=best_move, score=best, depth=depth, stats=stats, root_scores=root_scores)
