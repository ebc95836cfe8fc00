"""Game loop and match runner that pits two agents against each other."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

import numpy as np
from tqdm import trange

from c4arena.agents.base import Agent
from c4arena.engine import (
    NO_MOVE,
    Connect4Config,
    Stone,
    is_legal_move,
    is_winning,
    new_board,
    place,
    to_debug_string,
)

logger = logging.getLogger(__name__)

MoveCallback = Callable[[Connect4Config, np.ndarray, Stone, int], None]


class IllegalMoveError(ValueError):
    def __init__(self, agent: str, index: int, debug: str) -> None:
        super().__init__(f"{agent} cannot play to position {index} @ {debug}")
        self.agent = agent
        self.index = index
        self.debug = debug


@dataclass(frozen=True)
class GameOutcome:
    winner: Optional[Stone]  # None means draw
    moves: Tuple[int, ...]
    board: np.ndarray

    @property
    def last_move(self) -> int:
        return self.moves[-1] if self.moves else NO_MOVE


@dataclass
class MatchSummary:
    games: int = 0
    draws: int = 0
    wins: Dict[str, int] = field(default_factory=dict)


def play_game(
    cfg: Connect4Config,
    red: Agent,
    blue: Agent,
    *,
    on_move: Optional[MoveCallback] = None,
) -> GameOutcome:
    """
    Play one game, RED moving first.

    Agents get a copy of the board. Every returned index is checked before it is
    applied.
    """

    if red is blue:
        raise ValueError("must be different players (simply create two instances)")

    board = new_board(cfg)
    moves = []
    agent, color = red, Stone.RED
    for _ in range(cfg.size):
        index = int(agent.select_move(cfg, board.copy(), color))
        if not is_legal_move(cfg, board, index):
            raise IllegalMoveError(agent.name, index, to_debug_string(cfg, board))
        place(cfg, board, index, color)
        moves.append(index)
        logger.debug("%s (%s) -> %d @ %s", agent.name, color.name, index, to_debug_string(cfg, board))
        if on_move is not None:
            on_move(cfg, board, color, index)

        if is_winning(cfg, board, color):
            return GameOutcome(winner=color, moves=tuple(moves), board=board)

        agent, color = (blue, Stone.BLUE) if agent is red else (red, Stone.RED)

    return GameOutcome(winner=None, moves=tuple(moves), board=board)


def play_match(
    cfg: Connect4Config,
    first: Agent,
    second: Agent,
    *,
    games: int,
    progress: bool = True,
) -> MatchSummary:
    """
    Play ``games`` games, alternating which agent gets RED (and thus the first
    move) to reduce first-player bias.
    """

    if games < 1:
        raise ValueError("games must be >= 1")
    if first.name == second.name:
        raise ValueError("agents need distinct names to keep score")

    summary = MatchSummary(wins={first.name: 0, second.name: 0})
    for g in trange(games, desc=f"{first.name} vs {second.name}", disable=not progress, leave=False):
        red, blue = (first, second) if g % 2 == 0 else (second, first)
        outcome = play_game(cfg, red, blue)
        summary.games += 1
        if outcome.winner is None:
            summary.draws += 1
            logger.info("game %d: draw @ %s", g, to_debug_string(cfg, outcome.board))
            continue
        name = red.name if outcome.winner is Stone.RED else blue.name
        summary.wins[name] += 1
        logger.info("game %d: %s wins as %s", g, name, outcome.winner.name)
    return summary
