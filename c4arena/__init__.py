"""Connect-4 arena package (engine + search + agents + CLI)."""

from c4arena.engine import NO_MOVE, Connect4Config, Stone
from c4arena.search import SearchResult, SearchStats, choose_move

__all__ = ["NO_MOVE", "Connect4Config", "Stone", "SearchResult", "SearchStats", "choose_move"]
