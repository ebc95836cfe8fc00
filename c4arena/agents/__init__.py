"""Agent implementations for Connect-4."""

from c4arena.agents.base import Agent
from c4arena.agents.greedy import GreedyAgent
from c4arena.agents.human import HumanAgent
from c4arena.agents.search_agent import SearchAgent

__all__ = ["Agent", "GreedyAgent", "HumanAgent", "SearchAgent"]
