"""Play agent implementations for headless dungeon runs.

Re-exports the base class and all concrete agent implementations so
consumers can do::

    from witch_rogue.sim.play_agents import PlayAgent, RandomAgent
"""

from .base import PlayAgent
from .heuristic_agent import HeuristicAgent
from .random_agent import RandomAgent

__all__ = ["PlayAgent", "RandomAgent", "HeuristicAgent"]
