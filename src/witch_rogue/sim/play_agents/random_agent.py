"""Random agent -- picks a walkable direction uniformly at random.

Used as the baseline for batch runs: it exercises the whole turn loop and
gives a lower bound on how far a level sequence can be survived.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from witch_rogue.sim.core.grid import CARDINALS
from witch_rogue.sim.core.rng import GameRNG
from witch_rogue.sim.play_agents.base import PlayAgent

if TYPE_CHECKING:
    from witch_rogue.sim.core.game_state import GameState
    from witch_rogue.sim.core.grid import Direction


class RandomAgent(PlayAgent):
    """Agent that wanders randomly.

    Parameters
    ----------
    rng:
        Seeded RNG for deterministic randomness.  If ``None``, a default
        ``GameRNG(seed=0)`` is created.
    """

    def __init__(self, rng: GameRNG | None = None) -> None:
        self._rng = rng or GameRNG(seed=0)

    def choose_direction(self, state: GameState) -> Direction:
        """Random floor-bound direction, or any direction if boxed in."""
        pos = state.player.position
        open_dirs = [d for d in CARDINALS if state.grid.is_floor(pos.step(d))]
        return self._rng.random_choice(open_dirs or list(CARDINALS))
