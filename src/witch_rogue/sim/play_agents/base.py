"""Base class for agents that play the dungeon headlessly.

The batch runner asks an agent for one direction per turn.  Agents see the
full game state but must not mutate it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from witch_rogue.sim.core.game_state import GameState
    from witch_rogue.sim.core.grid import Direction


class PlayAgent(ABC):
    """Base class for AI agents that play the game."""

    @abstractmethod
    def choose_direction(self, state: GameState) -> Direction:
        """Choose the player's next move.

        Parameters
        ----------
        state:
            The current in-progress state, giving the agent full
            observability of the grid, gold and monsters.

        Returns
        -------
        Direction
            One of the four cardinal directions.  Walking into a wall is
            allowed; the turn is simply blocked.
        """
