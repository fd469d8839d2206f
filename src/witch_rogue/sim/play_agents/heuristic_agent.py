"""Heuristic agent -- walks the shortest path to the nearest gold.

Decision order each turn:

1. Breadth-first search to the nearest gold that keeps clear of monsters
   and of the tiles next to them (where an ambush can land).
2. Failing that, the nearest gold avoiding only the monster tiles.
3. Failing that, a random open neighbour that is not a monster.

Monsters cannot be killed, so the agent never walks into one on purpose.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from witch_rogue.sim.core.grid import CARDINALS, Direction, Position
from witch_rogue.sim.core.rng import GameRNG
from witch_rogue.sim.play_agents.base import PlayAgent

if TYPE_CHECKING:
    from witch_rogue.sim.core.game_state import GameState


class HeuristicAgent(PlayAgent):
    """Gold-seeking agent that steers around monsters.

    Parameters
    ----------
    rng:
        Used only to break out of dead ends.
    """

    def __init__(self, rng: GameRNG | None = None) -> None:
        self._rng = rng or GameRNG(seed=0)

    def choose_direction(self, state: GameState) -> Direction:
        monsters = {m.position for m in state.monsters}
        danger = {
            p.step(d) for p in monsters for d in CARDINALS
        } | monsters

        for blocked in (danger, monsters):
            step = self._first_step_to_gold(state, blocked)
            if step is not None:
                return step

        pos = state.player.position
        safe = [
            d for d in CARDINALS
            if state.grid.is_floor(pos.step(d)) and pos.step(d) not in monsters
        ]
        return self._rng.random_choice(safe or list(CARDINALS))

    @staticmethod
    def _first_step_to_gold(
        state: GameState, blocked: set[Position],
    ) -> Direction | None:
        """First direction on a shortest path to any gold, or ``None``.

        Gold tiles are enterable even when listed in *blocked*, unless a
        monster is standing on them.
        """
        goals = {g.position for g in state.golds}
        goals -= {m.position for m in state.monsters}
        start = state.player.position
        first: dict[Position, Direction] = {}
        queue: deque[Position] = deque()

        for d in CARDINALS:
            nxt = start.step(d)
            if state.grid.is_floor(nxt) and (nxt in goals or nxt not in blocked):
                if nxt in goals:
                    return d
                first[nxt] = d
                queue.append(nxt)

        while queue:
            current = queue.popleft()
            for d in CARDINALS:
                nxt = current.step(d)
                if nxt in first or nxt == start or not state.grid.is_floor(nxt):
                    continue
                if nxt in goals:
                    return first[current]
                if nxt in blocked:
                    continue
                first[nxt] = first[current]
                queue.append(nxt)
        return None
