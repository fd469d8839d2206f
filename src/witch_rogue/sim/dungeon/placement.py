"""Entity placement: player start, gold and monsters.

Every entity is drawn by rejection sampling inside the interior margin.
A sample is rejected if it lands on wall, on the player start, or on a tile
already taken by gold or a monster.  After ``PLACEMENT_ATTEMPTS`` misses the
entity is simply left out; a level with fewer entities is still playable.
"""

from __future__ import annotations

import logging

from witch_rogue.sim.core.constants import (
    EDGE_MARGIN,
    PLACEMENT_ATTEMPTS,
    gold_count,
    monster_count,
)
from witch_rogue.sim.core.entities import GoldPickup, Monster
from witch_rogue.sim.core.grid import GridModel, Position
from witch_rogue.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)


def random_interior_position(grid: GridModel, rng: GameRNG) -> Position:
    """Uniform position at least ``EDGE_MARGIN`` cells from every edge."""
    return Position(
        EDGE_MARGIN + rng.random_below(grid.width - 2 * EDGE_MARGIN),
        EDGE_MARGIN + rng.random_below(grid.height - 2 * EDGE_MARGIN),
    )


def choose_player_start(grid: GridModel, rng: GameRNG) -> Position:
    """Pick where the player begins a level.

    Prefers the grid center, then random interior floor, then the first
    floor cell in row-major order.
    """
    center = Position(grid.width // 2, grid.height // 2)
    if grid.is_floor(center):
        return center

    for _ in range(PLACEMENT_ATTEMPTS):
        pos = random_interior_position(grid, rng)
        if grid.is_floor(pos):
            return pos

    # Repair always leaves at least the first room's center open.
    return next(grid.floor_cells())


class EntityPlacer:
    """Scatters gold and monsters for a level."""

    def place(
        self,
        grid: GridModel,
        level: int,
        player_start: Position,
        rng: GameRNG,
    ) -> tuple[list[GoldPickup], list[Monster]]:
        """Place ``gold_count(level)`` gold then ``monster_count(level)``
        monsters.

        Returns ``(golds, monsters)``; either list may come up short.
        """
        taken: set[Position] = {player_start}

        golds: list[GoldPickup] = []
        wanted_gold = gold_count(level)
        for _ in range(wanted_gold):
            pos = self._sample_free(grid, taken, rng)
            if pos is not None:
                taken.add(pos)
                golds.append(GoldPickup(position=pos))

        monsters: list[Monster] = []
        wanted_monsters = monster_count(level)
        for _ in range(wanted_monsters):
            pos = self._sample_free(grid, taken, rng)
            if pos is not None:
                taken.add(pos)
                monsters.append(Monster(position=pos))

        if len(golds) < wanted_gold or len(monsters) < wanted_monsters:
            logger.warning(
                "Level %d under-placed: gold %d/%d, monsters %d/%d",
                level, len(golds), wanted_gold, len(monsters), wanted_monsters,
            )
        return golds, monsters

    @staticmethod
    def _sample_free(
        grid: GridModel, taken: set[Position], rng: GameRNG,
    ) -> Position | None:
        for _ in range(PLACEMENT_ATTEMPTS):
            pos = random_interior_position(grid, rng)
            if grid.is_floor(pos) and pos not in taken:
                return pos
        return None
