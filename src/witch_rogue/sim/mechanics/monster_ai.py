"""Monster wandering.

After every accepted player move each monster may take one random step.
A monster never walks into wall, off the grid, or onto another monster.
Stepping toward the player's tile is an ambush: the player is hurt and the
monster stays where it was.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from witch_rogue.sim.core.constants import monster_move_chance
from witch_rogue.sim.core.grid import CARDINALS
from witch_rogue.sim.mechanics.damage import ambush_damage, hurt_player

if TYPE_CHECKING:
    from witch_rogue.sim.core.game_state import GameState
    from witch_rogue.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)


def step_monsters(state: GameState, rng: GameRNG) -> tuple[int, int]:
    """Move every monster once, in list order.

    Occupancy is checked against the monsters' live positions, so a tile
    vacated earlier in the same step can be taken by a later monster.

    Returns ``(ambushes, hp_lost)``.
    """
    move_chance = monster_move_chance(state.level)
    occupied = {m.position for m in state.monsters}
    player_pos = state.player.position
    ambushes = 0
    hp_lost = 0

    for monster in state.monsters:
        if not rng.chance(move_chance):
            continue

        direction = rng.random_choice(CARDINALS)
        target = monster.position.step(direction)

        if not state.grid.is_floor(target) or target in occupied:
            continue

        if target == player_pos:
            ambushes += 1
            hp_lost += hurt_player(state, ambush_damage(state.level))
            continue

        occupied.discard(monster.position)
        occupied.add(target)
        monster.position = target

    if ambushes:
        logger.debug("Turn %d: %d ambushes for %d hp", state.turn, ambushes, hp_lost)
    return ambushes, hp_lost
