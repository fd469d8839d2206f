"""Contact damage.

Two ways to get hurt, both scaling with the level:

- **bump**: the player walks into a monster (``5 + level//3``).
- **ambush**: a wandering monster steps onto the player (``4 + level//4``).

Monsters take no damage in either case.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from witch_rogue.sim.core.game_state import GameState


def bump_damage(level: int) -> int:
    return 5 + level // 3


def ambush_damage(level: int) -> int:
    return 4 + level // 4


def hurt_player(state: GameState, amount: int) -> int:
    """Apply *amount* damage to the player and flag the hit.

    Returns the HP actually lost.
    """
    hp_lost = state.player.take_damage(amount)
    state.player_hit = True
    return hp_lost
