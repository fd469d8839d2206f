"""Turn mechanics for the dungeon simulation.

Usage::

    from witch_rogue.sim.mechanics import (
        bump_damage, ambush_damage, hurt_player,
        step_monsters,
    )
"""

# -- damage ------------------------------------------------------------------
from .damage import ambush_damage, bump_damage, hurt_player

# -- monsters ----------------------------------------------------------------
from .monster_ai import step_monsters

__all__ = [
    "ambush_damage",
    "bump_damage",
    "hurt_player",
    "step_monsters",
]
