"""Entity models for the dungeon: the player, monsters and gold.

All data classes use Pydantic v2 BaseModel for validation and
serialization.
"""

from __future__ import annotations

from pydantic import BaseModel

from witch_rogue.sim.core.grid import Position


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class Player(BaseModel):
    """The witch.  Hit points are always kept inside ``[0, max_hp]``."""

    position: Position
    hp: int
    max_hp: int
    gold: int = 0
    """Gold picked up on the current level (reset every level)."""

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    def take_damage(self, amount: int) -> int:
        """Apply *amount* damage, never dropping below 0.

        Returns the hit points actually lost.
        """
        if amount <= 0:
            return 0
        hp_lost = min(self.hp, amount)
        self.hp -= hp_lost
        return hp_lost


# ---------------------------------------------------------------------------
# Monster / GoldPickup
# ---------------------------------------------------------------------------

class Monster(BaseModel):
    """A wandering monster.  Monsters have no stats of their own: touching
    one hurts, and nothing the player does removes it."""

    position: Position


class GoldPickup(BaseModel):
    """A gold coin lying on a floor tile."""

    position: Position
