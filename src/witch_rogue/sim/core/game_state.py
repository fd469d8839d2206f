"""Game state for a Witch! session.

Houses the full mutable state of the level currently being played
(``GameState``) and the status machine flag that the turn engine and the
level manager drive.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from witch_rogue.sim.core.entities import GoldPickup, Monster, Player
from witch_rogue.sim.core.grid import GridModel, Position


class GameStatus(str, Enum):
    """Where the session stands.

    ``LEVEL_CLEARED`` is transient: the host resolves it into the next
    level (or ``VICTORIOUS``) after the banner dwell period.
    """

    IN_PROGRESS = "in_progress"
    DEFEATED = "defeated"
    LEVEL_CLEARED = "level_cleared"
    VICTORIOUS = "victorious"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.DEFEATED, GameStatus.VICTORIOUS)


class GameState(BaseModel):
    """Everything the presentation layer needs to draw one frame.

    One instance is owned by the session at a time; the turn engine mutates
    it in place and the level manager replaces it on level transitions.
    """

    model_config = {"arbitrary_types_allowed": True}

    level: int
    grid: GridModel = Field(exclude=True)
    player: Player
    monsters: list[Monster] = Field(default_factory=list)
    golds: list[GoldPickup] = Field(default_factory=list)
    status: GameStatus = GameStatus.IN_PROGRESS

    player_hit: bool = False
    """Set on a turn in which the player lost hit points; cleared by the
    next accepted move.  Purely for feedback."""

    turn: int = 0
    """Accepted (non-ignored) moves on this level."""

    total_gold: int = 0
    """Gold collected across every level of the session."""

    rng: Any = Field(default=None, exclude=True)
    """Turn RNG driving monster movement.  Excluded from serialization."""

    # -- queries -------------------------------------------------------------

    @property
    def accepts_input(self) -> bool:
        return self.status is GameStatus.IN_PROGRESS

    def monster_at(self, pos: Position) -> Monster | None:
        for monster in self.monsters:
            if monster.position == pos:
                return monster
        return None

    def gold_index_at(self, pos: Position) -> int | None:
        for i, gold in enumerate(self.golds):
            if gold.position == pos:
                return i
        return None

    # -- status --------------------------------------------------------------

    def evaluate_status(self) -> GameStatus:
        """Apply the terminal checks to an in-progress state.

        Defeat takes precedence over clearing the level on the same turn.
        """
        if self.status is GameStatus.IN_PROGRESS:
            if self.player.is_dead:
                self.status = GameStatus.DEFEATED
            elif not self.golds:
                self.status = GameStatus.LEVEL_CLEARED
        return self.status
