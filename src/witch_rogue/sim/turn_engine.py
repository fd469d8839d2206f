"""Turn engine -- resolves one player move into a full game turn.

A turn runs in a fixed order:

1. Bounds / wall check on the target tile (``BLOCKED`` ends the turn).
2. Bumping a monster hurts the player, who stays put (``DAMAGED``).
3. Stepping on gold picks it up (``PICKED_UP``), otherwise just moves
   (``MOVED``).
4. Every monster may wander one step (possibly ambushing the player).
5. Defeat and level-cleared checks.

Moves are ignored outright unless the state is in progress.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, Field

from witch_rogue.sim.core.game_state import GameState, GameStatus
from witch_rogue.sim.core.grid import Direction
from witch_rogue.sim.core.rng import GameRNG
from witch_rogue.sim.mechanics.damage import bump_damage, hurt_player
from witch_rogue.sim.mechanics.monster_ai import step_monsters

logger = logging.getLogger(__name__)


class MoveOutcome(str, Enum):
    """What the player's own action did this turn."""

    IGNORED = "ignored"
    BLOCKED = "blocked"
    DAMAGED = "damaged"
    PICKED_UP = "picked_up"
    MOVED = "moved"
    # Only produced by ``TurnResult.summary``
    LEVEL_CLEARED = "level_cleared"
    DIED = "died"


class TurnResult(BaseModel):
    """Everything the presentation layer needs to react to a turn."""

    outcome: MoveOutcome
    status: GameStatus
    damage_taken: int = 0
    """Total HP lost this turn (bump plus ambushes)."""

    gold_picked: int = 0
    ambushes: int = 0
    events: list[str] = Field(default_factory=list)
    """Feedback cues in order: ``"step"``, ``"coin"``, ``"hit"``."""

    @property
    def summary(self) -> MoveOutcome:
        """The outcome with the turn's terminal status folded in."""
        if self.status is GameStatus.DEFEATED:
            return MoveOutcome.DIED
        if self.status is GameStatus.LEVEL_CLEARED:
            return MoveOutcome.LEVEL_CLEARED
        return self.outcome


class TurnEngine:
    """Applies player moves to a game state in place."""

    def resolve_move(
        self,
        state: GameState,
        direction: Direction | tuple[int, int],
        rng: GameRNG | None = None,
    ) -> TurnResult:
        """Resolve one move for the player.

        Parameters
        ----------
        state:
            The state to mutate.
        direction:
            A ``Direction`` or a cardinal unit vector ``(dx, dy)``.
        rng:
            RNG for monster movement; defaults to ``state.rng``.
        """
        if not isinstance(direction, Direction):
            direction = Direction.from_vector(*direction)

        if not state.accepts_input:
            return TurnResult(outcome=MoveOutcome.IGNORED, status=state.status)

        rng = rng if rng is not None else state.rng
        if rng is None:
            raise ValueError("resolve_move needs an rng when state.rng is unset")

        player = state.player
        target = player.position.step(direction)
        if not state.grid.is_floor(target):
            return TurnResult(outcome=MoveOutcome.BLOCKED, status=state.status)

        state.turn += 1
        state.player_hit = False
        result = TurnResult(outcome=MoveOutcome.MOVED, status=state.status)
        result.events.append("step")

        if state.monster_at(target) is not None:
            result.outcome = MoveOutcome.DAMAGED
            result.damage_taken += hurt_player(state, bump_damage(state.level))
            result.events.append("hit")
        else:
            gold_idx = state.gold_index_at(target)
            if gold_idx is not None:
                state.golds.pop(gold_idx)
                player.gold += 1
                state.total_gold += 1
                result.outcome = MoveOutcome.PICKED_UP
                result.gold_picked = 1
                result.events.append("coin")
            player.position = target

        ambushes, hp_lost = step_monsters(state, rng)
        if ambushes:
            result.ambushes = ambushes
            result.damage_taken += hp_lost
            result.events.append("hit")

        result.status = state.evaluate_status()
        if result.status is GameStatus.DEFEATED:
            logger.info("Defeated on level %d after %d turns", state.level, state.turn)
        elif result.status is GameStatus.LEVEL_CLEARED:
            logger.info("Level %d cleared in %d turns", state.level, state.turn)
        return result
