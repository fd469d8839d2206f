"""Level manager -- builds levels and drives the transitions between them.

Owns the master RNG for a session.  Every level generation forks a fresh
stream from it (``"level:<n>"`` where *n* counts generations), and that
stream is forked again for the map, the entity placement and the turn
engine, so a whole session replays exactly from one seed.
"""

from __future__ import annotations

import logging

from witch_rogue.sim.core.constants import MAX_LEVEL, check_level, max_hp_for_level
from witch_rogue.sim.core.entities import Player
from witch_rogue.sim.core.game_state import GameState, GameStatus
from witch_rogue.sim.core.rng import GameRNG
from witch_rogue.sim.dungeon.map_gen import MapGenerator
from witch_rogue.sim.dungeon.placement import EntityPlacer, choose_player_start

logger = logging.getLogger(__name__)


class LevelManager:
    """Creates game states for new sessions, new levels and restarts.

    Parameters
    ----------
    rng:
        Master RNG for the session.
    """

    def __init__(self, rng: GameRNG) -> None:
        self.rng = rng
        self.map_generator = MapGenerator()
        self.placer = EntityPlacer()
        self._generations = 0

    def new_session(self) -> GameState:
        """Start a session at level 1."""
        return self.start_level(1)

    def start_level(self, level: int, total_gold: int = 0) -> GameState:
        """Generate *level* and return a fresh in-progress state for it."""
        check_level(level)
        self._generations += 1
        level_rng = self.rng.fork(f"level:{self._generations}")

        grid = self.map_generator.generate(level, level_rng.fork("map"))
        placement_rng = level_rng.fork("placement")
        start = choose_player_start(grid, placement_rng)
        golds, monsters = self.placer.place(grid, level, start, placement_rng)

        hp = max_hp_for_level(level)
        state = GameState(
            level=level,
            grid=grid,
            player=Player(position=start, hp=hp, max_hp=hp, gold=0),
            monsters=monsters,
            golds=golds,
            total_gold=total_gold,
            rng=level_rng.fork("turns"),
        )
        # A level that ended up without gold is cleared on arrival.
        state.evaluate_status()

        logger.info(
            "Level %d ready: %d gold, %d monsters, hp %d",
            level, len(golds), len(monsters), hp,
        )
        return state

    def advance(self, state: GameState) -> GameState:
        """Resolve a cleared level into the next level or victory.

        Returns the new state for the next level, or *state* itself
        (now ``VICTORIOUS``) after the last level.
        """
        if state.status is not GameStatus.LEVEL_CLEARED:
            raise ValueError(
                f"can only advance a cleared level, status is {state.status.value}"
            )

        if state.level >= MAX_LEVEL:
            state.status = GameStatus.VICTORIOUS
            logger.info("Victory with %d gold collected", state.total_gold)
            return state

        return self.start_level(state.level + 1, total_gold=state.total_gold)

    def restart(self) -> GameState:
        """Throw away the current session and begin again at level 1."""
        logger.info("Restarting session at level 1")
        return self.new_session()
