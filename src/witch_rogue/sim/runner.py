"""Batch runner -- plays whole sessions headlessly with a play agent.

The level-cleared banner is skipped: a cleared level is advanced
immediately through the level manager.  Each level is capped at
``_MAX_TURNS_PER_LEVEL`` agent decisions so a wandering agent cannot loop
forever.
"""

from __future__ import annotations

import logging

from witch_rogue.sim.core.game_state import GameState, GameStatus
from witch_rogue.sim.core.rng import GameRNG
from witch_rogue.sim.dungeon.level_manager import LevelManager
from witch_rogue.sim.play_agents.base import PlayAgent
from witch_rogue.sim.play_agents.random_agent import RandomAgent
from witch_rogue.sim.telemetry import LevelTelemetry, RunTelemetry
from witch_rogue.sim.turn_engine import MoveOutcome, TurnEngine

logger = logging.getLogger(__name__)

_MAX_TURNS_PER_LEVEL = 2000


class BatchRunner:
    """Runs many seeded sessions with fresh agents."""

    def __init__(
        self,
        agent_class: type[PlayAgent] = RandomAgent,
        max_turns_per_level: int = _MAX_TURNS_PER_LEVEL,
    ) -> None:
        self.agent_class = agent_class
        self.max_turns_per_level = max_turns_per_level

    def run_batch(self, n_runs: int, base_seed: int = 42) -> list[RunTelemetry]:
        """Run *n_runs* sessions with seeds ``base_seed .. base_seed+n-1``."""
        return [self.run_session(base_seed + i) for i in range(n_runs)]

    def run_session(self, seed: int) -> RunTelemetry:
        """Play one session from level 1 until victory, defeat or timeout."""
        master = GameRNG(seed)
        agent = self._make_agent(master.fork("agent"))
        levels = LevelManager(master)
        engine = TurnEngine()
        telemetry = RunTelemetry(seed=seed)

        state = levels.new_session()
        while True:
            level_stats = self._play_level(state, agent, engine)
            telemetry.levels.append(level_stats)
            telemetry.levels_reached = state.level
            telemetry.total_gold = state.total_gold

            if level_stats.result == "timeout":
                telemetry.final_result = "timeout"
                break
            if state.status is GameStatus.DEFEATED:
                telemetry.final_result = "defeat"
                break

            state = levels.advance(state)
            if state.status is GameStatus.VICTORIOUS:
                telemetry.final_result = "victory"
                break

        logger.debug(
            "Seed %d: %s at level %d", seed,
            telemetry.final_result, telemetry.levels_reached,
        )
        return telemetry

    def _play_level(
        self, state: GameState, agent: PlayAgent, engine: TurnEngine,
    ) -> LevelTelemetry:
        stats = LevelTelemetry(
            level=state.level,
            result="timeout",
            turns=0,
            gold_available=len(state.golds),
            gold_collected=0,
            monsters=len(state.monsters),
            hp_start=state.player.hp,
            hp_end=state.player.hp,
        )

        for _ in range(self.max_turns_per_level):
            if not state.accepts_input:
                break
            result = engine.resolve_move(state, agent.choose_direction(state))
            if result.outcome is MoveOutcome.DAMAGED:
                stats.bumps += 1
            stats.ambushes += result.ambushes

        stats.turns = state.turn
        stats.gold_collected = state.player.gold
        stats.hp_end = state.player.hp
        if state.status is GameStatus.DEFEATED:
            stats.result = "defeated"
        elif state.status is GameStatus.LEVEL_CLEARED:
            stats.result = "cleared"
        return stats

    def _make_agent(self, rng: GameRNG) -> PlayAgent:
        try:
            return self.agent_class(rng=rng)  # type: ignore[call-arg]
        except TypeError:
            return self.agent_class()
