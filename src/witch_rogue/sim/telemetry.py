"""Telemetry data models for per-level and per-session statistics.

- **LevelTelemetry**: outcome, turns, gold and damage for one level.
- **RunTelemetry**: seed, ordered level results, final outcome.

Both classes are plain ``dataclass`` instances (not Pydantic models) to
keep collection cheap during batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class LevelTelemetry:
    """Stats from a single level.

    Attributes
    ----------
    level:
        The level number (1-based).
    result:
        ``"cleared"``, ``"defeated"`` or ``"timeout"``.
    turns:
        Accepted moves (blocked moves excluded).
    gold_available:
        Gold placed on the level.
    gold_collected:
        Gold picked up before the level ended.
    monsters:
        Monsters placed on the level.
    hp_start / hp_end:
        Player HP when the level began and ended.
    bumps / ambushes:
        Hits taken by walking into a monster / by a monster stepping in.
    """

    level: int
    result: str
    turns: int
    gold_available: int
    gold_collected: int
    monsters: int
    hp_start: int
    hp_end: int
    bumps: int = 0
    ambushes: int = 0

    @property
    def hp_lost(self) -> int:
        return self.hp_start - self.hp_end


@dataclass
class RunTelemetry:
    """Stats from one full session.

    Attributes
    ----------
    seed:
        The master seed used for this session.
    levels:
        Ordered level telemetry, one per level played.
    final_result:
        ``"victory"``, ``"defeat"`` or ``"timeout"``.
    levels_reached:
        Highest level number played.
    total_gold:
        Gold collected across the session.
    """

    seed: int
    levels: list[LevelTelemetry] = field(default_factory=list)
    final_result: str = "defeat"
    levels_reached: int = 0
    total_gold: int = 0

    @property
    def levels_cleared(self) -> int:
        return sum(1 for lvl in self.levels if lvl.result == "cleared")
