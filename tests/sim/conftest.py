"""Shared fixtures and helpers for simulation tests."""

from __future__ import annotations

from collections import deque
from typing import Callable

import pytest

from witch_rogue.sim.core.constants import max_hp_for_level
from witch_rogue.sim.core.entities import GoldPickup, Monster, Player
from witch_rogue.sim.core.game_state import GameState
from witch_rogue.sim.core.grid import Direction, GridModel, Position, Tile
from witch_rogue.sim.core.rng import GameRNG


class ScriptedRNG(GameRNG):
    """RNG whose ``chance`` and ``random_choice`` answers are scripted.

    ``chances`` feeds ``chance()`` in order; ``choices`` feeds
    ``random_choice()`` in order.  Once exhausted, ``chance`` answers
    ``False`` so monsters stay still.
    """

    def __init__(
        self,
        chances: list[bool] | None = None,
        choices: list[Direction] | None = None,
    ) -> None:
        super().__init__(seed=0)
        self._chances = deque(chances or [])
        self._choices = deque(choices or [])

    def chance(self, probability: float) -> bool:
        return self._chances.popleft() if self._chances else False

    def random_choice(self, seq):
        if self._choices:
            return self._choices.popleft()
        return seq[0]


def open_room_grid(x1: int = 1, y1: int = 1, x2: int = 38, y2: int = 23) -> GridModel:
    """All wall except an inclusive floor rectangle."""
    grid = GridModel(fill=Tile.WALL)
    grid.carve_rect(x1, y1, x2 - x1 + 1, y2 - y1 + 1)
    return grid


StateFactory = Callable[..., GameState]


@pytest.fixture
def make_state() -> StateFactory:
    """Factory for hand-built states on an open room.

    Keyword arguments: ``level``, ``player`` (x, y), ``monsters`` and
    ``golds`` (lists of (x, y)), ``grid``, ``hp`` and ``rng``.
    """

    def _make(
        level: int = 1,
        player: tuple[int, int] = (10, 10),
        monsters: list[tuple[int, int]] | None = None,
        golds: list[tuple[int, int]] | None = None,
        grid: GridModel | None = None,
        hp: int | None = None,
        rng: GameRNG | None = None,
    ) -> GameState:
        max_hp = max_hp_for_level(level)
        return GameState(
            level=level,
            grid=grid or open_room_grid(),
            player=Player(
                position=Position(*player),
                hp=max_hp if hp is None else hp,
                max_hp=max_hp,
            ),
            monsters=[Monster(position=Position(*m)) for m in (monsters or [])],
            golds=[
                GoldPickup(position=Position(*g))
                for g in ([(30, 20)] if golds is None else golds)
            ],
            rng=rng or ScriptedRNG(),
        )

    return _make


@pytest.fixture
def scripted_rng() -> type[ScriptedRNG]:
    return ScriptedRNG


@pytest.fixture
def open_grid() -> Callable[..., GridModel]:
    return open_room_grid


def reachable_from(grid: GridModel, start: Position) -> set[Position]:
    """Independent BFS used to check the generator's own flood fill."""
    seen = {start}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nxt = Position(cur.x + dx, cur.y + dy)
            if nxt not in seen and grid.is_floor(nxt):
                seen.add(nxt)
                queue.append(nxt)
    return seen


@pytest.fixture
def reachable() -> Callable[[GridModel, Position], set[Position]]:
    return reachable_from
