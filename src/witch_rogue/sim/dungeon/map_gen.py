"""Map generator for dungeon levels.

Builds one 40x25 level in five passes:

1. Start from solid wall.
2. Carve ``5 + level//5 + 0..3`` rectangular rooms (overlaps allowed).
3. Join every room to the previous one with a twisting corridor.
4. Sprinkle noise: each interior floor cell may turn back into wall.
5. Repair connectivity from the first room's center.

Rooms and corridors grow slightly with the level number; see
``witch_rogue.sim.core.constants`` for the curves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from witch_rogue.sim.core.constants import (
    EDGE_MARGIN,
    check_level,
    room_count_base,
    room_size_bonus,
    twist_count_base,
    wall_density,
)
from witch_rogue.sim.core.grid import GridModel, Position, Tile
from witch_rogue.sim.core.rng import GameRNG
from witch_rogue.sim.dungeon.connectivity import repair

logger = logging.getLogger(__name__)


@dataclass
class Room:
    """A carved rectangle, kept only long enough to anchor corridors."""

    x: int
    y: int
    width: int
    height: int

    @property
    def center(self) -> Position:
        return Position(self.x + self.width // 2, self.y + self.height // 2)


class MapGenerator:
    """Generates the wall/floor layout for a level."""

    def generate(self, level: int, rng: GameRNG) -> GridModel:
        """Generate a repaired grid for *level*."""
        grid, _ = self.generate_with_rooms(level, rng)
        return grid

    def generate_with_rooms(
        self, level: int, rng: GameRNG,
    ) -> tuple[GridModel, list[Room]]:
        """Generate a repaired grid and return it with the rooms carved."""
        check_level(level)
        grid = GridModel(fill=Tile.WALL)

        rooms = self._place_rooms(grid, level, rng)
        for prev, room in zip(rooms, rooms[1:]):
            self._carve_corridor(grid, level, prev.center, room.center, rng)

        walled = self._apply_noise(grid, level, rng)
        bridges = repair(grid, rooms[0].center)

        logger.debug(
            "Level %d: %d rooms, %d cells walled by noise, %d bridges carved",
            level, len(rooms), walled, bridges,
        )
        return grid, rooms

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def _place_rooms(
        self, grid: GridModel, level: int, rng: GameRNG,
    ) -> list[Room]:
        count = room_count_base(level) + rng.random_below(4)
        bonus = room_size_bonus(level)
        # Largest room that still leaves a margin on both sides
        max_w = grid.width - 2 * EDGE_MARGIN - 1
        max_h = grid.height - 2 * EDGE_MARGIN - 1

        rooms: list[Room] = []
        for _ in range(count):
            w = min(6 + bonus + rng.random_below(10), max_w)
            h = min(4 + bonus + rng.random_below(8), max_h)
            x = EDGE_MARGIN + rng.random_below(max(1, grid.width - w - 2 * EDGE_MARGIN))
            y = EDGE_MARGIN + rng.random_below(max(1, grid.height - h - 2 * EDGE_MARGIN))

            grid.carve_rect(x, y, w, h)
            rooms.append(Room(x=x, y=y, width=w, height=h))
        return rooms

    # ------------------------------------------------------------------
    # Corridors
    # ------------------------------------------------------------------

    def _carve_corridor(
        self,
        grid: GridModel,
        level: int,
        start: Position,
        target: Position,
        rng: GameRNG,
    ) -> None:
        """Carve from *start* to *target* through jittered waypoints.

        Each leg is a horizontal run along the current row followed by a
        vertical run down the waypoint's column.
        """
        twists = twist_count_base(level) + rng.random_below(2)
        current = start

        for t in range(twists + 1):
            remaining = twists + 1 - t
            waypoint = grid.clamp(Position(
                current.x + (target.x - current.x) // remaining + rng.random_below(3) - 1,
                current.y + (target.y - current.y) // remaining + rng.random_below(3) - 1,
            ))
            self._carve_leg(grid, current, waypoint)
            current = waypoint

        # The jitter on the last waypoint can miss; close the gap exactly.
        self._carve_leg(grid, current, target)

    @staticmethod
    def _carve_leg(grid: GridModel, start: Position, end: Position) -> None:
        grid.carve_horizontal(start.x, end.x, start.y)
        grid.carve_vertical(start.y, end.y, end.x)

    # ------------------------------------------------------------------
    # Noise
    # ------------------------------------------------------------------

    def _apply_noise(self, grid: GridModel, level: int, rng: GameRNG) -> int:
        """Wall off interior floor cells at the level's density.

        Returns the number of cells turned to wall.  The outer ring is
        never touched.
        """
        density = wall_density(level)
        walled = 0
        for y in range(1, grid.height - 1):
            for x in range(1, grid.width - 1):
                pos = Position(x, y)
                if grid.tile_at(pos) is Tile.FLOOR and rng.chance(density):
                    grid.set_tile(pos, Tile.WALL)
                    walled += 1
        return walled
