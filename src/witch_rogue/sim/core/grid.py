"""Tile grid, coordinates and movement directions.

The grid is stored row-major (``tiles[y][x]``) and always measures
``GRID_WIDTH`` x ``GRID_HEIGHT``.  Border cells carry no special meaning:
they are wall or floor exactly like interior cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from witch_rogue.sim.core.constants import GRID_HEIGHT, GRID_WIDTH


class Tile(str, Enum):
    """The two tile kinds; values double as the text glyphs."""

    WALL = "#"
    FLOOR = "."


@dataclass(frozen=True)
class Position:
    """An integer grid coordinate."""

    x: int
    y: int

    def step(self, direction: Direction) -> Position:
        return Position(self.x + direction.dx, self.y + direction.dy)

    def manhattan(self, other: Position) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


class Direction(Enum):
    """The four cardinal moves available to the player and to monsters."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @classmethod
    def from_vector(cls, dx: int, dy: int) -> Direction:
        """Look up the direction for a unit vector."""
        for direction in cls:
            if direction.value == (dx, dy):
                return direction
        raise ValueError(f"({dx}, {dy}) is not a cardinal unit vector")


# Order used whenever a random cardinal direction is drawn.
CARDINALS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


class GridModel:
    """Fixed-size wall/floor grid.

    Parameters
    ----------
    fill:
        Tile every cell starts as.  Generation starts from solid wall.
    """

    width = GRID_WIDTH
    height = GRID_HEIGHT

    def __init__(self, fill: Tile = Tile.WALL) -> None:
        self._tiles: list[list[Tile]] = [
            [fill] * self.width for _ in range(self.height)
        ]

    @classmethod
    def from_rows(cls, rows: list[str]) -> GridModel:
        """Build a grid from text rows of ``#`` and ``.`` characters."""
        if len(rows) != cls.height or any(len(r) != cls.width for r in rows):
            raise ValueError(
                f"expected {cls.height} rows of {cls.width} characters"
            )
        grid = cls()
        for y, row in enumerate(rows):
            grid._tiles[y] = [Tile(ch) for ch in row]
        return grid

    # -- queries -------------------------------------------------------------

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def tile_at(self, pos: Position) -> Tile:
        return self._tiles[pos.y][pos.x]

    def is_floor(self, pos: Position) -> bool:
        """``True`` if *pos* is inside the grid and walkable."""
        return self.in_bounds(pos) and self._tiles[pos.y][pos.x] is Tile.FLOOR

    def floor_cells(self) -> Iterator[Position]:
        """Yield every floor position in row-major order."""
        for y, row in enumerate(self._tiles):
            for x, tile in enumerate(row):
                if tile is Tile.FLOOR:
                    yield Position(x, y)

    def floor_count(self) -> int:
        return sum(row.count(Tile.FLOOR) for row in self._tiles)

    def neighbours(self, pos: Position) -> Iterator[Position]:
        """Yield the in-bounds 4-neighbours of *pos*."""
        for direction in CARDINALS:
            nxt = pos.step(direction)
            if self.in_bounds(nxt):
                yield nxt

    def clamp(self, pos: Position) -> Position:
        return Position(
            min(max(pos.x, 0), self.width - 1),
            min(max(pos.y, 0), self.height - 1),
        )

    # -- mutation (generation only) -----------------------------------------

    def set_tile(self, pos: Position, tile: Tile) -> None:
        self._tiles[pos.y][pos.x] = tile

    def carve(self, pos: Position) -> None:
        self._tiles[pos.y][pos.x] = Tile.FLOOR

    def carve_rect(self, x: int, y: int, width: int, height: int) -> None:
        """Turn a rectangle to floor, ignoring any part outside the grid."""
        for yy in range(max(y, 0), min(y + height, self.height)):
            for xx in range(max(x, 0), min(x + width, self.width)):
                self._tiles[yy][xx] = Tile.FLOOR

    def carve_horizontal(self, x1: int, x2: int, y: int) -> None:
        for xx in range(min(x1, x2), max(x1, x2) + 1):
            self._tiles[y][xx] = Tile.FLOOR

    def carve_vertical(self, y1: int, y2: int, x: int) -> None:
        for yy in range(min(y1, y2), max(y1, y2) + 1):
            self._tiles[yy][x] = Tile.FLOOR

    # -- export --------------------------------------------------------------

    def to_rows(self) -> list[str]:
        """Text rows, ``#`` for wall and ``.`` for floor."""
        return ["".join(tile.value for tile in row) for row in self._tiles]

    def copy(self) -> GridModel:
        clone = GridModel()
        clone._tiles = [list(row) for row in self._tiles]
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridModel):
            return NotImplemented
        return self._tiles == other._tiles

    def __repr__(self) -> str:
        return f"GridModel({self.width}x{self.height}, floor={self.floor_count()})"
