"""Dungeon module -- map generation, connectivity, placement and levels."""

from witch_rogue.sim.dungeon.connectivity import flood_fill, repair
from witch_rogue.sim.dungeon.level_manager import LevelManager
from witch_rogue.sim.dungeon.map_gen import MapGenerator, Room
from witch_rogue.sim.dungeon.placement import EntityPlacer, choose_player_start

__all__ = [
    "MapGenerator",
    "Room",
    "flood_fill",
    "repair",
    "EntityPlacer",
    "choose_player_start",
    "LevelManager",
]
