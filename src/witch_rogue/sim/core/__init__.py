"""Core simulation primitives for the Witch! dungeon."""

from witch_rogue.sim.core.entities import GoldPickup, Monster, Player
from witch_rogue.sim.core.game_state import GameState, GameStatus
from witch_rogue.sim.core.grid import CARDINALS, Direction, GridModel, Position, Tile
from witch_rogue.sim.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # grid
    "Tile",
    "Position",
    "Direction",
    "CARDINALS",
    "GridModel",
    # entities
    "Player",
    "Monster",
    "GoldPickup",
    # game_state
    "GameStatus",
    "GameState",
]
