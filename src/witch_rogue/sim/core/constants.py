"""Fixed game contract: grid size, level count and the difficulty curves.

These values are part of the game's design, not settings.  Every formula
takes the 1-based level number.
"""

from __future__ import annotations

GRID_WIDTH = 40
GRID_HEIGHT = 25
MAX_LEVEL = 26

# Rooms, entities and player start keep this distance from the grid edge.
EDGE_MARGIN = 2

PLACEMENT_ATTEMPTS = 500

PLAYER_HP_CAP = 100


def max_hp_for_level(level: int) -> int:
    """Player hit points at the start of *level*."""
    return min(25 + level * 5, PLAYER_HP_CAP)


def room_count_base(level: int) -> int:
    return 5 + level // 5


def room_size_bonus(level: int) -> int:
    return level // 8


def twist_count_base(level: int) -> int:
    return level // 10


def wall_density(level: int) -> float:
    """Chance that an interior floor cell is turned back into wall."""
    return 0.1 + (level / MAX_LEVEL) * 0.2


def gold_count(level: int) -> int:
    return 6 + level * 2


def monster_count(level: int) -> int:
    # floor(level * 1.3) without float rounding surprises
    return 3 + (level * 13) // 10


def monster_move_chance(level: int) -> float:
    return 0.65 + level * 0.008


def check_level(level: int) -> int:
    """Validate a level number, returning it unchanged."""
    if not 1 <= level <= MAX_LEVEL:
        raise ValueError(f"level must be in 1..{MAX_LEVEL}, got {level}")
    return level
