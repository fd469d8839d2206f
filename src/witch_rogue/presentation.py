"""Thin presentation adapter: key bindings and a text renderer.

Nothing here touches game rules.  Hosts translate keys with
``parse_key`` and draw a ``GameView`` with ``render_text``.
"""

from __future__ import annotations

from witch_rogue.sim.core.constants import MAX_LEVEL
from witch_rogue.sim.core.game_state import GameStatus
from witch_rogue.sim.core.grid import Direction
from witch_rogue.sim.session import GameView

RESTART = "restart"

KEY_BINDINGS: dict[str, Direction] = {
    "arrowup": Direction.UP, "w": Direction.UP, "k": Direction.UP,
    "arrowdown": Direction.DOWN, "s": Direction.DOWN, "j": Direction.DOWN,
    "arrowleft": Direction.LEFT, "a": Direction.LEFT, "h": Direction.LEFT,
    "arrowright": Direction.RIGHT, "d": Direction.RIGHT, "l": Direction.RIGHT,
}

GLYPH_PLAYER = "@"
GLYPH_MONSTER = "M"
GLYPH_GOLD = "$"


def parse_key(key: str, status: GameStatus) -> Direction | str | None:
    """Map a key name to a move, ``RESTART`` or ``None``.

    ``r`` only restarts once the session has ended.
    """
    key = key.lower()
    if key == "r":
        return RESTART if status.is_terminal else None
    return KEY_BINDINGS.get(key)


def render_text(view: GameView) -> str:
    """Draw the grid with gold, monsters and the player on top."""
    cells = [list(row) for row in view.rows]
    for pos in view.golds:
        cells[pos.y][pos.x] = GLYPH_GOLD
    for pos in view.monsters:
        cells[pos.y][pos.x] = GLYPH_MONSTER
    cells[view.player.y][view.player.x] = GLYPH_PLAYER
    return "\n".join("".join(row) for row in cells)


def status_line(view: GameView) -> str:
    """HUD text plus any banner for the current status."""
    hud = f"Level: {view.level}/{MAX_LEVEL}  HP: {view.hp}/{view.max_hp}  Gold: {view.gold}"
    if view.player_hit:
        hud += "  *hit*"
    if view.status is GameStatus.LEVEL_CLEARED:
        return f"{hud}\nLEVEL CLEARED!"
    if view.status is GameStatus.VICTORIOUS:
        return (
            f"{hud}\nVICTORY! You conquered all {MAX_LEVEL} levels! "
            f"Total gold collected: {view.total_gold}. Press r to play again."
        )
    if view.status is GameStatus.DEFEATED:
        return (
            f"{hud}\nYOU DIED. Level reached: {view.level}. "
            f"Total gold collected: {view.total_gold}. Press r to play again."
        )
    return hud
