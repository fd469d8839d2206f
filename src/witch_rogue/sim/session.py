"""Session -- the single-writer binding between a host and the game state.

A host (terminal loop, UI thread, web handler) drives the game only
through a ``Session``:

- ``move(direction)`` resolves a turn,
- ``restart()`` begins again at level 1,
- ``view()`` returns a read-only snapshot for rendering.

All three, plus the level-cleared timer callback, run under one lock, so a
UI thread and the dwell timer never mutate the state at the same time.
The dwell timer is cancelled (and its token invalidated) by ``restart``,
which keeps a stale banner from advancing a fresh session.
The hit flash runs on a second timer from the same factory and is
cancelled the same way.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Callable, Protocol

from pydantic import BaseModel

from witch_rogue.sim.core.game_state import GameState, GameStatus
from witch_rogue.sim.core.grid import Direction, Position
from witch_rogue.sim.core.rng import GameRNG
from witch_rogue.sim.dungeon.level_manager import LevelManager
from witch_rogue.sim.turn_engine import TurnEngine, TurnResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class SessionSettings(BaseModel):
    """Host-side knobs.  The game rules themselves are not configurable."""

    seed: int | None = None
    """Master seed; ``None`` draws one from the OS."""

    dwell_seconds: float = 3.0
    """How long the level-cleared banner stays up before moving on."""

    hit_flash_seconds: float = 1.5
    """How long ``player_hit`` stays set after the player takes damage."""

    @classmethod
    def from_env(cls) -> SessionSettings:
        """Read ``WITCH_ROGUE_SEED`` and ``WITCH_ROGUE_DWELL_SECONDS``."""
        values: dict[str, object] = {}
        seed = os.environ.get("WITCH_ROGUE_SEED")
        if seed:
            values["seed"] = seed
        dwell = os.environ.get("WITCH_ROGUE_DWELL_SECONDS")
        if dwell:
            values["dwell_seconds"] = dwell
        return cls.model_validate(values)

    def resolve_seed(self) -> int:
        if self.seed is not None:
            return self.seed
        return int.from_bytes(os.urandom(8), "big")


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------

class GameView(BaseModel):
    """Read-only snapshot handed to the presentation layer."""

    level: int
    status: GameStatus
    rows: list[str]
    """Grid rows, ``#`` for wall and ``.`` for floor."""

    player: Position
    hp: int
    max_hp: int
    gold: int
    total_gold: int
    player_hit: bool
    monsters: list[Position]
    golds: list[Position]

    @classmethod
    def from_state(cls, state: GameState) -> GameView:
        return cls(
            level=state.level,
            status=state.status,
            rows=state.grid.to_rows(),
            player=state.player.position,
            hp=state.player.hp,
            max_hp=state.player.max_hp,
            gold=state.player.gold,
            total_gold=state.total_gold,
            player_hit=state.player_hit,
            monsters=[m.position for m in state.monsters],
            golds=[g.position for g in state.golds],
        )


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class Timer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


def _thread_timer(interval: float, callback: Callable[[], None]) -> Timer:
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    return timer


class Session:
    """Owns one game state for the lifetime of a play session.

    Parameters
    ----------
    settings:
        Seed and timing settings.
    timer_factory:
        Builds the dwell timer; ``threading.Timer`` by default.  Tests pass
        a fake to fire the transition by hand.
    on_change:
        Optional callback invoked (under the lock) after a timer changes the
        state (next level or end of a hit flash), so a host can redraw.
    """

    def __init__(
        self,
        settings: SessionSettings | None = None,
        timer_factory: TimerFactory = _thread_timer,
        on_change: Callable[[GameView], None] | None = None,
    ) -> None:
        self.settings = settings or SessionSettings()
        self.seed = self.settings.resolve_seed()
        self.levels = LevelManager(GameRNG(self.seed))
        self.engine = TurnEngine()
        self._timer_factory = timer_factory
        self._on_change = on_change
        self._lock = threading.RLock()
        self._pending: Timer | None = None
        self._token = 0
        self._flash: Timer | None = None
        self._flash_token = 0

        self._state = self.levels.new_session()
        self._schedule_if_cleared()

    @classmethod
    def new(cls, settings: SessionSettings | None = None) -> Session:
        return cls(settings)

    # -- read ----------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    def view(self) -> GameView:
        with self._lock:
            return GameView.from_state(self._state)

    # -- input ---------------------------------------------------------------

    def move(self, direction: Direction | tuple[int, int]) -> TurnResult:
        """Resolve a player move; ignored while not in progress."""
        with self._lock:
            result = self.engine.resolve_move(self._state, direction)
            if result.damage_taken:
                self._schedule_flash()
            self._schedule_if_cleared()
            return result

    def restart(self) -> GameState:
        """Start over at level 1, whatever the current status."""
        with self._lock:
            self._cancel_pending()
            self._cancel_flash()
            self._state = self.levels.restart()
            self._schedule_if_cleared()
            return self._state

    def complete_level_transition(self) -> GameState:
        """Resolve a cleared level now (next level or victory).

        Called by the dwell timer; a no-op unless the level is cleared.
        """
        with self._lock:
            self._cancel_pending()
            if self._state.status is GameStatus.LEVEL_CLEARED:
                self._state = self.levels.advance(self._state)
                self._schedule_if_cleared()
            return self._state

    def close(self) -> None:
        """Cancel any pending transition or hit flash."""
        with self._lock:
            self._cancel_pending()
            self._cancel_flash()

    # -- timer ---------------------------------------------------------------

    def _schedule_if_cleared(self) -> None:
        if self._state.status is not GameStatus.LEVEL_CLEARED or self._pending:
            return
        token = self._token

        def fire() -> None:
            with self._lock:
                if token != self._token:
                    return
                self._pending = None
                self.complete_level_transition()
                if self._on_change is not None:
                    self._on_change(GameView.from_state(self._state))

        logger.debug("Level %d cleared, advancing in %.1fs",
                     self._state.level, self.settings.dwell_seconds)
        self._pending = self._timer_factory(self.settings.dwell_seconds, fire)
        self._pending.start()

    def _cancel_pending(self) -> None:
        self._token += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule_flash(self) -> None:
        self._cancel_flash()
        token = self._flash_token
        state = self._state

        def fire() -> None:
            with self._lock:
                if token != self._flash_token:
                    return
                self._flash = None
                state.player_hit = False
                if self._on_change is not None and state is self._state:
                    self._on_change(GameView.from_state(state))

        self._flash = self._timer_factory(self.settings.hit_flash_seconds, fire)
        self._flash.start()

    def _cancel_flash(self) -> None:
        self._flash_token += 1
        if self._flash is not None:
            self._flash.cancel()
            self._flash = None
