"""Seeded random number generator for the dungeon simulation.

Every random decision in the game (room layout, corridor jitter, noise,
entity placement, monster wandering) draws from a ``GameRNG`` handle that
is passed in explicitly.  Nothing in the simulation touches the
process-wide ``random`` module state, so a level or a whole session can be
replayed from a single integer seed.
"""

from __future__ import annotations

import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class GameRNG:
    """Deterministic RNG that can be forked into independent sub-streams.

    Parameters
    ----------
    seed:
        Integer seed for the underlying Mersenne Twister.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    # -- draws ---------------------------------------------------------------

    def random_below(self, n: int) -> int:
        """Return a random integer in ``[0, n)``.

        Mirrors the ``floor(random() * n)`` idiom used by the level
        formulas, e.g. ``random_below(4)`` yields 0, 1, 2 or 3.
        """
        if n <= 0:
            raise ValueError(f"random_below needs a positive bound, got {n}")
        return self._rng.randrange(n)

    def chance(self, probability: float) -> bool:
        """Return ``True`` with the given *probability*."""
        return self._rng.random() < probability

    def random_choice(self, seq: Sequence[T]) -> T:
        """Return a random element from a non-empty sequence."""
        return self._rng.choice(seq)

    # -- forking -------------------------------------------------------------

    def fork(self, name: str) -> GameRNG:
        """Create a child RNG seeded from this RNG's seed and *name*.

        The child seed depends only on ``(seed, name)``, never on how many
        values have been drawn, so ``rng.fork("map")`` is stable no matter
        what other sub-systems consumed first.
        """
        digest = hashlib.sha256(f"{self._seed}:{name}".encode()).digest()
        return GameRNG(int.from_bytes(digest[:8], "big"))

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed})"
