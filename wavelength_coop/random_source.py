from __future__ import annotations

import random
from typing import Protocol


class RandomSource(Protocol):
    """Uniform random source.

    Core logic depends on this interface rather than calling the global
    ``random`` module directly, so tests can substitute a seeded stream.
    """

    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""

    def randrange(self, stop: int) -> int:
        """Return an int in [0, stop)."""


class RealRandom:
    """Production source backed by the process-wide ``random`` module."""

    def random(self) -> float:
        return random.random()

    def randrange(self, stop: int) -> int:
        return random.randrange(stop)


class SeededRandom:
    """Seeded source for deterministic games and tests."""

    def __init__(self, seed: int) -> None:
        self._seed = int(seed)
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def random(self) -> float:
        return self._rng.random()

    def randrange(self, stop: int) -> int:
        return self._rng.randrange(stop)


