"""
Seeded random number generation for reproducible simulations.

Wraps a NumPy PCG64 generator so that two instances built from the same seed
produce the same sequence of floats, integers, booleans and Gaussian samples.
Engines receive their generator explicitly; there is no module-level instance.
"""

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

T = TypeVar("T")

MAX_SEED = 2**31 - 1


def generate_seed() -> int:
    """Draw a fresh seed from OS entropy."""
    return int(np.random.SeedSequence().entropy % MAX_SEED)


class SeededRandom:
    """Reproducible random source.

    Thread Safety:
        Not thread-safe. Each engine owns its own instance and the
        simulation runs single-threaded.
    """

    def __init__(self, seed: int) -> None:
        """Initialize generator.

        Args:
            seed: Seed for the underlying PCG64 bit generator
        """
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def seed(self) -> int:
        """Seed the generator was last reset to."""
        return self._seed

    def next(self) -> float:
        """Generate a float in [0, 1)."""
        return float(self._rng.random())

    def next_int(self, minimum: int, maximum: int) -> int:
        """Generate an integer in [minimum, maximum] (inclusive)."""
        return int(self._rng.integers(minimum, maximum, endpoint=True))

    def next_float(self, minimum: float, maximum: float) -> float:
        """Generate a float in [minimum, maximum)."""
        return self.next() * (maximum - minimum) + minimum

    def next_bool(self, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next() < probability

    def next_gaussian(self, mean: float = 0.0, std_dev: float = 1.0) -> float:
        """Sample from a normal distribution."""
        return mean + float(self._rng.standard_normal()) * std_dev

    def pick(self, items: Sequence[T]) -> T | None:
        """Pick a random element, None for an empty sequence."""
        if not items:
            return None
        return items[self.next_int(0, len(items) - 1)]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy (Fisher-Yates)."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T | None:
        """Pick an element with probability proportional to its weight.

        Args:
            items: Candidates
            weights: Non-negative weight per candidate

        Returns:
            Chosen item, or None when items is empty or lengths differ
        """
        if not items or len(items) != len(weights):
            return None

        remaining = self.next() * sum(weights)
        for item, weight in zip(items, weights, strict=True):
            remaining -= weight
            if remaining <= 0:
                return item

        return items[-1]

    def reset(self, seed: int | None = None) -> None:
        """Re-seed the generator.

        Args:
            seed: New seed; the current seed is reused when omitted
        """
        if seed is not None:
            self._seed = seed
        self._rng = np.random.default_rng(self._seed)


def create_random(seed: int | None = None) -> SeededRandom:
    """Create a generator, drawing a random seed when none is given."""
    return SeededRandom(seed if seed is not None else generate_seed())
