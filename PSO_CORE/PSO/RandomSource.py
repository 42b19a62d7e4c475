# --- Random Sources for Initialization and Velocity Updates ---
from abc import ABC, abstractmethod

import numpy as np


class RandomSource(ABC):
    """Supplies independent uniform draws to the swarm."""

    @abstractmethod
    def uniform(self, low: float, high: float, size: int) -> np.ndarray:
        """`size` draws from the half-open interval [low, high)."""

    @abstractmethod
    def uniform_inclusive(self, low: float, high: float, size: int) -> np.ndarray:
        """`size` draws from the closed interval [low, high]."""


class NumpyRandomSource(RandomSource):
    """
    Backed by numpy's Generator (PCG64). Two instances built with the same
    seed produce the same stream of draws.
    """

    def __init__(self, seed=None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def uniform(self, low, high, size):
        return self.rng.uniform(low, high, size)

    def uniform_inclusive(self, low, high, size):
        # Generator.uniform is half-open; widen by one ulp so `high` can be drawn
        draws = self.rng.uniform(low, np.nextafter(high, np.inf), size)
        return np.minimum(draws, high)


class ConstantRandomSource(RandomSource):
    """Returns the same value for every draw, clipped into the requested interval."""

    def __init__(self, value=0.0):
        self.value = float(value)

    def uniform(self, low, high, size):
        value = min(max(self.value, low), np.nextafter(high, -np.inf))
        return np.full(size, value, dtype=float)

    def uniform_inclusive(self, low, high, size):
        return np.full(size, min(max(self.value, low), high), dtype=float)
