# swarmviz/utils/seeding.py

from __future__ import annotations
import random
from typing import Optional, Tuple

import numpy as np


def set_global_seed(seed: Optional[int]) -> None:
    if seed is None:
        return
    random.seed(seed)
    np.random.seed(seed)


class RandomSource:
    """
    Seedable uniform random generator shared by one engine.

    Every stochastic step of an engine draws from the RandomSource it was
    built with, so two engines created with the same seed replay the same
    run tick for tick.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def reseed(self, seed: Optional[int]) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def generator(self) -> np.random.Generator:
        return self._rng

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._rng.random())

    def uniform(self, low: float, high: float) -> float:
        return float(self._rng.uniform(low, high))

    def integers(self, low: int, high: int) -> int:
        """Uniform int in [low, high)."""
        return int(self._rng.integers(low, high))

    def uniform_points(self, n: int, low: float, high: float) -> np.ndarray:
        # shape (n, 2)
        return self._rng.uniform(low, high, size=(n, 2))

    def jitter(self, radius: float) -> Tuple[float, float]:
        """Offset uniform in [-radius, radius) on each axis."""
        dx = (self.random() - 0.5) * 2.0 * radius
        dy = (self.random() - 0.5) * 2.0 * radius
        return dx, dy

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"
