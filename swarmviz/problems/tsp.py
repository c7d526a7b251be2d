# swarmviz/problems/tsp.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np

from swarmviz.constants import CANVAS_SIZE
from swarmviz.utils.seeding import RandomSource
from .base import FitnessLandscape, ProblemInfo

CITY_MARGIN = 20.0


@dataclass
class TSPProblem(FitnessLandscape):
    """
    Cities on the canvas, scored by closed Euclidean tour length.

    A tour is a permutation of 0..n-1; the edge from the last city back
    to the first is always included. Lower is better.
    """
    coords: np.ndarray  # (n, 2), canvas coordinates
    name_: str = "tsp"

    def __post_init__(self):
        self.coords = np.asarray(self.coords, dtype=float)
        if self.coords.ndim != 2 or self.coords.shape[1] != 2:
            raise ValueError(f"city coordinates must have shape (n, 2), got {self.coords.shape}")
        self.n = len(self.coords)
        if self.n < 3:
            raise ValueError(f"a tour needs at least 3 cities, got {self.n}")

        # symmetric, zero diagonal
        self.D = np.linalg.norm(self.coords[:, None, :] - self.coords[None, :, :], axis=2)

    @staticmethod
    def random(n_cities: int = 15, rng: Optional[RandomSource] = None, size: float = CANVAS_SIZE) -> "TSPProblem":
        rng = rng or RandomSource()
        coords = rng.uniform_points(n_cities, CITY_MARGIN, size - CITY_MARGIN)
        return TSPProblem(coords=coords, name_=f"canvas_{n_cities}_cities")

    def tour_length(self, tour: Sequence[int]) -> float:
        idx = np.asarray(tour, dtype=int)
        return float(np.sum(self.D[idx, np.roll(idx, -1)]))

    def is_tour(self, tour: Sequence[int]) -> bool:
        idx = np.asarray(tour, dtype=int).reshape(-1)
        return idx.size == self.n and np.array_equal(np.sort(idx), np.arange(self.n))

    def evaluate(self, solution: Any) -> float:
        if not self.is_tour(solution):
            raise ValueError(f"not a tour over {self.n} cities: {list(np.asarray(solution).reshape(-1))}")
        return self.tour_length(solution)

    def info(self) -> ProblemInfo:
        return ProblemInfo(
            name=self.name_,
            problem_type="tsp",
            objective="minimize",
            dimension=self.n,
            extra={"representation": "permutation", "n_cities": self.n, "closed": True},
        )

    def get_llm_description(self) -> Dict[str, Any]:
        return {
            "problem_type": "tsp",
            "task": "shortest closed tour through every city on the canvas",
            "objective": "minimize",
            "representation": "permutation",
            "n_cities": self.n,
            "notes": "Ants build tours city by city; the tour length includes the return edge.",
        }
