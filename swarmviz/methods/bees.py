from __future__ import annotations

from typing import Any, Dict, List, Optional
import numpy as np

from .base import BaseEngine, readonly
from swarmviz.constants import BEES_NAME, CANVAS_SIZE
from swarmviz.problems.landscape import MultiPeakLandscape
from swarmviz.utils.seeding import RandomSource

ELITE_FRACTION = 0.2
GOOD_FRACTION = 0.5      # elite sites are counted inside this share
ELITE_RADIUS = 10.0      # half-width of the elite neighborhood, per axis
GOOD_RADIUS = 25.0


class BeesEngine(BaseEngine):
    """
    Bees Algorithm with elite, other-good and scout tiers on a 2D landscape.
    Maximization: the running best score never decreases.
    """

    name = "Bees"
    display_name = BEES_NAME

    def __init__(
        self,
        params: Optional[Dict[str, Any]] = None,
        landscape: Optional[MultiPeakLandscape] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        logger_name: str = "swarmviz",
    ):
        self.landscape = landscape or MultiPeakLandscape.default()
        super().__init__(params=params, rng=rng, seed=seed, logger_name=logger_name)

    def _build(self) -> None:
        self.size = self.landscape.size
        self.positions = self.rng.uniform_points(self.population_size, 0.0, self.size)
        self.scores = np.zeros(self.population_size, dtype=float)
        self.best = 0.0
        self.best_position: Optional[np.ndarray] = None
        self.n_elite = 0
        self.n_recruited = 0
        self.n_scouts = self.population_size

    @property
    def best_score(self) -> float:
        return self.best

    @property
    def best_solution(self) -> Optional[List[float]]:
        return None if self.best_position is None else self.best_position.tolist()

    def _neighbor(self, site: np.ndarray, radius: float) -> np.ndarray:
        dx, dy = self.rng.jitter(radius)
        return np.clip(site + np.array([dx, dy]), 0.0, self.size)

    def _scout(self) -> np.ndarray:
        return np.array([self.rng.uniform(0.0, self.size), self.rng.uniform(0.0, self.size)])

    def _step(self) -> None:
        self.iteration += 1
        n = self.population_size

        scores = self.landscape.evaluate_many(self.positions)
        # stable descending sort
        order = np.argsort(-scores, kind="stable")
        ranked = self.positions[order]
        scores = scores[order]

        if scores[0] > self.best:
            self.best = float(scores[0])
            self.best_position = ranked[0].copy()

        elite_count = int(np.floor(n * ELITE_FRACTION))
        good_count = int(np.floor(n * GOOD_FRACTION))

        new_bees: List[np.ndarray] = []
        for i in range(elite_count):
            new_bees.append(np.clip(ranked[i], 0.0, self.size))
            new_bees.append(self._neighbor(ranked[i], ELITE_RADIUS))
        n_recruited = elite_count

        for i in range(elite_count, good_count):
            if len(new_bees) < n:
                new_bees.append(self._neighbor(ranked[i], GOOD_RADIUS))
                n_recruited += 1

        n_kept = len(new_bees)
        while len(new_bees) < n:
            new_bees.append(self._scout())

        self.positions = np.array(new_bees[:n], dtype=float)
        self.scores = scores
        self.n_elite = elite_count
        self.n_recruited = n_recruited
        self.n_scouts = len(self.positions) - min(n_kept, n)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "algorithm": self.display_name,
            "iteration": self.iteration,
            "positions": readonly(self.positions),
            "site_scores": readonly(self.scores),  # last evaluation, best first
            "n_elite": self.n_elite,
            "n_recruited": self.n_recruited,
            "n_scouts": self.n_scouts,
            "best_score": self.best,
            "best_position": None if self.best_position is None else readonly(self.best_position),
        }
