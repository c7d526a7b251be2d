from __future__ import annotations

from typing import Any, Dict, List, Optional
import numpy as np

from .base import BaseEngine, InvalidConfigurationError, readonly
from swarmviz.constants import ACO_NAME
from swarmviz.problems.tsp import TSPProblem
from swarmviz.utils.seeding import RandomSource

ALPHA = 1.0           # pheromone exponent
BETA = 2.0            # heuristic (1/distance) exponent
RHO = 0.1             # evaporation rate
Q = 100.0             # deposit numerator
TAU_INITIAL = 1.0
TAU_FLOOR = 1e-12     # evaporation never reaches zero


class ACOEngine(BaseEngine):
    """
    Ant System on a small Euclidean TSP.

    Every tick each ant builds a closed tour by roulette-wheel selection over
    tau^alpha * (1/d)^beta, then the whole matrix evaporates and every ant
    deposits Q / length on both directions of each edge it used.
    """

    name = "ACO"
    display_name = ACO_NAME
    size_keys = ("population_size", "n_cities")

    def __init__(
        self,
        params: Optional[Dict[str, Any]] = None,
        problem: Optional[TSPProblem] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        logger_name: str = "swarmviz",
    ):
        self._fixed_problem = problem
        self.problem: Optional[TSPProblem] = None
        if problem is not None:
            params = dict(params or {})
            params["n_cities"] = problem.n
        super().__init__(params=params, rng=rng, seed=seed, logger_name=logger_name)

    @classmethod
    def default_params(cls) -> Dict[str, Any]:
        out = super().default_params()
        out.update({
            "population_size": 20,
            "n_cities": 15,
        })
        return out

    @classmethod
    def param_schema(cls) -> Dict[str, Any]:
        out = super().param_schema()
        out["n_cities"] = {"type": int, "min": 3, "max": 500}
        return out

    def configure(self, **changes: Any) -> bool:
        if self._fixed_problem is not None and changes.get("n_cities", self._fixed_problem.n) != self._fixed_problem.n:
            raise InvalidConfigurationError("n_cities is fixed by the supplied TSPProblem")
        return super().configure(**changes)

    # ---------- state ----------
    def _build(self) -> None:
        n_cities = self.params["n_cities"]
        if self._fixed_problem is not None:
            self.problem = self._fixed_problem
        elif self.problem is None or self.problem.n != n_cities:
            # cities are drawn once and survive population resizes
            self.problem = TSPProblem.random(n_cities, rng=self.rng)

        n = self.problem.n
        self.pheromone = np.full((n, n), TAU_INITIAL, dtype=np.float64)
        with np.errstate(divide="ignore"):
            eta = 1.0 / self.problem.D
        np.fill_diagonal(eta, 0.0)
        self._eta_beta = eta ** BETA

        self.paths: List[List[int]] = []
        self.path_lengths: List[float] = []
        self.best_path: List[int] = []
        self.best_distance = float("inf")

    @property
    def best_score(self) -> float:
        return self.best_distance

    @property
    def best_solution(self) -> List[int]:
        return list(self.best_path)

    @property
    def n_cities(self) -> int:
        return self.problem.n

    # ---------- one tick ----------
    def _select_next(self, current: int, candidates: np.ndarray) -> int:
        desirability = (self.pheromone[current, candidates] ** ALPHA) * self._eta_beta[current, candidates]
        total = float(np.sum(desirability))
        if not np.isfinite(total) or total <= 0.0:
            self.logger.debug(f"{self.name} degenerate selection at city {current} | total={total}")
            return int(candidates[-1])

        r = self.rng.random() * total
        cumulative = np.cumsum(desirability)
        hits = np.nonzero(cumulative >= r)[0]
        if hits.size == 0:
            # rounding left r above the last partial sum
            return int(candidates[-1])
        return int(candidates[hits[0]])

    def _construct_tour(self) -> List[int]:
        n = self.n_cities
        current = self.rng.integers(0, n)
        tour = [current]
        visited = np.zeros(n, dtype=bool)
        visited[current] = True

        for _step in range(n - 1):
            candidates = np.nonzero(~visited)[0]
            nxt = self._select_next(current, candidates)
            tour.append(nxt)
            visited[nxt] = True
            current = nxt
        return tour

    def _evaporate(self) -> None:
        self.pheromone *= (1.0 - RHO)
        np.maximum(self.pheromone, TAU_FLOOR, out=self.pheromone)

    def _deposit(self, tour: List[int], length: float) -> None:
        if length <= 0.0:
            return  # coincident cities, nothing meaningful to reinforce
        amount = Q / length
        for i in range(len(tour)):
            a, b = tour[i], tour[(i + 1) % len(tour)]
            self.pheromone[a, b] += amount
            self.pheromone[b, a] += amount

    def _step(self) -> None:
        self.iteration += 1

        paths: List[List[int]] = []
        lengths: List[float] = []
        for _ in range(self.population_size):
            tour = self._construct_tour()
            paths.append(tour)
            lengths.append(self.problem.tour_length(tour))

        idx_best = int(np.argmin(lengths))
        if lengths[idx_best] < self.best_distance:
            self.best_distance = lengths[idx_best]
            self.best_path = list(paths[idx_best])

        self._evaporate()
        for tour, length in zip(paths, lengths):
            self._deposit(tour, length)

        self.paths = paths
        self.path_lengths = lengths

    def snapshot(self) -> Dict[str, Any]:
        return {
            "algorithm": self.display_name,
            "iteration": self.iteration,
            "cities": readonly(self.problem.coords),
            "pheromone": readonly(self.pheromone),
            "paths": [list(p) for p in self.paths],
            "best_path": list(self.best_path),
            "best_distance": self.best_distance,
        }
