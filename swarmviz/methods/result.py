from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class IterationStats:
    iteration: int
    best_score: float
    population_size: int

    def to_dict(self) -> Dict[str, Any]:
        # payload shape the stats sink consumes
        return {
            "iteration": self.iteration,
            "bestScore": self.best_score,
            "populationSize": self.population_size,
        }


@dataclass
class RunResult:
    method_name: str
    best_solution: Any
    best_score: float

    # best score at every sampled tick, for convergence plots
    history: List[float] = field(default_factory=list)

    time_sec: float = 0.0
    ticks: int = 0
    iterations: int = 0
    status: str = "ok"  # ok / stopped / failed
    params_used: Dict[str, Any] = field(default_factory=dict)

    message: Optional[str] = None
