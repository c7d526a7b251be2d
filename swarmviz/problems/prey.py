# swarmviz/problems/prey.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np

from swarmviz.constants import CANVAS_CENTER
from .base import FitnessLandscape, ProblemInfo

PREY_AMPLITUDE_X = 150.0
PREY_AMPLITUDE_Y = 80.0
PREY_ANGULAR_SPEED = 0.5  # radians per second of elapsed time


def prey_position(elapsed_sec: float) -> Tuple[float, float]:
    """Point on the 1:2 Lissajous curve the prey follows around the canvas center."""
    t = elapsed_sec * PREY_ANGULAR_SPEED
    return (
        CANVAS_CENTER + math.cos(t) * PREY_AMPLITUDE_X,
        CANVAS_CENTER + math.sin(t * 2) * PREY_AMPLITUDE_Y,
    )


@dataclass
class PreyDistanceProblem(FitnessLandscape):
    """
    Distance of a wolf to the prey. Lower is better.
    """
    prey: np.ndarray = field(default_factory=lambda: np.array([CANVAS_CENTER, CANVAS_CENTER]))

    def __post_init__(self):
        self.prey = np.asarray(self.prey, dtype=float).reshape(2)

    def move_to(self, x: float, y: float) -> None:
        self.prey = np.array([x, y], dtype=float)

    def info(self) -> ProblemInfo:
        return ProblemInfo(
            name="prey_tracking",
            problem_type="tracking",
            objective="minimize",
            dimension=2,
            extra={"representation": "real", "prey": self.prey.tolist()},
        )

    def evaluate(self, solution: Any) -> float:
        x = np.asarray(solution, dtype=float).reshape(2)
        return float(np.hypot(*(x - self.prey)))

    def evaluate_many(self, positions: np.ndarray) -> np.ndarray:
        diff = np.asarray(positions, dtype=float) - self.prey
        return np.sqrt(np.sum(diff ** 2, axis=1))

    def get_llm_description(self) -> Dict[str, Any]:
        return {
            "problem_type": "tracking",
            "task": "encircle a moving prey",
            "objective": "minimize",
            "representation": "real",
            "dimension": 2,
            "notes": "Fitness is the Euclidean distance from a wolf to the prey.",
        }
