# swarmviz/problems/landscape.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

import numpy as np

from swarmviz.constants import CANVAS_CENTER, CANVAS_SIZE
from .base import FitnessLandscape, ProblemInfo


@dataclass(frozen=True)
class Peak:
    x: float
    y: float
    height: float
    spread: float  # distance at which the peak decays to height / e


def _default_peaks() -> List[Peak]:
    cx = cy = CANVAS_CENTER
    return [
        Peak(cx, cy, 100.0, 100.0),
        Peak(cx - 150.0, cy + 100.0, 80.0, 80.0),
        Peak(cx + 150.0, cy - 150.0, 60.0, 60.0),
    ]


@dataclass
class MultiPeakLandscape(FitnessLandscape):
    """
    Sum of exponential peaks, f(p) = sum(h * exp(-|p - c| / s)).
    Non-negative everywhere; higher is better.
    """
    peaks: Sequence[Peak] = field(default_factory=_default_peaks)
    size: float = CANVAS_SIZE

    def __post_init__(self):
        self.peaks = list(self.peaks)
        if not self.peaks:
            raise ValueError("landscape needs at least one peak")
        for p in self.peaks:
            if p.height < 0 or p.spread <= 0:
                raise ValueError(f"invalid peak {p}: height must be >= 0 and spread > 0")
        self._centers = np.array([[p.x, p.y] for p in self.peaks], dtype=float)
        self._heights = np.array([p.height for p in self.peaks], dtype=float)
        self._spreads = np.array([p.spread for p in self.peaks], dtype=float)

    @staticmethod
    def default() -> "MultiPeakLandscape":
        return MultiPeakLandscape()

    @staticmethod
    def single_peak(x: float, y: float, height: float = 100.0, spread: float = 100.0) -> "MultiPeakLandscape":
        return MultiPeakLandscape(peaks=[Peak(x, y, height, spread)])

    def info(self) -> ProblemInfo:
        return ProblemInfo(
            name=f"landscape_{len(self.peaks)}peaks",
            problem_type="landscape",
            objective="maximize",
            dimension=2,
            extra={"bounds": [0.0, self.size], "representation": "real"},
        )

    def evaluate(self, solution: Any) -> float:
        x = np.asarray(solution, dtype=float).reshape(1, 2)
        return float(self.evaluate_many(x)[0])

    def evaluate_many(self, positions: np.ndarray) -> np.ndarray:
        pts = np.asarray(positions, dtype=float)
        diff = pts[:, None, :] - self._centers[None, :, :]
        d = np.sqrt(np.sum(diff ** 2, axis=2))
        return np.sum(self._heights * np.exp(-d / self._spreads), axis=1)

    def peak_value(self) -> float:
        """Best value over the peak centers; exact for a single peak."""
        return float(np.max(self.evaluate_many(self._centers)))

    def grid(self, resolution: int = 120) -> np.ndarray:
        # rows are y, columns are x
        axis = np.linspace(0.0, self.size, resolution)
        xx, yy = np.meshgrid(axis, axis)
        pts = np.column_stack([xx.ravel(), yy.ravel()])
        return self.evaluate_many(pts).reshape(resolution, resolution)

    def get_llm_description(self) -> Dict[str, Any]:
        return {
            "problem_type": "landscape",
            "task": "find the highest flower patch on a 2D landscape",
            "objective": "maximize",
            "representation": "real",
            "dimension": 2,
            "bounds": {"lower": 0.0, "upper": self.size},
            "known_optimum": self.peak_value(),
            "notes": "Multi-modal landscape built from exponential peaks.",
        }
