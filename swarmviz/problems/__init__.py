# swarmviz/problems/__init__.py
from .base import FitnessLandscape, ProblemInfo
from .tsp import TSPProblem
from .prey import PreyDistanceProblem, prey_position
from .landscape import MultiPeakLandscape, Peak

__all__ = [
    "FitnessLandscape",
    "ProblemInfo",
    "TSPProblem",
    "PreyDistanceProblem",
    "prey_position",
    "MultiPeakLandscape",
    "Peak",
]
