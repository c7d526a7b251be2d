# swarmviz/problems/base.py

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ProblemInfo:
    name: str
    problem_type: str  # "tsp" | "tracking" | "landscape"
    objective: str     # "minimize" | "maximize"
    dimension: Optional[int] = None
    extra: Dict[str, Any] = None


class FitnessLandscape(ABC):
    """
    Pure evaluation function an engine scores its candidates against.
    Implementations hold no per-run state beyond their own definition.
    """

    @abstractmethod
    def info(self) -> ProblemInfo:
        raise NotImplementedError

    @abstractmethod
    def evaluate(self, solution: Any) -> float:
        raise NotImplementedError

    @abstractmethod
    def get_llm_description(self) -> Dict[str, Any]:
        """
        Short standard summary handed to the narrator.
        """
        raise NotImplementedError

    @property
    def maximize(self) -> bool:
        return self.info().objective == "maximize"
