from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import numpy as np

from .result import IterationStats
from swarmviz.utils.logging import get_logger
from swarmviz.utils.seeding import RandomSource

StatsCallback = Callable[[IterationStats], None]

# keys whose change forces the population to be rebuilt
SIZE_KEYS = ("population_size",)


class InvalidConfigurationError(ValueError):
    """Engine parameters rejected at initialization time."""


def readonly(arr: np.ndarray) -> np.ndarray:
    out = np.array(arr, dtype=float, copy=True)
    out.flags.writeable = False
    return out


class BaseEngine(ABC):
    """
    Shared contract of the simulation engines.

    - initialize / reset / configure rebuild state between ticks only
    - tick() performs one synchronous step and returns IterationStats
    - a paused engine ticks as a no-op
    - snapshot() hands read-only copies to renderers
    """

    name: str = "BaseEngine"
    display_name: str = "BaseEngine"
    stats_interval: int = 1
    size_keys = SIZE_KEYS

    def __init__(
        self,
        params: Optional[Dict[str, Any]] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        logger_name: str = "swarmviz",
    ):
        self.logger = get_logger(logger_name)
        self.rng = rng if rng is not None else RandomSource(seed)
        self.params: Dict[str, Any] = {}
        self.iteration = 0
        self.initialize(params)

    # ---------- configuration ----------
    @classmethod
    def default_params(cls) -> Dict[str, Any]:
        return {
            "population_size": 30,
            "speed": 30,
            "is_running": True,
        }

    @classmethod
    def param_schema(cls) -> Dict[str, Any]:
        return {
            "population_size": {"type": int, "min": 1, "max": 10000},
            "speed": {"type": int, "min": 0, "max": 100},
            "is_running": {"type": bool},
        }

    @classmethod
    def validate_params(cls, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        schema = cls.param_schema()
        out = dict(cls.default_params())
        out.update(params or {})

        for k, rules in schema.items():
            if k not in out:
                raise InvalidConfigurationError(f"Missing parameter: {k}")

            v = out[k]
            t = rules.get("type")

            # bool is an int subclass; keep the two apart
            if t is not None and (not isinstance(v, t) or (t is int and isinstance(v, bool))):
                raise InvalidConfigurationError(f"Param '{k}' must be {t.__name__}, got {type(v).__name__}")

            if "min" in rules and v < rules["min"]:
                raise InvalidConfigurationError(f"Param '{k}' must be >= {rules['min']}, got {v}")

            if "max" in rules and v > rules["max"]:
                raise InvalidConfigurationError(f"Param '{k}' must be <= {rules['max']}, got {v}")

            if "choices" in rules and v not in rules["choices"]:
                raise InvalidConfigurationError(f"Param '{k}' must be one of {rules['choices']}, got {v}")

        return out

    # ---------- lifecycle ----------
    def initialize(self, params: Optional[Dict[str, Any]] = None) -> None:
        self.params = self.validate_params(params)
        self.iteration = 0
        self._build()
        self.logger.info(f"INIT {self.name} | params={self.params}")

    def reset(self) -> None:
        self.iteration = 0
        self._build()
        self.logger.info(f"RESET {self.name} | population={self.population_size}")

    def configure(self, **changes: Any) -> bool:
        """
        Apply parameter changes. Returns True if the engine was rebuilt.
        """
        merged = dict(self.params)
        merged.update(changes)
        validated = self.validate_params(merged)
        rebuild = any(validated[k] != self.params.get(k) for k in self.size_keys)
        if rebuild:
            self.initialize(validated)
        else:
            self.params = validated
        return rebuild

    def set_running(self, flag: bool) -> None:
        self.configure(is_running=bool(flag))

    @property
    def is_running(self) -> bool:
        return self.params["is_running"]

    @property
    def speed(self) -> int:
        return self.params["speed"]

    @property
    def population_size(self) -> int:
        return self.params["population_size"]

    # ---------- stepping ----------
    def tick(self) -> IterationStats:
        if not self.is_running:
            return self.stats()
        self._step()
        return self.stats()

    def stats(self) -> IterationStats:
        return IterationStats(
            iteration=self.iteration,
            best_score=self.best_score,
            population_size=self.population_size,
        )

    @staticmethod
    def frame_delay(speed: int) -> float:
        """Seconds the driver waits between ticks; higher speed means shorter delay."""
        return max(0, 100 - speed) / 1000.0

    @property
    @abstractmethod
    def best_score(self) -> float:
        raise NotImplementedError

    @property
    def best_solution(self) -> Any:
        return None

    @abstractmethod
    def _build(self) -> None:
        """Discard and recreate the population and any size-dependent state."""
        raise NotImplementedError

    @abstractmethod
    def _step(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> Dict[str, Any]:
        raise NotImplementedError
