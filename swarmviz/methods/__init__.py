# swarmviz/methods/__init__.py
from .base import BaseEngine, InvalidConfigurationError, StatsCallback
from .result import IterationStats, RunResult

# Import all engines
from .aco import ACOEngine
from .gwo import GWOEngine, Phase, Rank, Wolf
from .bees import BeesEngine

ENGINES = {
    "ACO": ACOEngine,
    "GWO": GWOEngine,
    "BEES": BeesEngine,
}


def build_engine(name: str, **kwargs) -> BaseEngine:
    key = name.strip().upper()
    if key not in ENGINES:
        raise ValueError(f"Unknown engine: {name}. Choose from {list(ENGINES)}")
    return ENGINES[key](**kwargs)


__all__ = [
    "BaseEngine",
    "InvalidConfigurationError",
    "StatsCallback",
    "IterationStats",
    "RunResult",
    "ACOEngine",
    "GWOEngine",
    "Phase",
    "Rank",
    "Wolf",
    "BeesEngine",
    "ENGINES",
    "build_engine",
]
