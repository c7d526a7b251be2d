from __future__ import annotations

import numpy as np
import pytest

from swarmviz.problems.tsp import TSPProblem


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeTextClient:
    def __init__(self, reply: str = "Pheromone is piling up on the short edges.", error: Exception = None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client():
    return FakeTextClient


@pytest.fixture
def pentagon_tsp() -> TSPProblem:
    """Five cities at fixed coordinates, roughly a pentagon."""
    coords = np.array([
        [300.0, 100.0],
        [490.0, 240.0],
        [420.0, 470.0],
        [180.0, 470.0],
        [110.0, 240.0],
    ])
    return TSPProblem(coords=coords, name_="pentagon")
