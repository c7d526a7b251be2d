from __future__ import annotations

import os
from typing import Optional, Protocol

from swarmviz.methods.result import IterationStats
from swarmviz.orchestrator.chatanywhere_client import ChatAnywhereClient
from swarmviz.orchestrator.gemini_client import GeminiClient
from swarmviz.utils.logging import get_logger

NO_KEY_MESSAGE = "API Key not found. Please configure the environment."
UNAVAILABLE_MESSAGE = "AI explanation temporarily unavailable."
EMPTY_MESSAGE = "Analyzing simulation data..."

BACKENDS = {
    "gemini": GeminiClient,
    "chatanywhere": ChatAnywhereClient,
}


class TextClient(Protocol):
    def generate_text(self, prompt: str) -> str: ...


def should_narrate(iteration: int, every: int = 100) -> bool:
    return iteration == 0 or iteration % every == 0


def build_prompt(algorithm_name: str, stats: IterationStats) -> str:
    return (
        "You are an expert computer scientist teaching nature-inspired optimization algorithms visually.\n"
        f"The user is currently running a simulation of the **{algorithm_name}**.\n\n"
        "Current Stats:\n"
        f"- Iteration: {stats.iteration}\n"
        f"- Best Score/Distance: {stats.best_score:.2f}\n"
        f"- Population: {stats.population_size}\n\n"
        "Provide a concise, 2-sentence insight about what is conceptually happening right now in the "
        "algorithm based on these stats.\n"
        'Focus on the "why" (e.g., pheromone evaporation, wolf hierarchy, bee recruitment).\n'
        "Keep it encouraging and educational."
    )


class Narrator:
    """
    Turns (algorithm, stats) into a short explanation from an LLM.

    The simulation never depends on it: a missing key or a failed call
    degrades to a fixed message.
    """

    def __init__(self, client: Optional[TextClient] = None, backend: Optional[str] = None):
        self.logger = get_logger("swarmviz.narrator")
        self.backend = (backend or os.getenv("SWARMVIZ_LLM_BACKEND") or "gemini").strip().lower()
        self._client = client
        self._client_missing = False
        self._fallback = NO_KEY_MESSAGE

    def _get_client(self) -> Optional[TextClient]:
        if self._client is not None or self._client_missing:
            return self._client
        factory = BACKENDS.get(self.backend)
        if factory is None:
            self.logger.warning(f"Unknown narration backend '{self.backend}'")
            self._client_missing = True
            return None
        try:
            self._client = factory()
        except RuntimeError as e:
            # the clients raise RuntimeError when no key is configured
            self.logger.warning(f"Narration disabled | {e}")
            self._client_missing = True
        except Exception as e:
            self.logger.warning(f"Narration backend '{self.backend}' failed to start | error={e}")
            self._client_missing = True
            self._fallback = UNAVAILABLE_MESSAGE
        return self._client

    def explain(self, algorithm_name: str, stats: IterationStats) -> str:
        client = self._get_client()
        if client is None:
            return self._fallback

        try:
            text = client.generate_text(build_prompt(algorithm_name, stats))
        except Exception as e:
            # network/API failures stay on this side of the boundary
            self.logger.error(f"Narration failed | algorithm={algorithm_name} | error={e}")
            return UNAVAILABLE_MESSAGE

        return (text or "").strip() or EMPTY_MESSAGE

    def __call__(self, algorithm_name: str, stats: IterationStats) -> str:
        return self.explain(algorithm_name, stats)
