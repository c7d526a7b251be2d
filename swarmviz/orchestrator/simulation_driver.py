from __future__ import annotations

import time
from typing import Any, Callable, List, Optional

from swarmviz.methods.base import BaseEngine, StatsCallback
from swarmviz.methods.result import IterationStats, RunResult
from swarmviz.orchestrator.narrator import Narrator, should_narrate
from swarmviz.utils.logging import get_logger
from swarmviz.utils.seeding import set_global_seed


class SimulationDriver:
    """
    Animation-loop stand-in: calls engine.tick() at the cadence the engine's
    speed asks for and forwards stats to a sink.

    - stats are forwarded every engine.stats_interval ticks
    - narration is requested when a forwarded iteration hits narrate_every
    - stop() is cooperative and takes effect between ticks
    """

    def __init__(
        self,
        engine: BaseEngine,
        stats_cb: Optional[StatsCallback] = None,
        narrator: Optional[Narrator] = None,
        narrate_every: int = 100,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.engine = engine
        self.stats_cb = stats_cb
        self.narrator = narrator
        self.narrate_every = narrate_every
        self.sleep = sleep
        self.logger = get_logger("swarmviz.driver")

        self.ticks = 0
        self.history: List[float] = []
        self.last_stats: Optional[IterationStats] = None
        self.last_narration: Optional[str] = None
        self._last_narrated: Optional[int] = None
        self._stop_requested = False

    # ---------- controls ----------
    def pause(self) -> None:
        self.engine.set_running(False)

    def resume(self) -> None:
        self.engine.set_running(True)

    def stop(self) -> None:
        self._stop_requested = True

    def set_speed(self, speed: int) -> None:
        self.engine.configure(speed=speed)

    def set_population_size(self, population_size: int) -> None:
        if self.engine.configure(population_size=population_size):
            self._clear()

    def reset(self) -> None:
        self.engine.reset()
        self._clear()

    def _clear(self) -> None:
        self.ticks = 0
        self.history = []
        self.last_stats = None
        self._last_narrated = None

    # ---------- stepping ----------
    def step(self) -> IterationStats:
        stats = self.engine.tick()
        self.ticks += 1
        if self.ticks % self.engine.stats_interval == 0:
            self._forward(stats)
        return stats

    def _forward(self, stats: IterationStats) -> None:
        self.last_stats = stats
        self.history.append(stats.best_score)
        if self.stats_cb:
            self.stats_cb(stats)

        if (
            self.narrator is not None
            and stats.iteration != self._last_narrated
            and should_narrate(stats.iteration, self.narrate_every)
        ):
            self._last_narrated = stats.iteration
            self.last_narration = self.narrator.explain(self.engine.display_name, stats)

    def run(self, n_ticks: int, realtime: bool = False, seed: Optional[int] = None) -> RunResult:
        """
        Tick the engine up to n_ticks times.

        With a seed, the engine's RandomSource is reseeded and the engine is
        reset, so the run starts from a reproducible population. The problem
        instance (ACO cities, Bees landscape) is kept as it is.
        """
        set_global_seed(seed)
        engine = self.engine
        if seed is not None:
            engine.rng.reseed(seed)
            self.reset()
        self._stop_requested = False

        self.logger.info(f"START {engine.name} | ticks={n_ticks} | params={engine.params}")

        t0 = time.time()
        done = 0
        status = "ok"
        try:
            for _ in range(n_ticks):
                if self._stop_requested:
                    status = "stopped"
                    break
                self.step()
                done += 1
                if realtime:
                    self.sleep(engine.frame_delay(engine.speed))
        except Exception as e:
            self.logger.exception(f"FAILED {engine.name} | error={e}")
            return self._result(t0, done, "failed", message=str(e))

        res = self._result(t0, done, status)
        self.logger.info(
            f"END {engine.name} | best={res.best_score} | iters={res.iterations} | time={res.time_sec:.3f}s"
        )
        return res

    def _result(self, t0: float, ticks: int, status: str, message: Optional[str] = None) -> RunResult:
        engine = self.engine
        return RunResult(
            method_name=engine.name,
            best_solution=engine.best_solution,
            best_score=engine.best_score,
            history=list(self.history),
            time_sec=time.time() - t0,
            ticks=ticks,
            iterations=engine.iteration,
            status=status,
            params_used=dict(engine.params),
            message=message,
        )

    def snapshot(self) -> Any:
        return self.engine.snapshot()
