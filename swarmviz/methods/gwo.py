from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from .base import BaseEngine, readonly
from swarmviz.constants import CANVAS_SIZE, GWO_NAME
from swarmviz.problems.prey import PreyDistanceProblem, prey_position
from swarmviz.utils.seeding import RandomSource

PHASE_DURATION = 150.0   # timer units per phase
LERP_RATE = 0.05         # blend factor per tick at full speed
TARGET_MARGIN = 10.0     # computed targets stay this far inside the canvas
A_DECAY_ITERATIONS = 1000
FRAME_INTERVAL = 1.0 / 60.0


class Phase(str, Enum):
    MOVE_PREY = "PREY_MOVING"
    EVALUATE = "EVALUATING_FITNESS"
    RANK = "UPDATING_HIERARCHY"
    CALCULATE = "CALCULATING_VECTORS"
    MOVE_WOLVES = "WOLVES_HUNTING"


class Rank(str, Enum):
    ALPHA = "alpha"
    BETA = "beta"
    DELTA = "delta"
    OMEGA = "omega"


# fixed cyclic transition table
TRANSITIONS = {
    Phase.MOVE_PREY: Phase.EVALUATE,
    Phase.EVALUATE: Phase.RANK,
    Phase.RANK: Phase.CALCULATE,
    Phase.CALCULATE: Phase.MOVE_WOLVES,
    Phase.MOVE_WOLVES: Phase.MOVE_PREY,
}

# text shown once the phase's action has run
PHASE_DESCRIPTIONS = {
    Phase.MOVE_PREY: "Oh no! The Prey is moving away. The pack needs to track it down.",
    Phase.EVALUATE: "Evaluating... Determining which wolf is closest to the prey.",
    Phase.RANK: "Pack Hierarchy Updated! We identified the Alpha (Gold), Beta (Cyan), and Delta (Orange).",
    Phase.CALCULATE: "Planning... The Omegas are triangulating their next move based on the leaders' positions.",
    Phase.MOVE_WOLVES: "Hunting! The whole pack moves in to encircle the prey.",
}

MOVING_PHASES = (Phase.MOVE_WOLVES, Phase.MOVE_PREY)
LEADER_RANKS = (Rank.ALPHA, Rank.BETA, Rank.DELTA)


@dataclass
class Wolf:
    id: int
    position: np.ndarray  # (2,)
    target: np.ndarray    # (2,)
    score: float = float("inf")
    rank: Rank = Rank.OMEGA


def speed_multiplier(speed: int) -> float:
    return 0.2 + (speed / 100.0) * 0.8


class GWOEngine(BaseEngine):
    """
    Grey Wolf Optimizer as a five-phase state machine.

    Each tick advances a phase timer; when it crosses PHASE_DURATION the
    current phase's action runs and the machine moves to the next phase.
    Positions blend toward their targets every tick of the moving phases,
    so one full cycle equals one logical GWO iteration.
    """

    name = "GWO"
    display_name = GWO_NAME
    stats_interval = 10

    def __init__(
        self,
        params: Optional[Dict[str, Any]] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        logger_name: str = "swarmviz",
    ):
        self.clock = clock
        self.prey = PreyDistanceProblem()
        super().__init__(params=params, rng=rng, seed=seed, logger_name=logger_name)
        self._actions = {
            Phase.MOVE_PREY: self._move_prey,
            Phase.EVALUATE: self._evaluate,
            Phase.RANK: self._rank,
            Phase.CALCULATE: self._calculate,
            Phase.MOVE_WOLVES: self._move_wolves,
        }

    @classmethod
    def default_params(cls) -> Dict[str, Any]:
        out = super().default_params()
        out.update({
            "population_size": 30,
            "reuse_beta_draw": True,
        })
        return out

    @classmethod
    def param_schema(cls) -> Dict[str, Any]:
        out = super().param_schema()
        # the leader hierarchy needs alpha, beta and delta
        out["population_size"] = {"type": int, "min": 3, "max": 10000}
        out["reuse_beta_draw"] = {"type": bool}
        return out

    @staticmethod
    def frame_delay(speed: int) -> float:
        # phase pacing lives in the timer, the driver ticks every frame
        return FRAME_INTERVAL

    # ---------- state ----------
    def _build(self) -> None:
        n = self.population_size
        pos = self.rng.uniform_points(n, 0.0, CANVAS_SIZE)
        self.wolves: List[Wolf] = [
            Wolf(id=i, position=pos[i].copy(), target=pos[i].copy())
            for i in range(n)
        ]
        self.prey.move_to(CANVAS_SIZE / 2, CANVAS_SIZE / 2)
        self.phase = Phase.EVALUATE
        self.phase_timer = 0.0
        self.phase_description = "Initializing simulation..."
        self.ticks = 0
        self._t0 = self.clock()

    @property
    def alpha(self) -> Optional[Wolf]:
        return self._leader(Rank.ALPHA)

    @property
    def beta(self) -> Optional[Wolf]:
        return self._leader(Rank.BETA)

    @property
    def delta(self) -> Optional[Wolf]:
        return self._leader(Rank.DELTA)

    def _leader(self, rank: Rank) -> Optional[Wolf]:
        return next((w for w in self.wolves if w.rank is rank), None)

    @property
    def best_score(self) -> float:
        a = self.alpha
        return a.score if a is not None else 0.0

    @property
    def best_solution(self) -> Optional[List[float]]:
        a = self.alpha
        return a.position.tolist() if a is not None else None

    # ---------- phase actions ----------
    def _move_prey(self) -> None:
        x, y = prey_position(self.clock() - self._t0)
        self.prey.move_to(x, y)

    def _evaluate(self) -> None:
        positions = np.array([w.position for w in self.wolves])
        scores = self.prey.evaluate_many(positions)
        for w, s in zip(self.wolves, scores):
            w.score = float(s)

    def _rank(self) -> None:
        # sorted() is stable, first-seen wins ties
        ordered = sorted(self.wolves, key=lambda w: w.score)
        for w in self.wolves:
            w.rank = Rank.OMEGA
        for w, rank in zip(ordered, LEADER_RANKS):
            w.rank = rank

    def _gwo_axis(self, current: float, leaders: List[float], a: float) -> float:
        r1, r2 = self.rng.random(), self.rng.random()
        A1 = 2 * a * r1 - a
        C1 = 2 * r2
        X1 = leaders[0] - A1 * abs(C1 * leaders[0] - current)

        r3, r4 = self.rng.random(), self.rng.random()
        A2 = 2 * a * r3 - a
        C2 = 2 * r4
        X2 = leaders[1] - A2 * abs(C2 * leaders[1] - current)

        r5, r6 = self.rng.random(), self.rng.random()
        # reuse_beta_draw keeps the reference behavior where A3 is built from r3
        A3 = 2 * a * (r3 if self.params["reuse_beta_draw"] else r5) - a
        C3 = 2 * r6
        X3 = leaders[2] - A3 * abs(C3 * leaders[2] - current)

        return (X1 + X2 + X3) / 3

    def _calculate(self) -> None:
        leaders = [self.alpha, self.beta, self.delta]
        if any(w is None for w in leaders):
            return
        # not clamped: past iteration 1000 the coefficient goes negative
        a = 2 - 2 * (self.iteration / A_DECAY_ITERATIONS)
        for w in self.wolves:
            target = np.array([
                self._gwo_axis(w.position[axis], [l.position[axis] for l in leaders], a)
                for axis in range(2)
            ])
            w.target = np.clip(target, TARGET_MARGIN, CANVAS_SIZE - TARGET_MARGIN)

    def _move_wolves(self) -> None:
        self.iteration += 1

    # ---------- one tick ----------
    def advance_phase(self) -> Phase:
        """Run the current phase's action and move to the next phase."""
        done = self.phase
        self._actions[done]()
        self.phase_description = PHASE_DESCRIPTIONS[done]
        self.phase = TRANSITIONS[done]
        return self.phase

    def _step(self) -> None:
        self.ticks += 1
        mult = speed_multiplier(self.speed)
        self.phase_timer += mult

        if self.phase_timer >= PHASE_DURATION:
            self.phase_timer = 0.0
            self.advance_phase()

        if self.phase in MOVING_PHASES:
            t = LERP_RATE * mult
            for w in self.wolves:
                w.position = w.position * (1 - t) + w.target * t

    def snapshot(self) -> Dict[str, Any]:
        return {
            "algorithm": self.display_name,
            "iteration": self.iteration,
            "phase": self.phase.value,
            "phase_timer": self.phase_timer,
            "phase_description": self.phase_description,
            "prey": readonly(self.prey.prey),
            "positions": readonly(np.array([w.position for w in self.wolves])),
            "targets": readonly(np.array([w.target for w in self.wolves])),
            "scores": readonly(np.array([w.score for w in self.wolves])),
            "ranks": [w.rank.value for w in self.wolves],
        }
