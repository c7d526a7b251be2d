"""
tests/test_gwo.py
─────────────────
GWOEngine: the five-phase cycle, leader hierarchy, target computation
and interpolation.

Phase changes are driven either by advance_phase() directly or by
ticking until the phase flips, never by a hard-coded tick count.
"""

from __future__ import annotations

import numpy as np
import pytest

from swarmviz.methods.base import InvalidConfigurationError
from swarmviz.methods.gwo import (
    FRAME_INTERVAL,
    PHASE_DURATION,
    GWOEngine,
    Phase,
    Rank,
    TRANSITIONS,
    speed_multiplier,
)
from swarmviz.problems.prey import prey_position


def _tick_until_phase_change(engine: GWOEngine, limit: int = 10_000) -> int:
    start = engine.phase
    for n in range(1, limit + 1):
        engine.tick()
        if engine.phase is not start:
            return n
    raise AssertionError(f"phase stuck at {start}")


def _assert_hierarchy(engine: GWOEngine) -> None:
    ranks = [w.rank for w in engine.wolves]
    for leader in (Rank.ALPHA, Rank.BETA, Rank.DELTA):
        assert ranks.count(leader) == 1, f"expected exactly one {leader.value}"
    omega_scores = [w.score for w in engine.wolves if w.rank is Rank.OMEGA]
    assert engine.alpha.score <= engine.beta.score <= engine.delta.score
    assert all(engine.delta.score <= s for s in omega_scores)


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 1: initialization
# ─────────────────────────────────────────────────────────────────────────────

class TestInitialization:

    def test_starts_in_evaluate_with_prey_at_center(self, clock):
        engine = GWOEngine(seed=1, clock=clock)
        assert engine.phase is Phase.EVALUATE
        assert engine.phase_timer == 0.0
        assert np.allclose(engine.prey.prey, [300.0, 300.0])

    def test_wolves_inside_canvas_all_omega(self, clock):
        engine = GWOEngine(params={"population_size": 12}, seed=1, clock=clock)
        assert len(engine.wolves) == 12
        for w in engine.wolves:
            assert np.all((w.position >= 0.0) & (w.position <= 600.0))
            assert np.array_equal(w.position, w.target)
            assert w.rank is Rank.OMEGA

    def test_no_alpha_reports_zero(self, clock):
        engine = GWOEngine(seed=1, clock=clock)
        assert engine.alpha is None
        assert engine.stats().best_score == 0.0
        assert engine.best_solution is None

    @pytest.mark.parametrize("n", [1, 2])
    def test_population_below_three_rejected(self, clock, n):
        with pytest.raises(InvalidConfigurationError):
            GWOEngine(params={"population_size": n}, clock=clock)

    def test_transition_table_is_a_single_cycle(self):
        seen = []
        phase = Phase.EVALUATE
        for _ in range(len(Phase)):
            seen.append(phase)
            phase = TRANSITIONS[phase]
        assert phase is Phase.EVALUATE
        assert set(seen) == set(Phase)


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 2: phase actions
# ─────────────────────────────────────────────────────────────────────────────

class TestPhaseActions:

    def test_evaluate_scores_are_prey_distances(self, clock):
        engine = GWOEngine(params={"population_size": 6}, seed=2, clock=clock)
        engine.advance_phase()
        assert engine.phase is Phase.RANK
        for w in engine.wolves:
            assert w.score == pytest.approx(np.hypot(*(w.position - engine.prey.prey)))

    def test_rank_orders_leaders(self, clock):
        engine = GWOEngine(params={"population_size": 7}, seed=3, clock=clock)
        engine.advance_phase()
        engine.advance_phase()
        _assert_hierarchy(engine)
        assert engine.best_score == min(w.score for w in engine.wolves)

    def test_rank_ties_keep_first_seen_order(self, clock):
        engine = GWOEngine(params={"population_size": 4}, seed=4, clock=clock)
        for w in engine.wolves:
            w.score = 5.0
        engine._rank()
        assert [w.rank for w in engine.wolves] == [Rank.ALPHA, Rank.BETA, Rank.DELTA, Rank.OMEGA]

    def test_calculate_clamps_targets(self, clock):
        engine = GWOEngine(params={"population_size": 20}, seed=5, clock=clock)
        for _ in range(3):
            engine.advance_phase()
        assert engine.phase is Phase.MOVE_WOLVES
        targets = np.array([w.target for w in engine.wolves])
        assert np.all(targets >= 10.0) and np.all(targets <= 590.0)

    def test_calculate_without_leaders_keeps_targets(self, clock):
        engine = GWOEngine(params={"population_size": 5}, seed=6, clock=clock)
        before = [w.target.copy() for w in engine.wolves]
        engine._calculate()
        for w, t in zip(engine.wolves, before):
            assert np.array_equal(w.target, t)

    def test_move_wolves_completes_an_iteration(self, clock):
        engine = GWOEngine(seed=7, clock=clock)
        for _ in range(4):
            engine.advance_phase()
        assert engine.iteration == 1
        assert engine.phase is Phase.MOVE_PREY

    def test_prey_follows_clock(self, clock):
        clock.now = 100.0
        engine = GWOEngine(seed=8, clock=clock)
        clock.now = 103.0
        engine.phase = Phase.MOVE_PREY
        engine.advance_phase()
        assert np.allclose(engine.prey.prey, prey_position(3.0))

    def test_beta_draw_choice_consumes_same_randomness(self, clock):
        """Both coefficient variants draw six numbers per axis."""
        a = GWOEngine(params={"reuse_beta_draw": True}, seed=9, clock=clock)
        b = GWOEngine(params={"reuse_beta_draw": False}, seed=9, clock=clock)
        for engine in (a, b):
            for _ in range(3):
                engine.advance_phase()
        assert a.rng.random() == b.rng.random()
        ta = np.array([w.target for w in a.wolves])
        tb = np.array([w.target for w in b.wolves])
        assert not np.allclose(ta, tb)


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 3: ticking
# ─────────────────────────────────────────────────────────────────────────────

class TestTicking:

    def test_speed_multiplier_range(self):
        assert speed_multiplier(0) == pytest.approx(0.2)
        assert speed_multiplier(100) == pytest.approx(1.0)

    def test_phase_length_scales_with_speed(self, clock):
        fast = GWOEngine(params={"speed": 100}, seed=10, clock=clock)
        slow = GWOEngine(params={"speed": 0}, seed=10, clock=clock)
        n_fast = _tick_until_phase_change(fast)
        n_slow = _tick_until_phase_change(slow)
        assert n_fast == pytest.approx(PHASE_DURATION, abs=1)
        assert n_slow > 4 * n_fast
        assert fast.phase_timer == 0.0

    def test_wolves_approach_targets_while_hunting(self, clock):
        engine = GWOEngine(params={"speed": 100}, seed=11, clock=clock)
        for _ in range(3):
            engine.advance_phase()
        gaps = [np.linalg.norm(w.target - w.position) for w in engine.wolves]
        engine.tick()
        for w, gap in zip(engine.wolves, gaps):
            assert np.linalg.norm(w.target - w.position) == pytest.approx(gap * 0.95)

    def test_wolves_hold_still_outside_moving_phases(self, clock):
        engine = GWOEngine(seed=12, clock=clock)
        for w in engine.wolves:
            w.target = np.array([300.0, 300.0])
        before = np.array([w.position for w in engine.wolves])
        engine.tick()
        assert engine.phase is Phase.EVALUATE
        assert np.array_equal(before, np.array([w.position for w in engine.wolves]))

    def test_paused_tick_is_noop(self, clock):
        engine = GWOEngine(seed=13, clock=clock)
        for _ in range(5):
            engine.tick()
        engine.set_running(False)
        before = engine.snapshot()
        engine.tick()
        after = engine.snapshot()
        assert before["phase_timer"] == after["phase_timer"]
        assert before["phase"] == after["phase"]
        assert np.array_equal(before["positions"], after["positions"])

    def test_frame_delay_is_fixed(self):
        assert GWOEngine.frame_delay(0) == FRAME_INTERVAL
        assert GWOEngine.frame_delay(100) == FRAME_INTERVAL


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 4: five wolves, five cycles
# ─────────────────────────────────────────────────────────────────────────────

def test_five_cycles_five_iterations(clock):
    engine = GWOEngine(params={"population_size": 5, "speed": 100}, seed=2024, clock=clock)
    for _ in range(5 * len(Phase)):
        clock.now += 2.5
        _tick_until_phase_change(engine)
        if engine.phase is Phase.CALCULATE:
            _assert_hierarchy(engine)

    assert engine.iteration == 5
    assert engine.phase is Phase.EVALUATE
    assert len(engine.wolves) == 5


def test_population_change_rebuilds(clock):
    engine = GWOEngine(params={"population_size": 5}, seed=14, clock=clock)
    for _ in range(4):
        engine.advance_phase()
    assert engine.configure(population_size=9) is True
    assert len(engine.wolves) == 9
    assert engine.iteration == 0
    assert engine.phase is Phase.EVALUATE
    assert engine.alpha is None


def test_snapshot_is_read_only(clock):
    engine = GWOEngine(seed=15, clock=clock)
    snap = engine.snapshot()
    with pytest.raises(ValueError):
        snap["positions"][0, 0] = 1.0
    assert snap["phase"] == Phase.EVALUATE.value
    assert len(snap["ranks"]) == engine.population_size
