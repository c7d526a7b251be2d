"""
tests/test_problems.py
──────────────────────
Fitness landscapes and the shared RandomSource.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from swarmviz.problems.landscape import MultiPeakLandscape, Peak
from swarmviz.problems.prey import PreyDistanceProblem, prey_position
from swarmviz.problems.tsp import TSPProblem
from swarmviz.utils.seeding import RandomSource


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 1: RandomSource
# ─────────────────────────────────────────────────────────────────────────────

class TestRandomSource:

    def test_same_seed_same_draws(self):
        a, b = RandomSource(42), RandomSource(42)
        assert [a.random() for _ in range(10)] == [b.random() for _ in range(10)]
        assert np.array_equal(a.uniform_points(5, 0, 600), b.uniform_points(5, 0, 600))

    def test_reseed_replays(self):
        rng = RandomSource(7)
        first = [rng.random() for _ in range(3)]
        rng.reseed(7)
        assert [rng.random() for _ in range(3)] == first

    def test_ranges(self):
        rng = RandomSource(1)
        for _ in range(200):
            assert 0.0 <= rng.random() < 1.0
            assert 5 <= rng.integers(5, 9) < 9
            dx, dy = rng.jitter(10.0)
            assert -10.0 <= dx < 10.0 and -10.0 <= dy < 10.0
        pts = rng.uniform_points(50, 20.0, 580.0)
        assert pts.shape == (50, 2)
        assert np.all(pts >= 20.0) and np.all(pts < 580.0)


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 2: TSP
# ─────────────────────────────────────────────────────────────────────────────

class TestTSP:

    def test_square_tour_length(self):
        square = TSPProblem(coords=[[0, 0], [0, 10], [10, 10], [10, 0]])
        assert square.evaluate([0, 1, 2, 3]) == pytest.approx(40.0)
        assert square.evaluate([0, 2, 1, 3]) == pytest.approx(20.0 + 20.0 * math.sqrt(2))

    def test_distance_matrix_symmetric(self):
        tsp = TSPProblem.random(12, rng=RandomSource(3))
        assert np.allclose(tsp.D, tsp.D.T)
        assert np.all(np.diag(tsp.D) == 0.0)

    def test_rejects_non_permutation(self, pentagon_tsp):
        with pytest.raises(ValueError):
            pentagon_tsp.evaluate([0, 1, 1, 2, 3])
        with pytest.raises(ValueError):
            pentagon_tsp.evaluate([0, 1, 2])

    def test_rejects_bad_shapes(self):
        with pytest.raises(ValueError):
            TSPProblem(coords=[[0, 0], [1, 1]])
        with pytest.raises(ValueError):
            TSPProblem(coords=[0, 1, 2])

    def test_info_is_minimize(self, pentagon_tsp):
        info = pentagon_tsp.info()
        assert info.objective == "minimize"
        assert info.dimension == 5
        assert pentagon_tsp.maximize is False


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 3: prey tracking
# ─────────────────────────────────────────────────────────────────────────────

class TestPrey:

    def test_path_starts_right_of_center(self):
        assert prey_position(0.0) == pytest.approx((450.0, 300.0))

    def test_path_stays_in_box(self):
        for t in np.linspace(0.0, 60.0, 241):
            x, y = prey_position(float(t))
            assert 150.0 <= x <= 450.0
            assert 220.0 <= y <= 380.0

    def test_distance_to_prey(self):
        problem = PreyDistanceProblem()
        problem.move_to(100.0, 100.0)
        assert problem.evaluate([103.0, 104.0]) == pytest.approx(5.0)
        many = problem.evaluate_many(np.array([[100.0, 100.0], [100.0, 110.0]]))
        assert np.allclose(many, [0.0, 10.0])


# ─────────────────────────────────────────────────────────────────────────────
# GROUP 4: flower landscape
# ─────────────────────────────────────────────────────────────────────────────

class TestLandscape:

    def test_single_peak_value(self):
        landscape = MultiPeakLandscape.single_peak(300.0, 300.0)
        assert landscape.peak_value() == pytest.approx(100.0)
        assert landscape.evaluate([300.0, 400.0]) == pytest.approx(100.0 / math.e)

    def test_default_peaks_sum(self):
        landscape = MultiPeakLandscape.default()
        assert len(landscape.peaks) == 3
        value = landscape.evaluate([300.0, 300.0])
        assert value > 100.0
        assert landscape.info().objective == "maximize"

    def test_non_negative_everywhere(self):
        grid = MultiPeakLandscape.default().grid(resolution=40)
        assert grid.shape == (40, 40)
        assert np.all(grid >= 0.0)

    def test_grid_rows_are_y(self):
        landscape = MultiPeakLandscape.single_peak(600.0, 0.0)
        grid = landscape.grid(resolution=3)
        assert grid[0, -1] == pytest.approx(100.0)
        assert grid[0, -1] == grid.max()

    @pytest.mark.parametrize("peak", [Peak(0, 0, -1.0, 10.0), Peak(0, 0, 10.0, 0.0)])
    def test_invalid_peak_rejected(self, peak):
        with pytest.raises(ValueError):
            MultiPeakLandscape(peaks=[peak])
