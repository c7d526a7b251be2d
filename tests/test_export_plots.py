"""
tests/test_export_plots.py
──────────────────────────
JSON export and PNG rendering. Renderers only read snapshots.
"""

from __future__ import annotations

import json

import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.collections import QuadMesh

from swarmviz.evaluation.export import save_result_json, save_snapshot_json
from swarmviz.evaluation.plots import Plotter
from swarmviz.methods import ACOEngine, BeesEngine, GWOEngine
from swarmviz.orchestrator.simulation_driver import SimulationDriver
from swarmviz.problems.landscape import MultiPeakLandscape


def test_result_json_nulls_infinite_scores(tmp_path):
    engine = ACOEngine(params={"n_cities": 5}, seed=1)
    driver = SimulationDriver(engine)
    result = driver.run(0)
    path = tmp_path / "out" / "aco.json"
    save_result_json(str(path), result, extra={"seed": np.int64(1)})

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["best_score"] is None
    assert data["status"] == "ok"
    assert data["extra"] == {"seed": 1}


def test_snapshot_json_round_trips_arrays(tmp_path):
    engine = BeesEngine(params={"population_size": 6}, seed=2)
    engine.tick()
    path = tmp_path / "bees.json"
    save_snapshot_json(str(path), engine.snapshot())

    data = json.loads(path.read_text(encoding="utf-8"))
    assert len(data["positions"]) == 6
    assert data["iteration"] == 1


class TestPlotter:

    def test_draws_each_engine(self, tmp_path):
        plotter = Plotter(output_dir=str(tmp_path))

        aco = ACOEngine(params={"n_cities": 8}, seed=3)
        aco.tick()
        gwo = GWOEngine(params={"population_size": 6}, seed=3, clock=lambda: 0.0)
        for _ in range(3):
            gwo.advance_phase()
        bees = BeesEngine(params={"population_size": 10}, seed=3)
        bees.tick()

        paths = [
            plotter.draw_aco(aco.snapshot()),
            plotter.draw_gwo(gwo.snapshot()),
            plotter.draw_bees(bees.snapshot(), landscape=bees.landscape),
        ]
        for p in paths:
            assert p.exists() and p.stat().st_size > 0

    def test_drawing_leaves_engine_untouched(self, tmp_path):
        plotter = Plotter(output_dir=str(tmp_path))
        engine = ACOEngine(params={"n_cities": 6}, seed=4)
        engine.tick()
        pheromone = engine.pheromone.copy()
        plotter.draw_aco(engine.snapshot())
        assert np.array_equal(engine.pheromone, pheromone)

    def test_convergence_plots(self, tmp_path):
        plotter = Plotter(output_dir=str(tmp_path))
        path = plotter.plot_convergence({"ACO": [float("inf"), 900.0, 850.0], "Bees": [50.0, 80.0]})
        assert path.exists()

        results = [
            {"method_name": "Bees", "seed": s, "history": [10.0 * s, 20.0 * s, 30.0 * s]}
            for s in (1, 2, 3)
        ]
        assert plotter.plot_all_seeds_convergence(results, "landscape").exists()
        assert plotter.plot_all_seeds_convergence([], "empty") is None

    def test_landscape_drawn_as_heatmap(self, tmp_path):
        plotter = Plotter(output_dir=str(tmp_path))
        landscape = MultiPeakLandscape.single_peak(300.0, 300.0)
        fig, ax = plt.subplots()
        scale = plotter._landscape_heatmap(ax, landscape, resolution=60)
        assert any(isinstance(c, QuadMesh) for c in ax.collections)
        assert scale == pytest.approx(0.1)
        # row 0 is the top of the canvas
        bottom, top = ax.get_ylim()
        assert bottom > top
        plt.close(fig)
