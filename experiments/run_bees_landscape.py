from swarmviz.methods.bees import BeesEngine
from swarmviz.problems.landscape import MultiPeakLandscape
from swarmviz.orchestrator.simulation_driver import SimulationDriver
from swarmviz.evaluation.export import save_result_json
from swarmviz.evaluation.plots import Plotter


def cb(stats):
    if stats.iteration % 20 == 0 or stats.iteration == 1:
        print(f"iter={stats.iteration} best={stats.best_score:.4f}")


if __name__ == "__main__":
    landscape = MultiPeakLandscape.default()
    engine = BeesEngine(params={"population_size": 30, "speed": 100}, landscape=landscape, seed=3)
    driver = SimulationDriver(engine, stats_cb=cb)

    res = driver.run(n_ticks=200, seed=3)

    print("\nFINAL:", res.best_score, "peak:", landscape.peak_value(), "status=", res.status)

    save_result_json("results/raw/bees_landscape_seed3.json", res, extra=landscape.get_llm_description())
    plotter = Plotter()
    plotter.draw_bees(engine.snapshot(), landscape=landscape, filename="bees_landscape_seed3.png")
    plotter.plot_convergence({"Bees": res.history}, title="Bees Algorithm convergence", filename="bees_convergence.png")
