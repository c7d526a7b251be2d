from swarmviz.methods.gwo import GWOEngine
from swarmviz.orchestrator.simulation_driver import SimulationDriver
from swarmviz.evaluation.export import save_result_json
from swarmviz.evaluation.plots import Plotter


def cb(stats):
    if stats.iteration % 5 == 0:
        print(f"iter={stats.iteration} alpha_dist={stats.best_score:.3f}")


if __name__ == "__main__":
    engine = GWOEngine(params={"population_size": 30, "speed": 100}, seed=7)
    driver = SimulationDriver(engine, stats_cb=cb)
    plotter = Plotter()

    # one logical iteration is five phases of 150 timer units
    for cycle in range(1, 6):
        # seed only the first leg; later legs continue the same hunt
        driver.run(n_ticks=750, seed=7 if cycle == 1 else None)
        plotter.draw_gwo(engine.snapshot(), filename=f"gwo_cycle{cycle}.png")

    res = driver.run(n_ticks=0)
    print("\nFINAL:", res.best_score, "status=", res.status, "iters=", res.iterations)
    save_result_json("results/raw/gwo_hunt_seed7.json", res, extra=engine.prey.get_llm_description())
