from swarmviz.methods.aco import ACOEngine
from swarmviz.orchestrator.simulation_driver import SimulationDriver
from swarmviz.evaluation.export import save_result_json, save_snapshot_json
from swarmviz.evaluation.plots import Plotter


def cb(stats):
    if stats.iteration % 25 == 0 or stats.iteration == 1:
        print(f"iter={stats.iteration} best_len={stats.best_score:.3f}")


if __name__ == "__main__":
    engine = ACOEngine(params={"population_size": 20, "n_cities": 15, "speed": 100}, seed=42)
    driver = SimulationDriver(engine, stats_cb=cb)

    res = driver.run(n_ticks=200, seed=42)

    print("\nFINAL:", res.best_score, "status=", res.status, "iters=", res.iterations)

    save_result_json("results/raw/aco_tsp15_seed42.json", res, extra=engine.problem.get_llm_description())
    save_snapshot_json("results/raw/aco_tsp15_seed42_snapshot.json", engine.snapshot())
    Plotter().draw_aco(engine.snapshot(), filename="aco_tsp15_seed42.png")
    print("Saved -> results/raw/aco_tsp15_seed42.json")
