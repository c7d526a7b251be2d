import os
import pandas as pd

from swarmviz.methods import ACOEngine, BeesEngine
from swarmviz.problems.tsp import TSPProblem
from swarmviz.utils.seeding import RandomSource
from swarmviz.orchestrator.simulation_driver import SimulationDriver
from swarmviz.evaluation.export import save_result_json
from swarmviz.evaluation.plots import Plotter
from swarmviz.utils.logging import print_experiment_header, print_results_table


def run_sweep():
    # one fixed city set for every ACO run
    tsp = TSPProblem.random(n_cities=15, rng=RandomSource(42))

    engines = [
        ("ACO", lambda seed: ACOEngine(params={"population_size": 20}, problem=tsp, seed=seed)),
        ("Bees", lambda seed: BeesEngine(params={"population_size": 30}, seed=seed)),
    ]
    seeds = [1, 2, 3, 4, 5]
    n_ticks = 150

    os.makedirs("results/raw", exist_ok=True)
    os.makedirs("results/processed", exist_ok=True)

    rows = []
    curves = {"ACO": [], "Bees": []}
    total = len(engines) * len(seeds)
    k = 0
    for name, make in engines:
        for seed in seeds:
            k += 1
            print_experiment_header(f"{name} seed={seed}", k, total)
            res = SimulationDriver(make(seed)).run(n_ticks=n_ticks, seed=seed)
            save_result_json(f"results/raw/{name.lower()}_sweep_seed{seed}.json", res)

            curves[name].append({"method_name": name, "seed": seed, "history": res.history})
            rows.append({
                "algorithm": name,
                "seed": seed,
                "best_score": res.best_score,
                "time": res.time_sec,
                "iterations": res.iterations,
                "status": res.status,
            })

    print_results_table(rows, title="SEED SWEEP")

    df = pd.DataFrame(rows)
    csv_path = "results/processed/seed_sweep.csv"
    df.to_csv(csv_path, index=False)
    print(f"\nSaved summary -> {csv_path}")
    print(df.groupby("algorithm")[["best_score", "time"]].agg(["mean", "std"]))

    plotter = Plotter()
    for name, data in curves.items():
        plotter.plot_all_seeds_convergence(data, problem_name=name.lower())


if __name__ == "__main__":
    run_sweep()
