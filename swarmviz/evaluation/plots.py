from __future__ import annotations

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
import scipy.stats as stats
from pathlib import Path
from typing import Any, Dict, List, Optional

from swarmviz.constants import CANVAS_SIZE, COLORS
from swarmviz.problems.landscape import MultiPeakLandscape
from swarmviz.utils.logging import get_logger

RANK_STYLE = {
    "alpha": (COLORS["alpha"], 140, "α"),
    "beta": (COLORS["beta"], 100, "β"),
    "delta": (COLORS["delta"], 80, "δ"),
    "omega": (COLORS["omega"], 20, ""),
}


class Plotter:
    """
    Renders engine snapshots and convergence histories to PNG files.
    Snapshots are only read, never modified.
    """

    def __init__(self, output_dir: str = "results/figures"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.logger = get_logger("swarmviz.plots")

        plt.style.use('seaborn-v0_8-darkgrid')
        plt.rcParams['figure.figsize'] = [8, 8]
        plt.rcParams['font.size'] = 11
        plt.rcParams['axes.grid'] = True
        plt.rcParams['grid.alpha'] = 0.3
        plt.rcParams['axes.titlesize'] = 14
        plt.rcParams['legend.fontsize'] = 10

    def save_fig(self, filename: str, dpi: int = 120, tight: bool = True) -> Path:
        path = self.output_dir / filename
        if tight:
            plt.tight_layout()
        plt.savefig(path, dpi=dpi, bbox_inches='tight')
        plt.close()
        self.logger.info(f"Plot saved: {path}")
        return path

    def _canvas(self, title: str):
        fig, ax = plt.subplots(figsize=(8, 8))
        ax.set_facecolor(COLORS["background"])
        ax.set_xlim(0, CANVAS_SIZE)
        ax.set_ylim(CANVAS_SIZE, 0)  # screen coordinates, y grows downward
        ax.set_aspect("equal")
        ax.set_title(title, fontweight='bold')
        return fig, ax

    # ---------- engine snapshots ----------
    def draw_aco(self, snapshot: Dict[str, Any], filename: Optional[str] = None) -> Path:
        cities = snapshot["cities"]
        tau = snapshot["pheromone"]
        fig, ax = self._canvas(f"ACO | iteration {snapshot['iteration']} | best {snapshot['best_distance']:.1f}")

        n = len(cities)
        for i in range(n):
            for j in range(i + 1, n):
                level = tau[i, j]
                if level > 0.1:
                    ax.plot(
                        [cities[i, 0], cities[j, 0]], [cities[i, 1], cities[j, 1]],
                        color=COLORS["primary"], alpha=min(level * 0.05, 0.8),
                        linewidth=min(level * 0.5, 8), solid_capstyle="round",
                    )

        # a few of the latest ants, faint
        for path in snapshot["paths"][:5]:
            pts = cities[path]
            ax.plot(pts[:, 0], pts[:, 1], color="white", alpha=0.1, linewidth=1)

        best = snapshot["best_path"]
        if best:
            loop = list(best) + [best[0]]
            pts = cities[loop]
            ax.plot(pts[:, 0], pts[:, 1], color=COLORS["accent"], linewidth=3)

        ax.scatter(cities[:, 0], cities[:, 1], s=60, color="#f8fafc", zorder=3)
        ax.scatter(cities[:, 0], cities[:, 1], s=15, color=COLORS["primary"], zorder=4)
        return self.save_fig(filename or f"aco_iter{snapshot['iteration']}.png")

    def draw_gwo(self, snapshot: Dict[str, Any], filename: Optional[str] = None) -> Path:
        pos = snapshot["positions"]
        ranks = snapshot["ranks"]
        prey = snapshot["prey"]
        fig, ax = self._canvas(f"GWO | {snapshot['phase']} | iteration {snapshot['iteration']}")

        alpha_idx = [i for i, r in enumerate(ranks) if r == "alpha"]
        if snapshot["phase"] == "CALCULATING_VECTORS" and alpha_idx:
            a = pos[alpha_idx[0]]
            for i, r in enumerate(ranks):
                if r == "omega":
                    ax.plot([a[0], pos[i, 0]], [a[1], pos[i, 1]], color=COLORS["alpha"], alpha=0.2)

        ax.scatter([prey[0]], [prey[1]], s=200, color=COLORS["prey"], zorder=3)
        ax.annotate("Prey", (prey[0] + 15, prey[1] + 4), color="white")

        # omegas first so leaders are drawn on top
        for rank in ("omega", "delta", "beta", "alpha"):
            color, size, label = RANK_STYLE[rank]
            idx = [i for i, r in enumerate(ranks) if r == rank]
            if not idx:
                continue
            ax.scatter(pos[idx, 0], pos[idx, 1], s=size, color=color, zorder=4, label=rank)
            for i in idx:
                if label:
                    ax.annotate(label, (pos[i, 0], pos[i, 1]), ha="center", va="center", color="black")

        ax.legend(loc="lower left")
        ax.text(10, CANVAS_SIZE - 10, snapshot["phase_description"], color="white", fontsize=9)
        return self.save_fig(filename or f"gwo_iter{snapshot['iteration']}.png")

    def draw_bees(
        self,
        snapshot: Dict[str, Any],
        landscape: Optional[MultiPeakLandscape] = None,
        filename: Optional[str] = None,
    ) -> Path:
        landscape = landscape or MultiPeakLandscape.default()
        fig, ax = plt.subplots(figsize=(8, 8))
        scale = self._landscape_heatmap(ax, landscape)
        ax.set_title(f"Bees | iteration {snapshot['iteration']} | best {snapshot['best_score']:.2f}",
                     fontweight='bold')

        # heatmap axes are in grid cells
        pos = snapshot["positions"] * scale
        # elites and their recruits sit at the front of the population
        n_front = 2 * snapshot["n_elite"]
        ax.scatter(pos[n_front:, 0], pos[n_front:, 1], s=8, color=COLORS["scout"], label="scouts / good")
        ax.scatter(pos[:n_front, 0], pos[:n_front, 1], s=30, color=COLORS["elite"], label="elite / recruits")
        ax.legend(loc="lower left")
        return self.save_fig(filename or f"bees_iter{snapshot['iteration']}.png")

    def _landscape_heatmap(self, ax, landscape: MultiPeakLandscape, resolution: int = 120) -> float:
        """
        Draw the landscape as a seaborn heatmap, row 0 at the top like the canvas.
        Returns the factor that maps canvas coordinates to heatmap cells.
        """
        grid = landscape.grid(resolution=resolution)
        sns.heatmap(grid, ax=ax, cmap="YlOrBr", alpha=0.6, cbar=True, square=True,
                    xticklabels=False, yticklabels=False, cbar_kws={"label": "nectar"})
        return resolution / landscape.size

    # ---------- convergence ----------
    def plot_convergence(
        self,
        histories: Dict[str, List[float]],
        title: str = "Convergence",
        filename: Optional[str] = None,
    ) -> Path:
        frames = [
            pd.DataFrame({"sample": np.arange(len(h)), "best_score": h, "algorithm": name})
            for name, h in histories.items() if h
        ]
        plt.figure(figsize=(10, 6))
        if frames:
            df = pd.concat(frames, ignore_index=True)
            df = df.replace([np.inf, -np.inf], np.nan).dropna()
            sns.lineplot(data=df, x="sample", y="best_score", hue="algorithm", linewidth=2)
        plt.xlabel('Sample')
        plt.ylabel('Best Score')
        plt.title(title, fontweight='bold')
        return self.save_fig(filename or "convergence.png")

    def plot_all_seeds_convergence(
        self,
        results_data: List[Dict[str, Any]],
        problem_name: str,
        confidence_level: float = 0.95,
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """
        Mean convergence per method across seeds with a t-interval band,
        plus the distribution of final scores.

        Each entry of results_data needs method_name, seed and history.
        """
        methods_data: Dict[str, Dict[int, List[float]]] = {}
        for result in results_data:
            method = result.get("method_name", "unknown")
            history = [h for h in result.get("history", []) if np.isfinite(h)]
            if history:
                methods_data.setdefault(method, {})[result.get("seed", 0)] = history

        if not methods_data:
            self.logger.warning("No convergence data found!")
            return None

        colors = plt.cm.tab10(np.linspace(0, 1, len(methods_data)))
        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 11), gridspec_kw={'height_ratios': [2, 1]})

        final_rows = []
        for idx, (method, seeds_data) in enumerate(methods_data.items()):
            histories = list(seeds_data.values())
            max_len = max(len(h) for h in histories)
            padded = np.array([h + [h[-1]] * (max_len - len(h)) for h in histories])

            mean_history = padded.mean(axis=0)
            std_history = padded.std(axis=0)
            n_seeds = len(padded)
            if n_seeds > 1:
                t_value = stats.t.ppf((1 + confidence_level) / 2, n_seeds - 1)
                ci = t_value * std_history / np.sqrt(n_seeds)
            else:
                ci = std_history

            x = np.arange(max_len)
            ax1.plot(x, mean_history, color=colors[idx], linewidth=2.5, label=f'{method} (mean)')
            ax1.fill_between(x, mean_history - ci, mean_history + ci, color=colors[idx], alpha=0.2,
                             label=f'{method} ({int(confidence_level * 100)}% CI)')

            for seed, h in seeds_data.items():
                final_rows.append({"Method": method, "Seed": seed, "Final Score": h[-1]})

        ax1.set_xlabel('Sample')
        ax1.set_ylabel('Best Score')
        ax1.set_title(f'Convergence across seeds - {problem_name}', fontweight='bold')
        ax1.legend(loc='best')

        df_last = pd.DataFrame(final_rows)
        sns.boxplot(x='Method', y='Final Score', data=df_last, ax=ax2, color=COLORS["muted"])
        sns.stripplot(x='Method', y='Final Score', data=df_last, ax=ax2, color='black', alpha=0.5, size=6, jitter=True)
        ax2.set_title('Final score distribution across seeds', fontweight='bold')

        return self.save_fig(filename or f"all_seeds_convergence_{problem_name}.png")
