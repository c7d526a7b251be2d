# swarmviz/constants.py

CANVAS_SIZE = 600.0
CANVAS_CENTER = CANVAS_SIZE / 2

ACO_NAME = "Ant Colony Optimization"
GWO_NAME = "Grey Wolf Optimizer"
BEES_NAME = "Bees Algorithm"

ALGORITHM_DESCRIPTIONS = {
    ACO_NAME: (
        "Ant Colony Optimization (ACO) sends a colony of ants over a graph of cities. "
        "Each ant builds a tour guided by pheromone and distance; short tours deposit more "
        "pheromone, and evaporation lets the colony forget poor edges over time."
    ),
    GWO_NAME: (
        "The Grey Wolf Optimizer (GWO) is a nature-inspired algorithm that mimics the leadership "
        "hierarchy and hunting mechanism of grey wolves. The pack is led by the Alpha, Beta, and "
        "Delta wolves, who guide the Omega wolves toward the prey (the optimal solution)."
    ),
    BEES_NAME: (
        "The Bees Algorithm splits the swarm into elite sites, other good sites and scouts. "
        "Elite sites are searched intensely nearby, good sites less so, while scouts roam the "
        "whole landscape looking for new flower patches."
    ),
}

COLORS = {
    "primary": "#3b82f6",
    "secondary": "#8b5cf6",
    "accent": "#10b981",
    "background": "#0f172a",
    "surface": "#1e293b",
    "text": "#f1f5f9",
    "muted": "#94a3b8",
    # wolf pack
    "prey": "#ef4444",
    "alpha": "#fbbf24",
    "beta": "#22d3ee",
    "delta": "#f97316",
    "omega": "#64748b",
    # bees
    "elite": "#facc15",
    "scout": "#94a3b8",
}
