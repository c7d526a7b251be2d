"""Population-based metaheuristic simulation engines: ACO, GWO and the Bees Algorithm."""

__version__ = "0.1.0"
