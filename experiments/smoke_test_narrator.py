from swarmviz.constants import ACO_NAME
from swarmviz.methods.result import IterationStats
from swarmviz.orchestrator.narrator import Narrator


def main():
    narrator = Narrator()
    print("backend:", narrator.backend)
    stats = IterationStats(iteration=100, best_score=2450.7, population_size=20)
    print(narrator.explain(ACO_NAME, stats))


if __name__ == "__main__":
    main()
