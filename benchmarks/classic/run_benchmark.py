"""Benchmark runner comparing geneforge operator setups on classic problems.

This script evolves OneMax, a random TSP instance and a symbolic regression
problem with several crossover and mutation setups each, using the same
population size, generation budget and seeds for every setup.

Usage:
    uv run python benchmarks/classic/run_benchmark.py
"""

import json
import logging
import sys
import time
from collections import defaultdict
from datetime import UTC, datetime
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np

from benchmarks.classic.problems import PROBLEMS, Problem
from geneforge import EngineConfig, build, max_generations, target_fitness
from geneforge.crossover import (
    MultiPointCrossover,
    OrderedCrossover,
    PartiallyMappedCrossover,
    PositionBasedCrossover,
    SinglePointCrossover,
    SubtreeCrossover,
)
from geneforge.mutation import BitFlipMutator, InversionMutator, PointMutator, SwapMutator

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
POP_SIZE = 100
N_GENERATIONS = 200
SURVIVAL_RATE = 0.4
N_RUNS = 10
SEEDS = list(range(N_RUNS))

SETUPS = {
    "onemax": {
        "single_point": lambda: (SinglePointCrossover(), BitFlipMutator(0.5, 1.0, 1.0 / 64)),
        "multi_point": lambda: (MultiPointCrossover(cuts=3), BitFlipMutator(0.5, 1.0, 1.0 / 64)),
    },
    "tsp": {
        "pmx+swap": lambda: (PartiallyMappedCrossover(), SwapMutator(0.3, 1.0, 0.05)),
        "ox+inversion": lambda: (OrderedCrossover(), InversionMutator(0.3, 1.0, 0.3)),
        "pbx+swap": lambda: (PositionBasedCrossover(), SwapMutator(0.3, 1.0, 0.05)),
    },
    "regression": {
        "subtree+point": lambda: (SubtreeCrossover(max_depth=6), PointMutator(0.2, 1.0, 1.0)),
    },
}


def run_setup(problem: Problem, alterers: tuple, seed: int) -> dict:
    """Evolve one problem with one operator setup.

    Args:
        problem: The benchmark problem.
        alterers: Crossover and mutation operators, applied in order.
        seed: Random seed for reproducibility.

    Returns:
        Dictionary with the best fitness, generations, evaluations and elapsed time.
    """
    limits = [max_generations(N_GENERATIONS)]
    if problem.optimum is not None:
        limits.append(target_fitness(problem.optimum, optimizer=problem.optimizer))

    config = EngineConfig(
        init=problem.init,
        fitness=problem.fitness,
        population_size=POP_SIZE,
        survival_rate=SURVIVAL_RATE,
        alterers=alterers,
        limits=limits,
        optimizer=problem.optimizer,
        seed=seed,
    )

    start_time = time.perf_counter()
    engine = build(config)
    result = engine.evolve()
    elapsed = time.perf_counter() - start_time

    return {
        "best_fitness": engine.best.fitness if engine.best is not None else float("nan"),
        "final_best": result.best[1],
        "generations": result.generations,
        "evaluations": result.evaluations,
        "time_seconds": elapsed,
    }


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary containing metadata and results.
    """
    metadata = {
        "timestamp": datetime.now(UTC).isoformat(),
        "parameters": {
            "pop_size": POP_SIZE,
            "n_generations": N_GENERATIONS,
            "survival_rate": SURVIVAL_RATE,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
        },
    }

    results = []
    total_runs = sum(len(setups) for setups in SETUPS.values()) * N_RUNS
    current_run = 0

    for problem_name, setups in SETUPS.items():
        problem = PROBLEMS[problem_name]
        for setup_name, make_alterers in setups.items():
            for seed in SEEDS:
                current_run += 1
                logger.info(
                    "Running [%d/%d]: %s on %s (seed=%d)", current_run, total_runs, setup_name, problem_name, seed
                )

                outcome = run_setup(problem, make_alterers(), seed)
                results.append({"problem": problem_name, "setup": setup_name, "seed": seed, **outcome})

                logger.info(
                    "  best: %.4f, generations: %d, time: %.2fs",
                    outcome["best_fitness"],
                    outcome["generations"],
                    outcome["time_seconds"],
                )

    return {"metadata": metadata, "results": results}


def print_summary(results: dict) -> None:
    """Print a summary table of the benchmark results.

    Args:
        results: The benchmark results dictionary.
    """
    data = defaultdict(lambda: defaultdict(list))
    for r in results["results"]:
        data[r["problem"]][r["setup"]].append(r)

    print("\n" + "=" * 80)
    print("BENCHMARK SUMMARY")
    print("=" * 80)
    print(f"\nParameters: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}")
    print()

    header = f"{'Problem':<12}{'Setup':<16}{'Best fitness':>24}{'Generations':>14}{'Time (s)':>12}"
    print(header)
    print("-" * 78)

    for problem, setups in data.items():
        for setup, runs in setups.items():
            best = np.array([r["best_fitness"] for r in runs])
            generations = np.mean([r["generations"] for r in runs])
            elapsed = np.mean([r["time_seconds"] for r in runs])
            print(
                f"{problem:<12}{setup:<16}{best.mean():>14.4f} +/- {best.std():<6.3f}"
                f"{generations:>14.1f}{elapsed:>12.2f}"
            )

    print("-" * 78)
    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting classic problem benchmark suite")
    logger.info("Parameters: pop_size=%d, generations=%d, runs=%d", POP_SIZE, N_GENERATIONS, N_RUNS)

    results = run_benchmark()

    output_path = Path(__file__).parent / "results" / "benchmark_results.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info("Results saved to %s", output_path)

    print_summary(results)


if __name__ == "__main__":
    main()
