"""Population construction and fitness evaluation.

This module provides the lift helpers that turn per-genotype functions into
batch functions, sequential or parallel, and the two batch steps the engine
runs through them:

- construct: build the initial genotypes, one derived random stream each
- evaluate_population: attach fitness to the individuals that lack it

Parallel execution uses joblib. Construction hands every individual its own
``Generator.spawn`` sub-stream, so a parallel run builds exactly the same
population as a sequential run with the same seed.
"""

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import numpy as np

from geneforge.errors import ConfigurationError
from geneforge.genetic import Genotype
from geneforge.population import Individual, Population

T = TypeVar("T")
R = TypeVar("R")


def check_n_workers(n_workers: int | None) -> int | None:
    """Validate a worker count (None means sequential execution).

    Raises:
        ConfigurationError: If n_workers is neither None, a positive integer nor -1.
    """
    if n_workers is None:
        return None
    if isinstance(n_workers, bool) or not isinstance(n_workers, int) or (n_workers <= 0 and n_workers != -1):
        raise ConfigurationError(f"n_workers must be positive or -1, got {n_workers!r}")
    return n_workers


def lift(fn: Callable[[T], R]) -> Callable[[Sequence[T]], list[R]]:
    """Lift a per-item function to work on a batch.

    This utility allows users to write simple per-genotype functions
    while the framework handles batching.

    Args:
        fn: Function that operates on a single item.

    Returns:
        A function mapping a sequence of items to the list of results, in order.

    Example:
        >>> count_ones = lift(lambda genotype: float(sum(genotype.flatten())))
        >>> count_ones(population.genotypes)
        [3.0, 1.0]
    """

    def lifted(items: Sequence[T]) -> list[R]:
        return [fn(item) for item in items]

    return lifted


def lift_parallel(fn: Callable[[T], R], n_workers: int) -> Callable[[Sequence[T]], list[R]]:
    """Lift a per-item function to work on a batch with parallel execution.

    Args:
        fn: Function that operates on a single item.
            Must be picklable for multiprocessing.
        n_workers: Number of parallel workers. Use -1 for all CPU cores.

    Returns:
        A function mapping a sequence of items to the list of results, in order.

    Raises:
        ConfigurationError: If n_workers is neither positive nor -1.

    Example:
        >>> evaluate = lift_parallel(fitness, n_workers=4)
        >>> evaluate(population.genotypes)
    """
    from joblib import Parallel, delayed

    check_n_workers(n_workers)

    def lifted(items: Sequence[T]) -> list[R]:
        results: list[R] = Parallel(n_jobs=n_workers)(  # type: ignore[assignment]
            delayed(fn)(item) for item in items
        )
        return list(results)

    return lifted


def lifted(fn: Callable[[T], R], n_workers: int | None) -> Callable[[Sequence[T]], list[R]]:
    """Return ``lift(fn)`` or ``lift_parallel(fn, n_workers)`` depending on n_workers."""
    if n_workers is None:
        return lift(fn)
    return lift_parallel(fn, n_workers)


def construct(
    init: Callable[[np.random.Generator], Genotype],
    size: int,
    rng: np.random.Generator,
    n_workers: int | None = None,
) -> Population:
    """Build an unevaluated population of ``size`` genotypes.

    Args:
        init: Genotype factory, called once per individual.
        size: Number of individuals.
        rng: Parent random stream, from which one sub-stream per individual is spawned.
        n_workers: Parallel workers, or None to build sequentially.

    Returns:
        Population of ``size`` unevaluated individuals.
    """
    streams = rng.spawn(size)
    genotypes = lifted(init, n_workers)(streams)
    return Population.from_genotypes(genotypes)


def evaluate_population(
    population: Population,
    fitness: Callable[[Genotype], Any],
    n_workers: int | None = None,
) -> tuple[Population, int]:
    """Evaluate every individual that has no fitness yet.

    Individuals that already carry a fitness are kept as they are. A fitness
    function may return NaN to flag an invalid genotype; such individuals stay
    NaN and always lose comparisons.

    Returns:
        Tuple of (evaluated population, number of fitness function calls).
    """
    pending = [i for i, individual in enumerate(population) if not individual.is_evaluated]
    if not pending:
        return population, 0

    values = lifted(fitness, n_workers)([population[i].genotype for i in pending])
    individuals: list[Individual] = list(population)
    for i, value in zip(pending, values):
        individuals[i] = individuals[i].with_fitness(float(value))
    return Population(tuple(individuals)), len(pending)
