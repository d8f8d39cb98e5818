"""Functional entry point to the generational genetic algorithm.

This module wraps ``EngineConfig`` and ``Engine`` in a single function call for
the common case of a fixed generation budget with an optional early stopping
callback. Strategies are passed either as registry names or as callables, as
with the engine.

Example:
    >>> from geneforge.algorithms.ga import evolve
    >>> from geneforge.factories import boolean_chromosome, genotype_factory
    >>>
    >>> def count_ones(genotype):
    ...     return float(sum(genotype.flatten()))
    >>>
    >>> result = evolve(
    ...     init=genotype_factory(boolean_chromosome(size=30)),
    ...     fitness=count_ones,
    ...     population_size=100,
    ...     n_generations=50,
    ...     alterers=("single_point", "bit_flip"),
    ...     seed=42,
    ... )
    >>> best, best_fitness = result.best
    >>>
    >>> # Using callable strategies
    >>> from geneforge.selection import roulette_wheel
    >>> from geneforge.mutation import BitFlipMutator
    >>>
    >>> result = evolve(
    ...     init=genotype_factory(boolean_chromosome(size=30)),
    ...     fitness=count_ones,
    ...     population_size=100,
    ...     n_generations=50,
    ...     select=roulette_wheel(),
    ...     alterers=(BitFlipMutator(individual_rate=0.3, gene_rate=0.05),),
    ...     seed=42,
    ... )
"""

from collections.abc import Callable, Sequence

import numpy as np

from geneforge.engine import EngineConfig, build
from geneforge.genetic import Genotype
from geneforge.interceptors import EvolutionInterceptor
from geneforge.limits import max_generations
from geneforge.optimizers import FitnessOptimizer
from geneforge.protocols import Alterer, Listener, Selector
from geneforge.results import EvolutionResult, EvolutionState


def evolve(
    init: Callable[[np.random.Generator], Genotype],
    fitness: Callable[[Genotype], float],
    population_size: int,
    n_generations: int,
    survival_rate: float = 0.4,
    seed: int | None = None,
    callback: Callable[[EvolutionResult, int], bool] | None = None,
    select: str | Selector = "tournament",
    survive: str | Selector = "tournament",
    alterers: Sequence[str | Alterer] = (),
    optimizer: str | FitnessOptimizer = "max",
    listeners: Sequence[Listener] = (),
    interceptor: EvolutionInterceptor | None = None,
    n_workers: int | None = None,
) -> EvolutionResult:
    """Run a generational genetic algorithm for at most ``n_generations``.

    Args:
        init: Genotype factory. Signature: (rng,) -> Genotype
        fitness: Fitness function. Signature: (Genotype,) -> float
        population_size: Number of individuals in every generation.
        n_generations: Maximum number of generations to run.
        survival_rate: Fraction of each generation kept as survivors.
        seed: Random seed for reproducibility. If None, uses system entropy.
        callback: Optional callback called after each generation.
            Signature: (result: EvolutionResult, generation: int) -> bool
            If callback returns True, evolution stops early.
        select: Parent selection strategy. Can be:
            - String: Name of registered strategy (e.g., "tournament", "roulette")
            - Selector: Direct callable following the Selector protocol
        survive: Survivor selection strategy, same forms as ``select``.
        alterers: Operators applied in order to the selected parents, given as
            registry names (e.g., "pmx", "swap") or Alterer callables.
        optimizer: "max", "min" or a FitnessOptimizer.
        listeners: Observers notified at generation boundaries.
        interceptor: State transforms applied around every generation.
        n_workers: Parallel workers for construction and evaluation.

    Returns:
        EvolutionResult containing:
        - population: Final population
        - fitness: Fitness values for each individual
        - best_idx: Index of the best individual according to the optimizer
        - generations: Number of generations completed
        - evaluations: Total number of function evaluations

    Raises:
        ConfigurationError: If population_size or n_generations is not positive,
            or any other engine parameter is invalid.
        KeyError: If string strategy names are not found in registries.
    """
    generation_limit = max_generations(n_generations)
    limits = []
    if callback is not None:

        def callback_limit(state: EvolutionState) -> bool:
            fitness_values = state.population.fitness
            current = EvolutionResult(
                population=state.population,
                fitness=fitness_values,
                best_idx=engine.optimizer.best_index(fitness_values),
                generations=state.generation,
                evaluations=state.evaluations,
            )
            return bool(callback(current, state.generation))

        # The callback runs after every generation, the last one included
        limits.append(callback_limit)
    limits.append(generation_limit)

    config = EngineConfig(
        init=init,
        fitness=fitness,
        population_size=population_size,
        survival_rate=survival_rate,
        parent_selector=select,
        survivor_selector=survive,
        alterers=alterers,
        limits=limits,
        optimizer=optimizer,
        listeners=listeners,
        interceptor=interceptor if interceptor is not None else EvolutionInterceptor.identity(),
        seed=seed,
        n_workers=n_workers,
    )
    engine = build(config)
    return engine.evolve()
