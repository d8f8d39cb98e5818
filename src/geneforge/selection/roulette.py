"""Roulette wheel (fitness-proportionate) selection."""

import numpy as np

from geneforge.optimizers import FitnessOptimizer
from geneforge.population import Population
from geneforge.selection.base import check_selection


def roulette_wheel():
    """Create a roulette wheel (fitness-proportionate) selector.

    Selection weights come from the optimizer's ``fitness_transform``, which
    orients fitness so that better individuals weigh more regardless of the
    optimization direction. For transformed weights w_i the selection
    probability p_i is:

        p_i = (w_i + ε) / Σ(w_j + ε)

    where ε is a small constant so the worst evaluated individual keeps a
    non-zero probability. Unevaluated individuals are never picked unless no
    individual is evaluated, in which case selection is uniform.

    Returns:
        A Selector callable that performs fitness-proportionate selection.

    Example:
        >>> selector = roulette_wheel()
        >>> parents = selector(pop, 20, FitnessMinimizer(), rng)
    """

    def selector(
        population: Population,
        count: int,
        optimizer: FitnessOptimizer,
        rng: np.random.Generator,
    ) -> Population:
        check_selection(population, count)
        if count == 0:
            return Population()

        pop_size = len(population)
        fitness = population.fitness
        evaluated = ~np.isnan(fitness)

        # Nothing to weigh: fall back to uniform selection
        if not evaluated.any():
            return population.take(rng.choice(pop_size, size=count, replace=True))

        epsilon = 1e-10
        weights = np.where(evaluated, optimizer.fitness_transform(fitness) + epsilon, 0.0)
        probs = weights / weights.sum()

        selected = rng.choice(pop_size, size=count, replace=True, p=probs)
        return population.take(selected)

    return selector
