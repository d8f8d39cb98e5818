"""Uniform random selection."""

import numpy as np

from geneforge.optimizers import FitnessOptimizer
from geneforge.population import Population
from geneforge.selection.base import check_selection


def random_selector():
    """Create a selector that ignores fitness and picks uniformly with replacement."""

    def selector(
        population: Population,
        count: int,
        optimizer: FitnessOptimizer,
        rng: np.random.Generator,
    ) -> Population:
        check_selection(population, count)
        if count == 0:
            return Population()
        return population.take(rng.integers(0, len(population), size=count))

    return selector
