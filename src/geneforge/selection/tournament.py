"""Tournament selection."""

import numpy as np

from geneforge.errors import check_positive
from geneforge.optimizers import FitnessOptimizer
from geneforge.population import Population
from geneforge.selection.base import check_selection


def tournament_selector(tournament_size: int = 3):
    """Create a tournament selector.

    Each pick runs one tournament: ``tournament_size`` individuals are drawn
    uniformly with replacement and the best of them, according to the
    optimizer, wins. The first candidate wins ties.

    Args:
        tournament_size: Number of individuals competing in each tournament (default: 3).

    Returns:
        A Selector callable.

    Raises:
        ConfigurationError: If tournament_size is not a positive integer.

    Example:
        >>> selector = tournament_selector(tournament_size=2)
        >>> parents = selector(pop, 20, FitnessMaximizer(), rng)
        >>> len(parents)
        20
    """
    check_positive("tournament_size", tournament_size)

    def selector(
        population: Population,
        count: int,
        optimizer: FitnessOptimizer,
        rng: np.random.Generator,
    ) -> Population:
        check_selection(population, count)
        if count == 0:
            return Population()

        scores = optimizer.score(population.fitness)
        selected = np.empty(count, dtype=np.intp)

        for i in range(count):
            candidates = rng.integers(0, len(population), size=tournament_size)
            selected[i] = candidates[np.argmax(scores[candidates])]

        return population.take(selected)

    return selector
