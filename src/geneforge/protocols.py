"""Protocol definitions for the pluggable parts of the generational engine.

These protocols (interfaces) let the engine treat every strategy of a family
uniformly, so selection methods, operators and stopping conditions can be
swapped without changing the engine.

The engine consumes four kinds of strategies:

1. **Selector**: Chooses survivors and parents from the current population.
2. **Alterer**: Transforms the selected parents into offspring (crossover and
   mutation operators).
3. **Limit**: Decides whether evolution should stop.
4. **Listener**: Observes the evolution at generation boundaries.

Example usage:
    ```python
    survivors = survivor_selector(population, survivor_count, optimizer, rng)
    parents = parent_selector(population, offspring_count, optimizer, rng)
    for alterer in alterers:
        parents = alterer(parents, offspring_count, rng)
    population = survivors + parents
    if any(limit(state) for limit in limits):
        ...
    ```
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from geneforge.population import Population
from geneforge.results import EvolutionState

if TYPE_CHECKING:
    from geneforge.listeners import GenerationRecord
    from geneforge.optimizers import FitnessOptimizer


@runtime_checkable
class Selector(Protocol):
    """Protocol for selection strategies.

    A selector returns exactly ``count`` individuals drawn from the population.
    The same individual may be returned more than once. The optimizer defines
    which fitness is better; individuals with NaN fitness always lose.

    Example:
        ```python
        def best_of_two(population, count, optimizer, rng):
            picks = []
            for _ in range(count):
                i, j = rng.integers(0, len(population), size=2)
                a, b = population[i], population[j]
                picks.append(a if optimizer.compare(a.fitness, b.fitness) >= 0 else b)
            return Population(tuple(picks))
        ```
    """

    def __call__(
        self,
        population: Population,
        count: int,
        optimizer: "FitnessOptimizer",
        rng: np.random.Generator,
    ) -> Population:
        """Select ``count`` individuals from the population.

        Args:
            population: The population to select from.
            count: Number of individuals to return.
            optimizer: Optimization direction.
            rng: NumPy random number generator for reproducibility.

        Returns:
            Population of exactly ``count`` individuals.
        """
        ...


@runtime_checkable
class Alterer(Protocol):
    """Protocol for population transforming operators.

    An alterer receives the offspring candidates and must return a population
    of exactly ``target_size`` individuals. Individuals whose genetic material
    changed come back unevaluated (NaN fitness).
    """

    def __call__(self, population: Population, target_size: int, rng: np.random.Generator) -> Population: ...


@runtime_checkable
class Limit(Protocol):
    """Protocol for stopping conditions.

    A limit returns True when the evolution should stop. The engine stops as
    soon as any configured limit is met.
    """

    def __call__(self, state: EvolutionState) -> bool: ...


@runtime_checkable
class Listener(Protocol):
    """Protocol for evolution observers.

    Listeners are notified at generation boundaries. They are purely
    observational: their return values are ignored and they cannot change
    the course of the evolution.
    """

    def on_evolution_started(self) -> None: ...

    def on_generation_started(self, generation: int) -> None: ...

    def on_generation_ended(self, record: "GenerationRecord") -> None: ...

    def on_evolution_ended(self, state: EvolutionState) -> None: ...
