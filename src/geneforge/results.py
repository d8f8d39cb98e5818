"""Result and state types of the generational engine.

- EvolutionState: Snapshot of a running evolution, consumed by limits
- EvolutionResult: Final outcome returned by ``Engine.evolve()``

Both classes are immutable (frozen dataclasses) to enforce functional style.
All numpy arrays are copied on construction to ensure immutability.
"""

import math
from dataclasses import dataclass

import numpy as np

from geneforge.population import Individual, Population


@dataclass(frozen=True)
class EvolutionState:
    """Snapshot of the engine after a generation.

    Attributes:
        generation: Number of generations completed.
        population: The evaluated population of that generation.
        best: Best individual found so far, or None before the first evaluation.
        steady: Consecutive generations whose best fitness did not improve on
            the best fitness found before them.
        evaluations: Total number of fitness function calls so far.
    """

    generation: int
    population: Population
    best: Individual | None = None
    steady: int = 0
    evaluations: int = 0

    @property
    def best_fitness(self) -> float:
        """Fitness of the best individual so far, NaN if there is none."""
        return self.best.fitness if self.best is not None else math.nan


@dataclass(frozen=True)
class EvolutionResult:
    """Results of a completed evolution.

    This class encapsulates the final population along with fitness values
    for each individual and the best individual according to the optimizer.
    All arrays are copied on construction to ensure immutability.

    Attributes:
        population: The final population.
        fitness: Fitness values for each individual, shape (n,).
        best_idx: Index of the best individual in the final population.
        generations: Number of generations completed.
        evaluations: Total number of fitness function evaluations performed.

    Example:
        >>> from geneforge.genetic import Chromosome, Gene, Genotype
        >>> genotype = Genotype((Chromosome((Gene(1),)),))
        >>> pop = Population((Individual(genotype, 0.5), Individual(genotype, 0.3)))
        >>> result = EvolutionResult(
        ...     population=pop,
        ...     fitness=pop.fitness,
        ...     best_idx=0,
        ...     generations=50,
        ...     evaluations=2500,
        ... )
        >>> best, best_fitness = result.best
        >>> best_fitness
        0.5
    """

    population: Population
    fitness: np.ndarray
    best_idx: int
    generations: int
    evaluations: int

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If fitness is not a numpy array or best_idx is not an integer.
            ValueError: If array shapes are inconsistent, best_idx is out of
                bounds or a counter is negative.
        """
        n = len(self.population)

        for name in ("generations", "evaluations"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

        # Validate fitness
        if not isinstance(self.fitness, np.ndarray):
            raise TypeError(f"fitness must be a numpy array, got {type(self.fitness).__name__}")
        if self.fitness.ndim != 1:
            raise ValueError(f"fitness must be 1D, got shape {self.fitness.shape}")
        if self.fitness.shape[0] != n:
            raise ValueError(f"fitness has {self.fitness.shape[0]} elements, expected {n} to match population size")

        # Validate best_idx
        if not isinstance(self.best_idx, (int, np.integer)):
            raise TypeError(f"best_idx must be an integer, got {type(self.best_idx).__name__}")
        if self.best_idx < 0 or self.best_idx >= n:
            raise ValueError(f"best_idx {self.best_idx} is out of bounds for population with {n} individuals")

        object.__setattr__(self, "fitness", self.fitness.copy())

    @property
    def best(self) -> tuple[Individual, float]:
        """Extract the best individual and its fitness value.

        Returns:
            Tuple of (individual, fitness).

        Example:
            >>> best, best_fitness = result.best
            >>> print(f"Best solution: {best.genotype.flatten()} with fitness {best_fitness}")
        """
        return (self.population[self.best_idx], float(self.fitness[self.best_idx]))
