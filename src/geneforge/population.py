"""Individuals and populations.

This module provides the data structures the engine and the operators exchange:

- Individual: A genotype paired with its fitness (NaN until evaluated)
- Population: An ordered, immutable sequence of individuals

Both classes are immutable (frozen dataclasses) to enforce functional style.
Any change to an individual's genetic material yields a new Individual whose
fitness is NaN; an evaluated fitness is only ever attached with ``with_fitness``.
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np

from geneforge.genetic import Genotype


@dataclass(frozen=True)
class Individual:
    """A candidate solution: a genotype and its fitness.

    Attributes:
        genotype: The genetic encoding of the solution.
        fitness: Fitness score, or NaN if the individual has not been evaluated
            (or its fitness function rejected it).

    Example:
        >>> from geneforge.genetic import BooleanGene, Chromosome
        >>> genotype = Genotype((Chromosome((BooleanGene(True),)),))
        >>> individual = Individual(genotype)
        >>> individual.is_evaluated
        False
        >>> individual.with_fitness(1.0).fitness
        1.0
    """

    genotype: Genotype
    fitness: float = math.nan

    def __post_init__(self) -> None:
        """Validate the genotype type and normalise fitness to a float.

        Raises:
            TypeError: If genotype is not a Genotype.
        """
        if not isinstance(self.genotype, Genotype):
            raise TypeError(f"genotype must be a Genotype, got {type(self.genotype).__name__}")
        object.__setattr__(self, "fitness", float(self.fitness))

    @property
    def is_evaluated(self) -> bool:
        return not math.isnan(self.fitness)

    def with_fitness(self, fitness: float) -> "Individual":
        """Return the same genotype with the given fitness attached."""
        return Individual(self.genotype, fitness)

    def with_genotype(self, genotype: Genotype) -> "Individual":
        """Return an unevaluated individual holding the given genotype."""
        return Individual(genotype)


@dataclass(frozen=True)
class Population:
    """Immutable ordered sequence of individuals.

    Order carries no meaning for the built-in operators. Individuals are stored
    in a tuple so a population cannot be modified after construction.

    Attributes:
        individuals: The individuals, in order.

    Example:
        >>> from geneforge.genetic import Chromosome, Gene
        >>> genotype = Genotype((Chromosome((Gene(1),)),))
        >>> pop = Population((Individual(genotype, 2.0), Individual(genotype)))
        >>> len(pop)
        2
        >>> pop.fitness
        array([ 2., nan])
        >>> pop.n_evaluated
        1
    """

    individuals: tuple[Individual, ...] = ()

    def __post_init__(self) -> None:
        """Copy the individuals into a tuple and check their types.

        Raises:
            TypeError: If any element is not an Individual.
        """
        individuals = tuple(self.individuals)
        for i, individual in enumerate(individuals):
            if not isinstance(individual, Individual):
                raise TypeError(f"element {i} must be an Individual, got {type(individual).__name__}")
        object.__setattr__(self, "individuals", individuals)

    @classmethod
    def from_genotypes(cls, genotypes: Iterable[Genotype]) -> "Population":
        """Build an unevaluated population from genotypes."""
        return cls(tuple(Individual(genotype) for genotype in genotypes))

    def __len__(self) -> int:
        """Return the number of individuals in the population."""
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def __getitem__(self, idx: int) -> Individual:
        """Get a single individual.

        Args:
            idx: Index of the individual (supports negative indexing).

        Returns:
            The Individual at that position.

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.

        Example:
            >>> pop[0].fitness
            2.0
            >>> pop[-1].is_evaluated
            False
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        original_idx = idx
        # Handle negative indexing
        if idx < 0:
            idx = n + idx
        if idx < 0 or idx >= n:
            raise IndexError(f"index {original_idx} is out of bounds for population with {n} individuals")

        return self.individuals[idx]

    def __add__(self, other: "Population") -> "Population":
        """Concatenate two populations, keeping order."""
        if not isinstance(other, Population):
            return NotImplemented
        return Population(self.individuals + other.individuals)

    def take(self, indices: Iterable[int]) -> "Population":
        """Return a population of the individuals at the given indices (repeats allowed)."""
        return Population(tuple(self[int(i)] for i in indices))

    @property
    def genotypes(self) -> list[Genotype]:
        return [individual.genotype for individual in self.individuals]

    @property
    def fitness(self) -> np.ndarray:
        """Return the fitness of every individual.

        Returns:
            Float64 array of shape (n,), NaN where an individual is unevaluated.
        """
        return np.array([individual.fitness for individual in self.individuals], dtype=np.float64)

    @property
    def n_evaluated(self) -> int:
        """Return the number of individuals with a fitness value."""
        return sum(1 for individual in self.individuals if individual.is_evaluated)
