"""Mutation framework.

A mutator perturbs individuals independently. Application is gated at three
nested levels, each through ``select_indices`` so the sequence of random draws
is fixed by the algorithm:

1. Population: each individual is mutated with probability ``individual_rate``.
2. Individual: each chromosome of a selected individual is mutated with
   probability ``chromosome_rate``.
3. Chromosome: gene-wise strategies mutate each gene with probability
   ``gene_rate``; sequence-wise strategies (swap, inversion, shuffle) use their
   own rates.

Individuals that end up with at least one mutation are rebuilt with NaN
fitness. Individuals without any mutation are passed through untouched, with
their fitness.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from geneforge.errors import PreconditionError, check_probability
from geneforge.genetic import Chromosome
from geneforge.population import Individual, Population
from geneforge.sampling import EPSILON, select_indices

logger = logging.getLogger(__name__)


class Mutator(ABC):
    """Base class of all mutation operators.

    Subclasses implement ``mutate_chromosome``. Calling a mutator returns only
    the mutated population, which makes it usable as an alterer; ``apply``
    additionally returns the number of mutations performed.

    Args:
        individual_rate: Probability of each individual being mutated.
        chromosome_rate: Probability of each chromosome of a mutated
            individual being mutated.

    Raises:
        ConfigurationError: If a rate is outside [0, 1].
    """

    def __init__(self, individual_rate: float = 0.5, chromosome_rate: float = 0.5) -> None:
        self.individual_rate = check_probability("individual_rate", individual_rate)
        self.chromosome_rate = check_probability("chromosome_rate", chromosome_rate)

    def __call__(self, population: Population, target_size: int, rng: np.random.Generator) -> Population:
        mutated, _ = self.apply(population, target_size, rng)
        return mutated

    def apply(self, population: Population, target_size: int, rng: np.random.Generator) -> tuple[Population, int]:
        """Mutate a population.

        Args:
            population: Individuals to mutate.
            target_size: Expected size of the output. Mutation never changes
                the number of individuals, so it must equal ``len(population)``.
            rng: Random source.

        Returns:
            Tuple of (mutated population, number of mutations).

        Raises:
            PreconditionError: If the population size differs from target_size.
        """
        if len(population) != target_size:
            raise PreconditionError(
                f"mutation preserves population size: got {len(population)} individuals "
                f"for a target size of {target_size}"
            )
        if self.individual_rate <= EPSILON:
            return population, 0

        individuals = list(population)
        count = 0
        for i in select_indices(self.individual_rate, len(individuals), rng):
            individuals[i], mutations = self.mutate_individual(individuals[i], rng)
            count += mutations

        logger.debug("%r performed %d mutations on %d individuals", self, count, len(individuals))
        return Population(tuple(individuals)), count

    def mutate_individual(self, individual: Individual, rng: np.random.Generator) -> tuple[Individual, int]:
        """Mutate the selected chromosomes of an individual.

        Returns:
            Tuple of (individual, number of mutations). The individual is a new,
            unevaluated one if anything changed, else the input itself.
        """
        genotype = individual.genotype
        chromosomes = list(genotype)
        count = 0
        for i in select_indices(self.chromosome_rate, len(chromosomes), rng):
            chromosomes[i], mutations = self.mutate_chromosome(chromosomes[i], rng)
            count += mutations
        if count == 0:
            return individual, 0
        return individual.with_genotype(genotype.duplicate_with_chromosomes(chromosomes)), count

    @abstractmethod
    def mutate_chromosome(self, chromosome: Chromosome, rng: np.random.Generator) -> tuple[Chromosome, int]:
        """Mutate one chromosome, returning it with the number of mutations."""

    def _params(self) -> dict[str, Any]:
        return {"individual_rate": self.individual_rate, "chromosome_rate": self.chromosome_rate}

    def __repr__(self) -> str:
        params = ", ".join(f"{key}={value}" for key, value in self._params().items())
        return f"{type(self).__name__}({params})"


class GeneMutator(Mutator):
    """Mutator acting gene by gene.

    Each gene of a mutated chromosome is passed to ``mutate_gene`` with
    probability ``gene_rate``. Every selected gene counts as one mutation, even
    when the new value happens to equal the old one.
    """

    def __init__(self, individual_rate: float = 0.5, chromosome_rate: float = 0.5, gene_rate: float = 0.5) -> None:
        super().__init__(individual_rate, chromosome_rate)
        self.gene_rate = check_probability("gene_rate", gene_rate)

    def mutate_chromosome(self, chromosome: Chromosome, rng: np.random.Generator) -> tuple[Chromosome, int]:
        indices = select_indices(self.gene_rate, len(chromosome), rng)
        if not indices:
            return chromosome, 0
        genes = list(chromosome)
        for i in indices:
            genes[i] = self.mutate_gene(genes[i], rng)
        return chromosome.duplicate_with_genes(genes), len(indices)

    @abstractmethod
    def mutate_gene(self, gene: Any, rng: np.random.Generator) -> Any:
        """Return the mutated version of a gene."""

    def _params(self) -> dict[str, Any]:
        return {**super()._params(), "gene_rate": self.gene_rate}


def segment_boundaries(size: int, probability: float, rng: np.random.Generator) -> tuple[int, int]:
    """Pick an inclusive ``(start, end)`` segment of a sequence.

    The start is the first index whose draw falls below ``probability``
    (0 if none does). The end is the first index from the start onwards whose
    draw exceeds ``probability`` (the last index if none does).
    """
    start, end = 0, size - 1
    for i in range(size):
        if rng.random() < probability:
            start = i
            break
    for i in range(start, size):
        if rng.random() > probability:
            end = i
            break
    return start, end
