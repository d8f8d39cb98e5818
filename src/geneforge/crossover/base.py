"""Crossover framework.

A crossover recombines groups of parents into offspring. Applying one to a
population runs these steps:

1. The population is shuffled and cut into parent groups of ``num_parents``
   individuals (see ``geneforge.sampling.subsets``). With ``exclusivity`` each
   individual belongs to exactly one group, otherwise groups may share
   individuals but every individual leads at least one group.
2. Groups are drawn at random, one at a time, and crossed until at least
   ``target_size`` offspring exist. The surplus is truncated.
3. For each crossed group, the chromosome positions taking part are selected
   with ``chromosome_rate``. Selected positions go through
   ``crossover_chromosomes``; every other position is copied from the first
   parent of the group.
4. Offspring are wrapped as new, unevaluated individuals.

A failed precondition aborts the whole call. Nothing is retried.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import numpy as np

from geneforge.errors import ConfigurationError, PreconditionError, check_positive, check_probability
from geneforge.genetic import Chromosome, Genotype
from geneforge.population import Individual, Population
from geneforge.sampling import EPSILON, select_indices, subsets

logger = logging.getLogger(__name__)


class Crossover(ABC):
    """Base class of all crossover operators.

    Args:
        num_parents: Parents per group, at least 2.
        num_offspring: Offspring produced per group, at least 1.
        chromosome_rate: Probability of each chromosome position being crossed.
        exclusivity: Whether each individual may belong to one group only.

    Raises:
        ConfigurationError: If a count is out of range or the rate is outside [0, 1].
    """

    def __init__(
        self,
        num_parents: int = 2,
        num_offspring: int = 2,
        chromosome_rate: float = 1.0,
        exclusivity: bool = False,
    ) -> None:
        if isinstance(num_parents, bool) or not isinstance(num_parents, int) or num_parents < 2:
            raise ConfigurationError(f"num_parents must be an integer of at least 2, got {num_parents!r}")
        self.num_parents = num_parents
        self.num_offspring = check_positive("num_offspring", num_offspring)
        self.chromosome_rate = check_probability("chromosome_rate", chromosome_rate)
        self.exclusivity = bool(exclusivity)

    def __call__(self, population: Population, target_size: int, rng: np.random.Generator) -> Population:
        return self.apply(population, target_size, rng)

    def apply(self, population: Population, target_size: int, rng: np.random.Generator) -> Population:
        """Produce exactly ``target_size`` offspring from a population of parents.

        Args:
            population: Candidate parents.
            target_size: Number of individuals to return.
            rng: Random source.

        Returns:
            Population of ``target_size`` individuals. With a chromosome rate
            of 0 and ``target_size == len(population)`` the input is returned
            as is.

        Raises:
            PreconditionError: If target_size is negative, the population is
                empty, exclusive groups cannot be formed, or a group violates
                the operator's preconditions.
        """
        if target_size < 0:
            raise PreconditionError(f"target_size must be non-negative, got {target_size}")
        if target_size == 0:
            return Population()
        if self.chromosome_rate <= EPSILON and len(population) == target_size:
            return population

        groups = subsets(list(population), self.num_parents, self.exclusivity, rng)
        offspring: list[Individual] = []
        while len(offspring) < target_size:
            group = groups[int(rng.integers(len(groups)))]
            genotypes = self.crossover([individual.genotype for individual in group], rng)
            offspring.extend(Individual(genotype) for genotype in genotypes)

        logger.debug("%r built %d offspring from %d parent groups", self, target_size, len(groups))
        return Population(tuple(offspring[:target_size]))

    def crossover(self, genotypes: Sequence[Genotype], rng: np.random.Generator) -> list[Genotype]:
        """Cross one group of parent genotypes.

        Returns:
            ``num_offspring`` genotypes.

        Raises:
            PreconditionError: If the number of parents is wrong or the parents
                have genotypes of different lengths.
        """
        if len(genotypes) != self.num_parents:
            raise PreconditionError(f"{type(self).__name__} requires {self.num_parents} parents, got {len(genotypes)}")
        length = len(genotypes[0])
        lengths = [len(genotype) for genotype in genotypes]
        if any(n != length for n in lengths):
            raise PreconditionError(f"parent genotypes must have the same number of chromosomes, got {lengths}")

        first = list(genotypes[0])
        offspring = [list(first) for _ in range(self.num_offspring)]
        for i in select_indices(self.chromosome_rate, length, rng):
            crossed = self.crossover_chromosomes([genotype[i] for genotype in genotypes], rng)
            if len(crossed) != self.num_offspring:
                raise PreconditionError(
                    f"{type(self).__name__} produced {len(crossed)} chromosomes, expected {self.num_offspring}"
                )
            for k, chromosome in enumerate(crossed):
                offspring[k][i] = chromosome
        return [genotypes[0].duplicate_with_chromosomes(chromosomes) for chromosomes in offspring]

    @abstractmethod
    def crossover_chromosomes(self, chromosomes: Sequence[Chromosome], rng: np.random.Generator) -> list[Chromosome]:
        """Recombine one chromosome of each parent into ``num_offspring`` chromosomes."""

    def check_chromosomes(self, chromosomes: Sequence[Chromosome]) -> None:
        """Validate the parent count and that all chromosomes have the same length.

        Raises:
            PreconditionError: On either violation.
        """
        if len(chromosomes) != self.num_parents:
            raise PreconditionError(
                f"{type(self).__name__} requires {self.num_parents} chromosomes, got {len(chromosomes)}"
            )
        lengths = [len(chromosome) for chromosome in chromosomes]
        if any(n != lengths[0] for n in lengths):
            raise PreconditionError(f"chromosomes must have the same length, got {lengths}")

    def _params(self) -> dict[str, Any]:
        return {"chromosome_rate": self.chromosome_rate, "exclusivity": self.exclusivity}

    def __repr__(self) -> str:
        params = ", ".join(f"{key}={value}" for key, value in self._params().items())
        return f"{type(self).__name__}({params})"
