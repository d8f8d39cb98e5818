"""Cut point crossovers for sequences of any gene type."""

from collections.abc import Sequence
from typing import Any, TypeVar

import numpy as np

from geneforge.crossover.base import Crossover
from geneforge.errors import PreconditionError, check_positive
from geneforge.genetic import Chromosome
from geneforge.sampling import random_indices

T = TypeVar("T")


def single_point_at(first: Sequence[T], second: Sequence[T], point: int) -> tuple[list[T], list[T]]:
    """Exchange the tails of two sequences from ``point`` onwards.

    Example:
        >>> single_point_at([1, 2, 3, 4], [5, 6, 7, 8], 1)
        ([1, 6, 7, 8], [5, 2, 3, 4])
    """
    return list(first[:point]) + list(second[point:]), list(second[:point]) + list(first[point:])


def multi_point_at(first: Sequence[T], second: Sequence[T], points: Sequence[int]) -> tuple[list[T], list[T]]:
    """Exchange every other segment delimited by ``points``.

    The segment from the first cut point to the second is exchanged, the one
    from the second to the third is kept, and so on. The last segment runs to
    the end of the sequences.

    Example:
        >>> multi_point_at([0, 0, 0, 0, 0], [1, 1, 1, 1, 1], [1, 3])
        ([0, 1, 1, 0, 0], [1, 0, 0, 1, 1])
    """
    a, b = list(first), list(second)
    cuts = sorted(points) + [len(a)]
    for k in range(0, len(cuts) - 1, 2):
        lo, hi = cuts[k], cuts[k + 1]
        a[lo:hi], b[lo:hi] = b[lo:hi], a[lo:hi]
    return a, b


class SinglePointCrossover(Crossover):
    """Exchange the gene tails of two parents after a random cut point in ``[0, length)``."""

    def __init__(self, chromosome_rate: float = 1.0, exclusivity: bool = False) -> None:
        super().__init__(num_parents=2, num_offspring=2, chromosome_rate=chromosome_rate, exclusivity=exclusivity)

    def crossover_chromosomes(self, chromosomes: Sequence[Chromosome], rng: np.random.Generator) -> list[Chromosome]:
        self.check_chromosomes(chromosomes)
        first, second = chromosomes
        if len(first) == 0:
            return [first, second]
        point = int(rng.integers(len(first)))
        genes_a, genes_b = single_point_at(first.genes, second.genes, point)
        return [first.duplicate_with_genes(genes_a), second.duplicate_with_genes(genes_b)]


class MultiPointCrossover(Crossover):
    """Exchange alternate segments between ``cuts`` distinct random cut points.

    Args:
        cuts: Number of cut points.
        chromosome_rate: Probability of each chromosome position being crossed.
        exclusivity: Whether each individual may belong to one group only.

    Raises:
        ConfigurationError: If cuts is not a positive integer.
    """

    def __init__(self, cuts: int = 2, chromosome_rate: float = 1.0, exclusivity: bool = False) -> None:
        super().__init__(num_parents=2, num_offspring=2, chromosome_rate=chromosome_rate, exclusivity=exclusivity)
        self.cuts = check_positive("cuts", cuts)

    def crossover_chromosomes(self, chromosomes: Sequence[Chromosome], rng: np.random.Generator) -> list[Chromosome]:
        self.check_chromosomes(chromosomes)
        first, second = chromosomes
        if self.cuts > len(first):
            raise PreconditionError(f"cannot place {self.cuts} cut points in chromosomes of length {len(first)}")
        points = random_indices(self.cuts, len(first), rng)
        genes_a, genes_b = multi_point_at(first.genes, second.genes, points)
        return [first.duplicate_with_genes(genes_a), second.duplicate_with_genes(genes_b)]

    def _params(self) -> dict[str, Any]:
        return {"cuts": self.cuts, **super()._params()}
