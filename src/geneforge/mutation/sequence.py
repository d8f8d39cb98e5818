"""Order-changing mutators for permutations and other sequences.

These mutators rearrange the genes of a chromosome without changing their
values, so a permutation stays a permutation. Chromosomes with fewer than two
genes are left unchanged.
"""

from typing import Any

import numpy as np

from geneforge.errors import check_probability
from geneforge.genetic import Chromosome
from geneforge.mutation.base import Mutator, segment_boundaries
from geneforge.sampling import EPSILON, select_indices


class SwapMutator(Mutator):
    """Exchange genes with other, randomly chosen, positions.

    Each position takes part in a swap with probability ``swap_rate``; its
    partner is drawn uniformly among the other positions.

    Args:
        individual_rate: Probability of each individual being mutated.
        chromosome_rate: Probability of each chromosome being mutated.
        swap_rate: Probability of each position starting a swap.
    """

    def __init__(self, individual_rate: float = 0.5, chromosome_rate: float = 0.5, swap_rate: float = 0.5) -> None:
        super().__init__(individual_rate, chromosome_rate)
        self.swap_rate = check_probability("swap_rate", swap_rate)

    def mutate_chromosome(self, chromosome: Chromosome, rng: np.random.Generator) -> tuple[Chromosome, int]:
        size = len(chromosome)
        if size < 2:
            return chromosome, 0
        indices = select_indices(self.swap_rate, size, rng)
        if not indices:
            return chromosome, 0
        genes = list(chromosome)
        for i in indices:
            j = int(rng.integers(size - 1))
            if j >= i:
                j += 1
            genes[i], genes[j] = genes[j], genes[i]
        return chromosome.duplicate_with_genes(genes), len(indices)

    def _params(self) -> dict[str, Any]:
        return {**super()._params(), "swap_rate": self.swap_rate}


class InversionMutator(Mutator):
    """Reverse a segment of the chromosome.

    The segment boundaries are picked with ``inversion_boundary_probability``:
    the start is the first position whose draw falls below it and the end the
    first position from there whose draw exceeds it. With a probability of 1
    the whole chromosome is reversed.

    Example:
        >>> mutator = InversionMutator(1.0, 1.0, inversion_boundary_probability=1.0)
        >>> chromosome = Chromosome((Gene(0), Gene(1)))
        >>> inverted, count = mutator.mutate_chromosome(chromosome, rng)
        >>> inverted.values, count
        ([1, 0], 1)
    """

    def __init__(
        self,
        individual_rate: float = 0.5,
        chromosome_rate: float = 0.5,
        inversion_boundary_probability: float = 0.5,
    ) -> None:
        super().__init__(individual_rate, chromosome_rate)
        self.inversion_boundary_probability = check_probability(
            "inversion_boundary_probability", inversion_boundary_probability
        )

    def mutate_chromosome(self, chromosome: Chromosome, rng: np.random.Generator) -> tuple[Chromosome, int]:
        size = len(chromosome)
        if size < 2:
            return chromosome, 0
        start, end = segment_boundaries(size, self.inversion_boundary_probability, rng)
        if start >= end:
            return chromosome, 0
        genes = list(chromosome)
        genes[start : end + 1] = reversed(genes[start : end + 1])
        return chromosome.duplicate_with_genes(genes), 1

    def _params(self) -> dict[str, Any]:
        return {**super()._params(), "inversion_boundary_probability": self.inversion_boundary_probability}


class PartialShuffleMutator(Mutator):
    """Shuffle a segment of the chromosome.

    Segment boundaries are picked as in InversionMutator, using
    ``shuffle_boundary_probability``. A probability of 0 disables the mutator.
    """

    def __init__(
        self,
        individual_rate: float = 1.0,
        chromosome_rate: float = 1.0,
        shuffle_boundary_probability: float = 0.5,
    ) -> None:
        super().__init__(individual_rate, chromosome_rate)
        self.shuffle_boundary_probability = check_probability(
            "shuffle_boundary_probability", shuffle_boundary_probability
        )

    def mutate_chromosome(self, chromosome: Chromosome, rng: np.random.Generator) -> tuple[Chromosome, int]:
        size = len(chromosome)
        if size < 2 or self.shuffle_boundary_probability <= EPSILON:
            return chromosome, 0
        start, end = segment_boundaries(size, self.shuffle_boundary_probability, rng)
        if start >= end:
            return chromosome, 0
        genes = list(chromosome)
        segment = genes[start : end + 1]
        genes[start : end + 1] = [segment[int(i)] for i in rng.permutation(len(segment))]
        return chromosome.duplicate_with_genes(genes), 1

    def _params(self) -> dict[str, Any]:
        return {**super()._params(), "shuffle_boundary_probability": self.shuffle_boundary_probability}
