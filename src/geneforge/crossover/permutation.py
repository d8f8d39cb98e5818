"""Permutation preserving crossovers: PMX, OX and PBX.

All three take exactly two parents whose chromosomes hold the same distinct
values in different orders, and they always return permutations of those
values. The recombination itself is done on plain value lists by the pure
functions ``partially_mapped``, ``ordered_exchange`` and ``position_based``,
which take explicit cut points and can be used on their own.
"""

from abc import abstractmethod
from collections.abc import Hashable, Sequence
from itertools import chain
from typing import TypeVar

import numpy as np

from geneforge.crossover.base import Crossover
from geneforge.errors import PreconditionError
from geneforge.genetic import Chromosome
from geneforge.sampling import random_indices

V = TypeVar("V", bound=Hashable)


def partially_mapped(first: Sequence[V], second: Sequence[V], lo: int, hi: int) -> tuple[list[V], list[V]]:
    """Partially-mapped crossover (PMX) over the window ``[lo, hi)``.

    Each offspring receives the other parent's window verbatim. Outside the
    window it keeps its own parent's values, except that a value already present
    in the received window is replaced through the positional mapping between
    the two windows, repeatedly, until it no longer is.

    Args:
        first: First parent permutation.
        second: Second parent permutation.
        lo: Start of the window (inclusive).
        hi: End of the window (exclusive).

    Returns:
        The two offspring permutations.

    Example:
        >>> partially_mapped([1, 2, 3, 4, 5, 6, 7, 8, 9], [5, 7, 4, 9, 1, 3, 6, 2, 8], 3, 6)
        ([5, 2, 6, 9, 1, 3, 7, 8, 4], [1, 7, 9, 4, 5, 6, 3, 2, 8])
    """

    def build(outer: Sequence[V], inner: Sequence[V]) -> list[V]:
        window = list(inner[lo:hi])
        replaced = list(outer[lo:hi])
        child = list(outer)
        child[lo:hi] = window
        for i in chain(range(lo), range(hi, len(outer))):
            value = outer[i]
            while value in window:
                value = replaced[window.index(value)]
            child[i] = value
        return child

    return build(first, second), build(second, first)


def ordered_exchange(first: Sequence[V], second: Sequence[V], start: int, end: int) -> list[V]:
    """Order crossover (OX) of ``first`` into ``second`` over ``[start, end]``.

    The window of ``first`` is copied verbatim at the same positions. The other
    positions are filled, in order, with the values of ``second`` that are not
    in the window.

    Example:
        >>> ordered_exchange([1, 2, 3, 4, 5, 6, 7, 8, 9], [5, 7, 4, 9, 1, 3, 6, 2, 8], 3, 5)
        [7, 9, 1, 4, 5, 6, 3, 2, 8]
    """
    window = list(first[start : end + 1])
    taken = set(window)
    rest = [value for value in second if value not in taken]
    return rest[:start] + window + rest[start:]


def position_based(first: Sequence[V], second: Sequence[V], positions: Sequence[int]) -> list[V]:
    """Position-based crossover (PBX) of ``first`` into ``second``.

    The values of ``first`` at ``positions`` stay where they are. The remaining
    positions are filled, in order, with the values of ``second`` that were not
    already placed.

    Example:
        >>> position_based([1, 2, 3, 4, 5], [5, 4, 3, 2, 1], [1, 3])
        [5, 2, 3, 4, 1]
    """
    fixed = {i: first[i] for i in positions}
    placed = set(fixed.values())
    fill = iter(value for value in second if value not in placed)
    return [fixed[i] if i in fixed else next(fill) for i in range(len(first))]


class PermutationCrossover(Crossover):
    """Base class of two-parent crossovers over permutation chromosomes."""

    def __init__(self, chromosome_rate: float = 1.0, exclusivity: bool = False) -> None:
        super().__init__(num_parents=2, num_offspring=2, chromosome_rate=chromosome_rate, exclusivity=exclusivity)

    def crossover_chromosomes(self, chromosomes: Sequence[Chromosome], rng: np.random.Generator) -> list[Chromosome]:
        self.check_chromosomes(chromosomes)
        first, second = chromosomes
        values_a, values_b = first.values, second.values
        if len(set(values_a)) != len(values_a) or len(set(values_b)) != len(values_b):
            raise PreconditionError(f"{type(self).__name__} requires chromosomes without duplicate values")
        if set(values_a) != set(values_b):
            raise PreconditionError(f"{type(self).__name__} requires both chromosomes to hold the same values")
        if len(values_a) < 2:
            return [first, second]

        child_a, child_b = self.recombine(values_a, values_b, rng)
        genes = {gene.value: gene for gene in chain(first, second)}
        return [
            first.duplicate_with_genes([genes[value] for value in child_a]),
            second.duplicate_with_genes([genes[value] for value in child_b]),
        ]

    @abstractmethod
    def recombine(self, first: list, second: list, rng: np.random.Generator) -> tuple[list, list]:
        """Return the two offspring value lists."""


class PartiallyMappedCrossover(PermutationCrossover):
    """PMX over a random window ``[lo, hi)`` with ``lo < hi``."""

    def recombine(self, first: list, second: list, rng: np.random.Generator) -> tuple[list, list]:
        lo, hi = random_indices(2, len(first), rng)
        return partially_mapped(first, second, lo, hi)


class OrderedCrossover(PermutationCrossover):
    """OX over a random window ``[start, end]``, shared by both offspring."""

    def recombine(self, first: list, second: list, rng: np.random.Generator) -> tuple[list, list]:
        start, end = random_indices(2, len(first), rng)
        return ordered_exchange(first, second, start, end), ordered_exchange(second, first, start, end)


class PositionBasedCrossover(PermutationCrossover):
    """PBX keeping a random subset of positions fixed.

    For each offspring, the number of fixed positions is drawn uniformly in
    ``[1, length)`` and the positions themselves without replacement. The
    second offspring draws its own positions, with the parents' roles swapped.
    """

    def recombine(self, first: list, second: list, rng: np.random.Generator) -> tuple[list, list]:
        size = len(first)
        positions_a = random_indices(int(rng.integers(1, size)), size, rng)
        positions_b = random_indices(int(rng.integers(1, size)), size, rng)
        return position_based(first, second, positions_a), position_based(second, first, positions_b)
