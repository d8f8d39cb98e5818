"""Probabilistic index selection shared by every operator.

All stochastic gating in geneforge goes through these functions so that the
sequence of draws from the random source is fixed by the algorithm and not by
implementation details. Reproducibility under a fixed seed depends on it:

- select_indices: one Bernoulli trial per index, in ascending index order
- random_indices: a fixed number of distinct indices, without replacement
- subsets: partition a population into parent groups for crossover
"""

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from geneforge.errors import PreconditionError

T = TypeVar("T")

EPSILON = 1e-20
"""Tolerance under which a probability is treated as exactly 0 or 1."""


def select_indices(probability: float, range_size: int, rng: np.random.Generator) -> list[int]:
    """Select the indices of ``range(range_size)`` that pass a Bernoulli trial.

    Each index is included independently with the given probability. Exactly
    one ``rng.random()`` draw is consumed per index, in ascending order, unless
    the probability is (within EPSILON) 0 or 1, in which case no draws are made.

    Args:
        probability: Inclusion probability in [0, 1].
        range_size: Number of candidate indices.
        rng: Random source.

    Returns:
        Ascending list of selected indices.

    Raises:
        PreconditionError: If probability is outside [0, 1] or range_size is negative.

    Example:
        >>> rng = np.random.default_rng(0)
        >>> select_indices(1.0, 4, rng)
        [0, 1, 2, 3]
        >>> select_indices(0.0, 4, rng)
        []
    """
    if not 0.0 <= probability <= 1.0:
        raise PreconditionError(f"probability must be in [0, 1], got {probability}")
    if range_size < 0:
        raise PreconditionError(f"range_size must be non-negative, got {range_size}")

    if range_size == 0 or probability <= EPSILON:
        return []
    if probability >= 1.0 - EPSILON:
        return list(range(range_size))
    return [i for i in range(range_size) if rng.random() < probability]


def random_indices(count: int, end: int, rng: np.random.Generator) -> list[int]:
    """Draw ``count`` distinct indices from ``range(end)``, returned sorted.

    Indices are removed one at a time from the pool of remaining indices, one
    ``rng.integers`` draw per index.

    Raises:
        PreconditionError: If count is negative or exceeds end.
    """
    if count < 0:
        raise PreconditionError(f"count must be non-negative, got {count}")
    if count > end:
        raise PreconditionError(f"count ({count}) cannot exceed the size of the range ({end})")

    remaining = list(range(end))
    picked = [remaining.pop(int(rng.integers(len(remaining)))) for _ in range(count)]
    return sorted(picked)


def subsets(elements: Sequence[T], size: int, exclusive: bool, rng: np.random.Generator) -> list[list[T]]:
    """Partition elements into groups of ``size`` for recombination.

    The elements are shuffled first. With ``exclusive=True`` the shuffled list is
    cut into consecutive groups, so every element belongs to exactly one group.
    Otherwise each group starts with the next unused element, which guarantees
    every element appears at least once, and its remaining slots are filled by
    uniform draws (with replacement) from all elements.

    Args:
        elements: Items to group (typically individuals).
        size: Number of items per group.
        exclusive: Whether items may appear in more than one group.
        rng: Random source.

    Returns:
        List of groups, each a list of ``size`` items.

    Raises:
        PreconditionError: If elements is empty, size is not positive, or
            exclusive grouping is requested and len(elements) is not a multiple
            of size.
    """
    n = len(elements)
    if n == 0:
        raise PreconditionError("cannot build subsets of an empty collection")
    if size <= 0:
        raise PreconditionError(f"subset size must be positive, got {size}")
    if exclusive and n % size != 0:
        raise PreconditionError(
            f"exclusive subsets require the number of elements ({n}) to be a multiple of the subset size ({size})"
        )

    order = [int(i) for i in rng.permutation(n)]
    groups: list[list[T]] = []

    if exclusive:
        for start in range(0, n, size):
            groups.append([elements[i] for i in order[start : start + size]])
        return groups

    remaining = order
    while remaining:
        first = remaining.pop(0)
        group_indices = [first]
        for _ in range(size - 1):
            pick = int(rng.integers(n))
            group_indices.append(pick)
            if pick in remaining:
                remaining.remove(pick)
        groups.append([elements[i] for i in group_indices])
    return groups
