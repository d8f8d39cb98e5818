"""Genetic material: genes, chromosomes and genotypes.

Every type in this module is an immutable value container. Operators never
modify a gene or a chromosome in place; they build a new one through
``duplicate_with_value`` / ``duplicate_with_genes`` and leave the original
untouched and valid.

Gene types are independent frozen dataclasses. What an operator may do with a
gene is expressed by small capability protocols instead of a shared base class:

- Mutable: ``mutate(rng)`` re-samples the value from the gene's own domain
- Flippable: ``flip()`` negates a boolean value
- Averageable: ``average(others)`` blends the value with other genes
- Ranged: exposes a ``range`` attribute

A gene validates its value on construction. A value outside the gene's range or
rejected by its filter raises PreconditionError; values are never clamped.
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

import numpy as np

from geneforge.errors import PreconditionError
from geneforge.trees import Tree

T = TypeVar("T")


@runtime_checkable
class Mutable(Protocol):
    """A gene that can draw a fresh value from its own domain."""

    def mutate(self, rng: np.random.Generator) -> Any: ...


@runtime_checkable
class Flippable(Protocol):
    """A gene holding a boolean that can be negated."""

    def flip(self) -> Any: ...


@runtime_checkable
class Averageable(Protocol):
    """A gene whose value can be blended with the values of other genes."""

    def average(self, others: Sequence[Any]) -> Any: ...


@runtime_checkable
class Ranged(Protocol):
    """A gene constrained to an inclusive ``(lower, upper)`` range."""

    range: tuple[Any, Any]


def _check_filter(value: Any, predicate: Callable[[Any], bool] | None) -> None:
    if predicate is not None and not predicate(value):
        raise PreconditionError(f"value {value!r} is rejected by the gene filter")


def _check_range(value: Any, bounds: tuple[Any, Any]) -> None:
    lower, upper = bounds
    if lower > upper:
        raise PreconditionError(f"range lower bound must not exceed upper bound, got {bounds}")
    if not lower <= value <= upper:
        raise PreconditionError(f"value {value!r} is outside the range [{lower}, {upper}]")


def _sample_filtered(draw: Callable[[], T], predicate: Callable[[T], bool] | None) -> T:
    value = draw()
    while predicate is not None and not predicate(value):
        value = draw()
    return value


# =============================================================================
# Genes
# =============================================================================


@dataclass(frozen=True)
class Gene(Generic[T]):
    """Generic value gene, used for permutations and other plain sequences.

    Attributes:
        value: The wrapped value.
        filter: Optional predicate the value must satisfy.

    Example:
        >>> gene = Gene(3)
        >>> gene.duplicate_with_value(5).value
        5
    """

    value: T
    filter: Callable[[T], bool] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        _check_filter(self.value, self.filter)

    def duplicate_with_value(self, value: T) -> "Gene[T]":
        return replace(self, value=value)


@dataclass(frozen=True)
class BooleanGene:
    """Gene holding a single boolean value."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bool, np.bool_)):
            raise PreconditionError(f"BooleanGene value must be a bool, got {type(self.value).__name__}")
        object.__setattr__(self, "value", bool(self.value))

    def duplicate_with_value(self, value: bool) -> "BooleanGene":
        return BooleanGene(value)

    def flip(self) -> "BooleanGene":
        """Return a gene holding the negated value."""
        return BooleanGene(not self.value)

    def mutate(self, rng: np.random.Generator) -> "BooleanGene":
        """Return a gene holding a fair coin toss (which may equal the current value)."""
        return BooleanGene(bool(rng.random() < 0.5))


@dataclass(frozen=True)
class IntGene:
    """Integer gene constrained to an inclusive range and an optional filter.

    Attributes:
        value: The integer value.
        range: Inclusive ``(lower, upper)`` bounds.
        filter: Optional predicate the value must satisfy.

    Raises:
        PreconditionError: If the value lies outside the range or fails the filter.
    """

    value: int
    range: tuple[int, int] = (-(2**31), 2**31 - 1)
    filter: Callable[[int], bool] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", int(self.value))
        _check_range(self.value, self.range)
        _check_filter(self.value, self.filter)

    def duplicate_with_value(self, value: int) -> "IntGene":
        return replace(self, value=value)

    def mutate(self, rng: np.random.Generator) -> "IntGene":
        """Draw a uniform integer in range until the filter accepts it."""
        lower, upper = self.range
        value = _sample_filtered(lambda: int(rng.integers(lower, upper, endpoint=True)), self.filter)
        return self.duplicate_with_value(value)

    def average(self, others: Sequence["IntGene"]) -> "IntGene":
        """Return a gene holding the rounded mean of this and the other values."""
        values = [self.value, *(other.value for other in others)]
        return self.duplicate_with_value(int(round(sum(values) / len(values))))


@dataclass(frozen=True)
class DoubleGene:
    """Floating point gene constrained to an inclusive range and an optional filter."""

    value: float
    range: tuple[float, float] = (-np.inf, np.inf)
    filter: Callable[[float], bool] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))
        _check_range(self.value, self.range)
        _check_filter(self.value, self.filter)

    def duplicate_with_value(self, value: float) -> "DoubleGene":
        return replace(self, value=value)

    def mutate(self, rng: np.random.Generator) -> "DoubleGene":
        """Draw a uniform value in range until the filter accepts it.

        Raises:
            PreconditionError: If the range is unbounded.
        """
        lower, upper = self.range
        if not (np.isfinite(lower) and np.isfinite(upper)):
            raise PreconditionError(f"cannot sample a DoubleGene with an unbounded range {self.range}")
        value = _sample_filtered(lambda: float(rng.uniform(lower, upper)), self.filter)
        return self.duplicate_with_value(value)

    def average(self, others: Sequence["DoubleGene"]) -> "DoubleGene":
        values = [self.value, *(other.value for other in others)]
        return self.duplicate_with_value(sum(values) / len(values))


@dataclass(frozen=True)
class CharGene:
    """Single character gene constrained to an inclusive character range."""

    value: str
    range: tuple[str, str] = (" ", "z")
    filter: Callable[[str], bool] | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or len(self.value) != 1:
            raise PreconditionError(f"CharGene value must be a single character, got {self.value!r}")
        _check_range(self.value, self.range)
        _check_filter(self.value, self.filter)

    def duplicate_with_value(self, value: str) -> "CharGene":
        return replace(self, value=value)

    def mutate(self, rng: np.random.Generator) -> "CharGene":
        lower, upper = (ord(c) for c in self.range)
        value = _sample_filtered(lambda: chr(int(rng.integers(lower, upper, endpoint=True))), self.filter)
        return self.duplicate_with_value(value)


@dataclass(frozen=True)
class ProgramGene:
    """Gene whose value is a program tree."""

    value: Tree

    def __post_init__(self) -> None:
        if not isinstance(self.value, Tree):
            raise PreconditionError(f"ProgramGene value must be a Tree, got {type(self.value).__name__}")

    def duplicate_with_value(self, value: Tree) -> "ProgramGene":
        return ProgramGene(value)


# =============================================================================
# Chromosome and genotype
# =============================================================================


@dataclass(frozen=True)
class Chromosome:
    """Fixed-length, ordered sequence of genes.

    Genes are stored in a tuple, so a chromosome's length cannot change after
    construction. Operators produce new chromosomes with
    ``duplicate_with_genes``.

    Attributes:
        genes: The genes, in order.

    Example:
        >>> chromosome = Chromosome((BooleanGene(True), BooleanGene(False)))
        >>> len(chromosome)
        2
        >>> [gene.value for gene in chromosome]
        [True, False]
    """

    genes: tuple[Any, ...]

    def __post_init__(self) -> None:
        """Freeze the genes and check they share one type and domain.

        Raises:
            PreconditionError: If a gene differs from the first one in type,
                range or filter.
        """
        object.__setattr__(self, "genes", tuple(self.genes))
        if not self.verify():
            kinds = sorted({type(gene).__name__ for gene in self.genes})
            raise PreconditionError(f"chromosome genes must share one type, range and filter, got types {kinds}")

    def __len__(self) -> int:
        return len(self.genes)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.genes)

    def __getitem__(self, idx: int) -> Any:
        return self.genes[idx]

    @property
    def values(self) -> list[Any]:
        """Return the gene values, in order."""
        return [gene.value for gene in self.genes]

    def duplicate_with_genes(self, genes: Sequence[Any]) -> "Chromosome":
        """Return a chromosome of the same type holding the given genes."""
        return type(self)(tuple(genes))

    def verify(self) -> bool:
        """Return True if every gene has the type, range and filter of the first one."""
        if not self.genes:
            return True
        first = self.genes[0]
        kind, bounds, predicate = type(first), getattr(first, "range", None), getattr(first, "filter", None)
        return all(
            type(gene) is kind and getattr(gene, "range", None) == bounds and getattr(gene, "filter", None) is predicate
            for gene in self.genes
        )


@dataclass(frozen=True)
class Genotype:
    """Ordered sequence of chromosomes encoding one candidate solution."""

    chromosomes: tuple[Chromosome, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "chromosomes", tuple(self.chromosomes))

    def __len__(self) -> int:
        return len(self.chromosomes)

    def __iter__(self) -> Iterator[Chromosome]:
        return iter(self.chromosomes)

    def __getitem__(self, idx: int) -> Chromosome:
        return self.chromosomes[idx]

    def duplicate_with_chromosomes(self, chromosomes: Sequence[Chromosome]) -> "Genotype":
        return Genotype(tuple(chromosomes))

    def flatten(self) -> list[Any]:
        """Return the values of every gene of every chromosome, in order.

        Example:
            >>> genotype = Genotype((Chromosome((Gene(1), Gene(2))), Chromosome((Gene(3),))))
            >>> genotype.flatten()
            [1, 2, 3]
        """
        return [value for chromosome in self.chromosomes for value in chromosome.values]

    def verify(self) -> bool:
        return all(chromosome.verify() for chromosome in self.chromosomes)
