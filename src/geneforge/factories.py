"""Chromosome and genotype factories.

Each factory function returns a ``make(rng)`` closure that builds one random
chromosome. ``genotype_factory`` combines several of them into the
``init(rng) -> Genotype`` callable expected by the engine.

Example:
    >>> import numpy as np
    >>> init = genotype_factory(boolean_chromosome(size=8, true_rate=0.5))
    >>> genotype = init(np.random.default_rng(42))
    >>> len(genotype[0])
    8
"""

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from geneforge.errors import ConfigurationError, check_positive, check_probability
from geneforge.genetic import BooleanGene, CharGene, Chromosome, DoubleGene, Gene, Genotype, IntGene, ProgramGene
from geneforge.programs import Function, Terminal, generate_ramped

ChromosomeFactory = Callable[[np.random.Generator], Chromosome]
GenotypeFactory = Callable[[np.random.Generator], Genotype]


def boolean_chromosome(size: int, true_rate: float = 0.5) -> ChromosomeFactory:
    """Create a factory of boolean chromosomes.

    Args:
        size: Number of genes.
        true_rate: Probability of each gene being True.

    Raises:
        ConfigurationError: If size is not positive or true_rate is outside [0, 1].
    """
    check_positive("size", size)
    check_probability("true_rate", true_rate)

    def make(rng: np.random.Generator) -> Chromosome:
        return Chromosome(tuple(BooleanGene(bool(rng.random() < true_rate)) for _ in range(size)))

    return make


def int_chromosome(
    size: int,
    bounds: tuple[int, int],
    filter: Callable[[int], bool] | None = None,
) -> ChromosomeFactory:
    """Create a factory of integer chromosomes with values drawn uniformly in ``bounds`` (inclusive)."""
    check_positive("size", size)
    lower, upper = bounds
    if lower > upper:
        raise ConfigurationError(f"bounds lower value must not exceed upper value, got {bounds}")

    def make(rng: np.random.Generator) -> Chromosome:
        genes = []
        for _ in range(size):
            value = int(rng.integers(lower, upper, endpoint=True))
            while filter is not None and not filter(value):
                value = int(rng.integers(lower, upper, endpoint=True))
            genes.append(IntGene(value, bounds, filter))
        return Chromosome(tuple(genes))

    return make


def double_chromosome(
    size: int,
    bounds: tuple[float, float],
    filter: Callable[[float], bool] | None = None,
) -> ChromosomeFactory:
    """Create a factory of floating point chromosomes with values drawn uniformly in ``bounds``."""
    check_positive("size", size)
    lower, upper = bounds
    if not (np.isfinite(lower) and np.isfinite(upper)) or lower > upper:
        raise ConfigurationError(f"bounds must be finite with lower <= upper, got {bounds}")

    def make(rng: np.random.Generator) -> Chromosome:
        genes = []
        for _ in range(size):
            value = float(rng.uniform(lower, upper))
            while filter is not None and not filter(value):
                value = float(rng.uniform(lower, upper))
            genes.append(DoubleGene(value, bounds, filter))
        return Chromosome(tuple(genes))

    return make


def char_chromosome(size: int, bounds: tuple[str, str] = (" ", "z")) -> ChromosomeFactory:
    """Create a factory of character chromosomes."""
    check_positive("size", size)
    lower, upper = ord(bounds[0]), ord(bounds[1])
    if lower > upper:
        raise ConfigurationError(f"bounds lower value must not exceed upper value, got {bounds}")

    def make(rng: np.random.Generator) -> Chromosome:
        return Chromosome(
            tuple(CharGene(chr(int(rng.integers(lower, upper, endpoint=True))), bounds) for _ in range(size))
        )

    return make


def permutation_chromosome(values: Sequence[Any]) -> ChromosomeFactory:
    """Create a factory of chromosomes holding random orderings of ``values``.

    Raises:
        ConfigurationError: If values is empty or contains duplicates.
    """
    values = list(values)
    if not values:
        raise ConfigurationError("permutation values must not be empty")
    if len(set(values)) != len(values):
        raise ConfigurationError(f"permutation values must be distinct, got {values}")

    def make(rng: np.random.Generator) -> Chromosome:
        return Chromosome(tuple(Gene(values[int(i)]) for i in rng.permutation(len(values))))

    return make


def program_chromosome(
    size: int,
    terminals: Sequence[Terminal],
    functions: Sequence[Function],
    min_height: int = 1,
    max_height: int = 4,
) -> ChromosomeFactory:
    """Create a factory of program chromosomes built with ramped half-and-half."""
    check_positive("size", size)
    if not terminals:
        raise ConfigurationError("at least one terminal is required to generate programs")

    def make(rng: np.random.Generator) -> Chromosome:
        return Chromosome(
            tuple(
                ProgramGene(generate_ramped(terminals, functions, min_height, max_height, rng))
                for _ in range(size)
            )
        )

    return make


def genotype_factory(*chromosome_factories: ChromosomeFactory) -> GenotypeFactory:
    """Combine chromosome factories into a genotype initialiser.

    Raises:
        ConfigurationError: If no chromosome factory is given.
    """
    if not chromosome_factories:
        raise ConfigurationError("at least one chromosome factory is required")

    def init(rng: np.random.Generator) -> Genotype:
        return Genotype(tuple(make(rng) for make in chromosome_factories))

    return init
