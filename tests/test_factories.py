"""Tests for chromosome and genotype factories."""

import numpy as np
import pytest

from geneforge.errors import ConfigurationError
from geneforge.factories import (
    boolean_chromosome,
    char_chromosome,
    double_chromosome,
    genotype_factory,
    int_chromosome,
    permutation_chromosome,
    program_chromosome,
)
from geneforge.genetic import BooleanGene, CharGene, DoubleGene, IntGene, ProgramGene


class TestChromosomeFactories:
    """Tests for the per-type chromosome factories."""

    def test_boolean_chromosome(self, rng) -> None:
        """Boolean chromosomes have the requested size and gene type."""
        chromosome = boolean_chromosome(size=16)(rng)

        assert len(chromosome) == 16
        assert all(isinstance(gene, BooleanGene) for gene in chromosome)

    def test_boolean_true_rate_extremes(self, rng) -> None:
        """true_rate 0 and 1 give constant chromosomes."""
        assert not any(boolean_chromosome(10, true_rate=0.0)(rng).values)
        assert all(boolean_chromosome(10, true_rate=1.0)(rng).values)

    def test_int_chromosome_bounds(self, rng) -> None:
        """Integer genes are drawn within the inclusive bounds."""
        chromosome = int_chromosome(50, (-2, 2))(rng)

        assert all(isinstance(gene, IntGene) for gene in chromosome)
        assert set(chromosome.values) <= {-2, -1, 0, 1, 2}
        assert chromosome[0].range == (-2, 2)

    def test_int_chromosome_filter(self, rng) -> None:
        """Generated integers pass the filter."""
        chromosome = int_chromosome(30, (0, 9), filter=lambda v: v % 3 == 0)(rng)

        assert all(v % 3 == 0 for v in chromosome.values)

    def test_double_chromosome(self, rng) -> None:
        """Double genes are drawn within the bounds."""
        chromosome = double_chromosome(20, (1.0, 2.0))(rng)

        assert all(isinstance(gene, DoubleGene) for gene in chromosome)
        assert all(1.0 <= v <= 2.0 for v in chromosome.values)

    def test_double_chromosome_rejects_unbounded(self) -> None:
        """Unbounded double ranges are rejected."""
        with pytest.raises(ConfigurationError, match="bounds must be finite"):
            double_chromosome(5, (0.0, np.inf))

    def test_char_chromosome(self, rng) -> None:
        """Character genes are drawn within the bounds."""
        chromosome = char_chromosome(20, ("a", "e"))(rng)

        assert all(isinstance(gene, CharGene) for gene in chromosome)
        assert set(chromosome.values) <= set("abcde")

    def test_permutation_chromosome(self, rng) -> None:
        """Permutation chromosomes hold every value exactly once."""
        chromosome = permutation_chromosome(range(10))(rng)

        assert sorted(chromosome.values) == list(range(10))

    def test_permutation_rejects_duplicates(self) -> None:
        """Duplicate permutation values are rejected."""
        with pytest.raises(ConfigurationError, match="must be distinct"):
            permutation_chromosome([1, 1, 2])

    def test_permutation_rejects_empty(self) -> None:
        """Empty permutations are rejected."""
        with pytest.raises(ConfigurationError, match="must not be empty"):
            permutation_chromosome([])

    def test_program_chromosome(self, primitives, rng) -> None:
        """Program chromosomes hold well formed program genes."""
        make = program_chromosome(
            3, [primitives["x"], primitives["one"]], [primitives["add"], primitives["mul"]], max_height=3
        )
        chromosome = make(rng)

        assert len(chromosome) == 3
        for gene in chromosome:
            assert isinstance(gene, ProgramGene)
            assert gene.value.height <= 2
            gene.value.check_arity()

    @pytest.mark.parametrize("size", [0, -1, 2.5, True])
    def test_rejects_invalid_size(self, size) -> None:
        """Sizes must be positive integers."""
        with pytest.raises(ConfigurationError, match="size must be a positive integer"):
            boolean_chromosome(size)

    def test_rejects_invalid_true_rate(self) -> None:
        """true_rate must be a probability."""
        with pytest.raises(ConfigurationError, match=r"true_rate must be in \[0, 1\]"):
            boolean_chromosome(4, true_rate=1.5)


class TestGenotypeFactory:
    """Tests for genotype_factory."""

    def test_combines_chromosomes(self, rng) -> None:
        """The genotype holds one chromosome per factory, in order."""
        init = genotype_factory(boolean_chromosome(4), permutation_chromosome("abc"))
        genotype = init(rng)

        assert len(genotype) == 2
        assert len(genotype[0]) == 4
        assert sorted(genotype[1].values) == ["a", "b", "c"]

    def test_deterministic_for_seed(self) -> None:
        """The same seed builds the same genotype."""
        init = genotype_factory(int_chromosome(10, (0, 100)))

        assert init(np.random.default_rng(1)) == init(np.random.default_rng(1))

    def test_requires_a_factory(self) -> None:
        """At least one chromosome factory is required."""
        with pytest.raises(ConfigurationError, match="at least one chromosome factory"):
            genotype_factory()
