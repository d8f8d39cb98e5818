"""Tests for lift helpers, population construction and evaluation."""

import math

import numpy as np
import pytest
from conftest import permutation_genotype, population_of

from geneforge.errors import ConfigurationError
from geneforge.evaluation import check_n_workers, construct, evaluate_population, lift, lift_parallel, lifted
from geneforge.factories import genotype_factory, int_chromosome


def sum_genes(genotype) -> float:
    """Module level fitness so it pickles for joblib workers."""
    return float(sum(genotype.flatten()))


class TestLift:
    """Tests for lift and lift_parallel."""

    def test_lift_maps_in_order(self) -> None:
        """lift applies the function to every item, keeping order."""
        assert lift(lambda x: x * 2)([1, 2, 3]) == [2, 4, 6]

    def test_lift_empty(self) -> None:
        """Lifting over nothing returns an empty list."""
        assert lift(str)([]) == []

    def test_lift_parallel_matches_lift(self) -> None:
        """Parallel lifting returns the same results as sequential lifting."""
        items = list(range(10))

        assert lift_parallel(abs, n_workers=2)(items) == lift(abs)(items)

    def test_lifted_selects_sequential_for_none(self) -> None:
        """lifted with n_workers None runs sequentially."""
        assert lifted(abs, None)([-1, -2]) == [1, 2]

    @pytest.mark.parametrize("n_workers", [0, -2, 1.5, True])
    def test_rejects_invalid_workers(self, n_workers) -> None:
        """n_workers must be positive or -1."""
        with pytest.raises(ConfigurationError, match="n_workers must be positive or -1"):
            check_n_workers(n_workers)

    @pytest.mark.parametrize("n_workers", [None, 1, 4, -1])
    def test_accepts_valid_workers(self, n_workers) -> None:
        """None, positive integers and -1 are valid."""
        assert check_n_workers(n_workers) == n_workers


class TestConstruct:
    """Tests for construct."""

    def test_builds_unevaluated_population(self, rng) -> None:
        """construct builds size unevaluated individuals."""
        pop = construct(genotype_factory(int_chromosome(5, (0, 9))), 8, rng)

        assert len(pop) == 8
        assert pop.n_evaluated == 0

    def test_deterministic_for_seed(self) -> None:
        """The same seed builds the same population."""
        init = genotype_factory(int_chromosome(5, (0, 1000)))
        first = construct(init, 6, np.random.default_rng(1))
        second = construct(init, 6, np.random.default_rng(1))

        assert first.genotypes == second.genotypes

    def test_parallel_matches_sequential(self) -> None:
        """Parallel construction builds the same population as sequential construction."""
        init = genotype_factory(int_chromosome(5, (0, 1000)))
        sequential = construct(init, 6, np.random.default_rng(1))
        parallel = construct(init, 6, np.random.default_rng(1), n_workers=2)

        assert sequential.genotypes == parallel.genotypes


class TestEvaluatePopulation:
    """Tests for evaluate_population."""

    def test_evaluates_only_missing_fitness(self) -> None:
        """Individuals with a fitness are not re-evaluated."""
        pop = population_of(
            [permutation_genotype([1, 2]), permutation_genotype([3, 4]), permutation_genotype([5])],
            [100.0, math.nan, math.nan],
        )
        calls = []

        def fitness(genotype):
            calls.append(genotype)
            return sum_genes(genotype)

        evaluated, count = evaluate_population(pop, fitness)

        assert count == 2
        assert len(calls) == 2
        np.testing.assert_array_equal(evaluated.fitness, [100.0, 7.0, 5.0])

    def test_nothing_to_evaluate(self, evaluated_population) -> None:
        """A fully evaluated population is returned as is."""
        evaluated, count = evaluate_population(evaluated_population, sum_genes)

        assert evaluated is evaluated_population
        assert count == 0

    def test_nan_fitness_stays_unevaluated(self) -> None:
        """A fitness function may return NaN for invalid genotypes."""
        pop = population_of([permutation_genotype([1])])
        evaluated, count = evaluate_population(pop, lambda genotype: math.nan)

        assert count == 1
        assert evaluated.n_evaluated == 0

    def test_parallel_evaluation(self) -> None:
        """Parallel evaluation gives the same fitness values."""
        pop = population_of([permutation_genotype([i, i + 1]) for i in range(6)])

        evaluated, count = evaluate_population(pop, sum_genes, n_workers=2)

        assert count == 6
        np.testing.assert_array_equal(evaluated.fitness, [1.0, 3.0, 5.0, 7.0, 9.0, 11.0])
