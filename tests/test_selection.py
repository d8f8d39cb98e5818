"""Tests for selection strategies.

This module tests:
- tournament_selector: Best-of-k tournaments through the optimizer
- roulette_wheel: Fitness-proportionate selection for both directions
- random_selector: Uniform selection ignoring fitness
- Input validation shared by all selectors
"""

import math

import numpy as np
import pytest
from conftest import permutation_genotype, population_of

from geneforge.errors import ConfigurationError, PreconditionError
from geneforge.optimizers import FitnessMaximizer, FitnessMinimizer
from geneforge.population import Population
from geneforge.selection import random_selector, roulette_wheel, tournament_selector

ALL_SELECTORS = [tournament_selector, roulette_wheel, random_selector]


# =============================================================================
# TestSelectorContract
# =============================================================================


class TestSelectorContract:
    """Tests shared by every selector."""

    @pytest.mark.parametrize("factory", ALL_SELECTORS)
    @pytest.mark.parametrize("count", [0, 1, 5, 12])
    def test_returns_count_individuals(self, factory, count, evaluated_population, rng) -> None:
        """Selectors return exactly count individuals, with replacement."""
        selected = factory()(evaluated_population, count, FitnessMaximizer(), rng)

        assert len(selected) == count

    @pytest.mark.parametrize("factory", ALL_SELECTORS)
    def test_selected_come_from_population(self, factory, evaluated_population, rng) -> None:
        """Every selected individual belongs to the population."""
        selected = factory()(evaluated_population, 20, FitnessMaximizer(), rng)

        assert all(any(ind is original for original in evaluated_population) for ind in selected)

    @pytest.mark.parametrize("factory", ALL_SELECTORS)
    def test_rejects_negative_count(self, factory, evaluated_population, rng) -> None:
        """A negative count is rejected."""
        with pytest.raises(PreconditionError, match="count must be non-negative"):
            factory()(evaluated_population, -1, FitnessMaximizer(), rng)

    @pytest.mark.parametrize("factory", ALL_SELECTORS)
    def test_rejects_empty_population(self, factory, rng) -> None:
        """Selecting from an empty population is rejected."""
        with pytest.raises(PreconditionError, match="cannot select 3 individuals from an empty population"):
            factory()(Population(), 3, FitnessMaximizer(), rng)

    @pytest.mark.parametrize("factory", ALL_SELECTORS)
    def test_deterministic_for_seed(self, factory, evaluated_population) -> None:
        """The same seed selects the same individuals."""
        first = factory()(evaluated_population, 10, FitnessMaximizer(), np.random.default_rng(5))
        second = factory()(evaluated_population, 10, FitnessMaximizer(), np.random.default_rng(5))

        np.testing.assert_array_equal(first.fitness, second.fitness)


# =============================================================================
# TestTournamentSelector
# =============================================================================


class TestTournamentSelector:
    """Tests for tournament_selector."""

    def test_full_pressure_maximize(self, evaluated_population, rng) -> None:
        """Huge tournaments almost surely pick the best individual."""
        selected = tournament_selector(tournament_size=200)(evaluated_population, 10, FitnessMaximizer(), rng)

        assert np.all(selected.fitness == 4.0)

    def test_full_pressure_minimize(self, evaluated_population, rng) -> None:
        """With a minimizer the lowest fitness wins."""
        selected = tournament_selector(tournament_size=200)(evaluated_population, 10, FitnessMinimizer(), rng)

        assert np.all(selected.fitness == 0.0)

    def test_selection_pressure(self, evaluated_population, rng) -> None:
        """Larger tournaments raise the mean selected fitness."""
        optimizer = FitnessMaximizer()
        weak = tournament_selector(1)(evaluated_population, 500, optimizer, rng)
        strong = tournament_selector(4)(evaluated_population, 500, optimizer, rng)

        assert strong.fitness.mean() > weak.fitness.mean()

    def test_unevaluated_lose(self, rng) -> None:
        """Individuals with NaN fitness lose every tournament against evaluated ones."""
        pop = population_of([permutation_genotype([i]) for i in range(2)], [math.nan, -100.0])
        selected = tournament_selector(tournament_size=50)(pop, 10, FitnessMaximizer(), rng)

        assert np.all(selected.fitness == -100.0)

    @pytest.mark.parametrize("size", [0, -2, 1.5])
    def test_rejects_invalid_tournament_size(self, size) -> None:
        """Tournament size must be a positive integer."""
        with pytest.raises(ConfigurationError, match="tournament_size must be a positive integer"):
            tournament_selector(tournament_size=size)


# =============================================================================
# TestRouletteWheel
# =============================================================================


class TestRouletteWheel:
    """Tests for roulette_wheel."""

    def test_favors_better_when_maximizing(self, evaluated_population, rng) -> None:
        """Higher fitness is picked more often when maximizing."""
        selected = roulette_wheel()(evaluated_population, 1000, FitnessMaximizer(), rng)

        counts = np.bincount(selected.fitness.astype(int), minlength=5)
        assert counts[4] > counts[1]

    def test_favors_better_when_minimizing(self, evaluated_population, rng) -> None:
        """Lower fitness is picked more often when minimizing."""
        selected = roulette_wheel()(evaluated_population, 1000, FitnessMinimizer(), rng)

        counts = np.bincount(selected.fitness.astype(int), minlength=5)
        assert counts[0] > counts[3]

    def test_never_picks_unevaluated(self, rng) -> None:
        """Individuals with NaN fitness have zero weight."""
        pop = population_of([permutation_genotype([i]) for i in range(3)], [1.0, math.nan, 2.0])
        selected = roulette_wheel()(pop, 200, FitnessMaximizer(), rng)

        assert not np.isnan(selected.fitness).any()

    def test_uniform_when_nothing_evaluated(self, rng) -> None:
        """Without any fitness, selection falls back to uniform."""
        pop = population_of([permutation_genotype([i]) for i in range(4)])
        selected = roulette_wheel()(pop, 400, FitnessMaximizer(), rng)

        picked = {tuple(g.flatten()) for g in selected.genotypes}
        assert picked == {(0,), (1,), (2,), (3,)}

    def test_equal_fitness(self, rng) -> None:
        """Equal fitness values still give every individual a chance."""
        pop = population_of([permutation_genotype([i]) for i in range(3)], [5.0, 5.0, 5.0])
        selected = roulette_wheel()(pop, 300, FitnessMaximizer(), rng)

        assert {tuple(g.flatten()) for g in selected.genotypes} == {(0,), (1,), (2,)}


# =============================================================================
# TestRandomSelector
# =============================================================================


class TestRandomSelector:
    """Tests for random_selector."""

    def test_ignores_fitness(self, evaluated_population, rng) -> None:
        """Every individual can be picked regardless of fitness."""
        selected = random_selector()(evaluated_population, 500, FitnessMaximizer(), rng)

        assert set(selected.fitness.tolist()) == {0.0, 1.0, 2.0, 3.0, 4.0}
