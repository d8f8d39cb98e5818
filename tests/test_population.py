"""Tests for Individual and Population data structures.

- Test behavior, not implementation
- Each test should fail for one reason
- Assert both exception type and message fragment for error tests
"""

import math

import numpy as np
import pytest
from conftest import permutation_genotype, population_of

from geneforge import Individual, Population


class TestIndividual:
    """Tests for Individual."""

    def test_unevaluated_by_default(self) -> None:
        """A new individual has NaN fitness."""
        individual = Individual(permutation_genotype([1, 2]))

        assert math.isnan(individual.fitness)
        assert not individual.is_evaluated

    def test_with_fitness(self) -> None:
        """with_fitness attaches a fitness and keeps the genotype."""
        genotype = permutation_genotype([1, 2])
        individual = Individual(genotype).with_fitness(3)

        assert individual.fitness == 3.0
        assert isinstance(individual.fitness, float)
        assert individual.genotype is genotype

    def test_with_genotype_drops_fitness(self) -> None:
        """A changed genotype yields an unevaluated individual."""
        individual = Individual(permutation_genotype([1]), 5.0)
        changed = individual.with_genotype(permutation_genotype([2]))

        assert not changed.is_evaluated
        assert individual.fitness == 5.0

    def test_rejects_non_genotype(self) -> None:
        """Individual rejects anything but a Genotype."""
        with pytest.raises(TypeError, match="genotype must be a Genotype"):
            Individual([1, 2])  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        """Individual is frozen and rejects attribute assignment."""
        individual = Individual(permutation_genotype([1]))
        with pytest.raises(AttributeError):
            individual.fitness = 1.0  # type: ignore[misc]


class TestPopulationConstruction:
    """Tests for Population construction and validation."""

    def test_from_genotypes(self) -> None:
        """from_genotypes builds an unevaluated population."""
        pop = Population.from_genotypes([permutation_genotype([1]), permutation_genotype([2])])

        assert len(pop) == 2
        assert pop.n_evaluated == 0

    def test_empty_population(self) -> None:
        """An empty population is valid."""
        pop = Population()

        assert len(pop) == 0
        assert pop.fitness.shape == (0,)

    def test_rejects_non_individual_elements(self) -> None:
        """Population rejects elements that are not individuals."""
        with pytest.raises(TypeError, match="element 1 must be an Individual"):
            Population((Individual(permutation_genotype([1])), "nope"))  # type: ignore[arg-type]

    def test_individuals_are_a_tuple(self) -> None:
        """Individuals passed as a list are frozen into a tuple."""
        pop = Population([Individual(permutation_genotype([1]))])  # type: ignore[arg-type]

        assert isinstance(pop.individuals, tuple)


class TestPopulationIndexing:
    """Tests for Population indexing."""

    def test_positive_and_negative_index(self, evaluated_population) -> None:
        """Indexing supports negative indices."""
        assert evaluated_population[0].fitness == 0.0
        assert evaluated_population[-1].fitness == 4.0

    def test_numpy_integer_index(self, evaluated_population) -> None:
        """numpy integers are accepted as indices."""
        assert evaluated_population[np.int64(2)].fitness == 2.0

    def test_out_of_bounds(self, evaluated_population) -> None:
        """Out of bounds indices raise IndexError."""
        with pytest.raises(IndexError, match="index 5 is out of bounds for population with 5 individuals"):
            evaluated_population[5]

    def test_negative_out_of_bounds(self, evaluated_population) -> None:
        """Negative out of bounds indices report the original index."""
        with pytest.raises(IndexError, match="index -6 is out of bounds"):
            evaluated_population[-6]

    def test_rejects_non_integer(self, evaluated_population) -> None:
        """Non-integer indices raise TypeError."""
        with pytest.raises(TypeError, match="indices must be integers, got str"):
            evaluated_population["0"]  # type: ignore[index]


class TestPopulationOperations:
    """Tests for fitness access and combination."""

    def test_fitness_array(self) -> None:
        """fitness returns a float64 array with NaN for unevaluated individuals."""
        pop = population_of([permutation_genotype([1]), permutation_genotype([2])], [1.5, math.nan])

        fitness = pop.fitness
        assert fitness.dtype == np.float64
        assert fitness[0] == 1.5
        assert np.isnan(fitness[1])
        assert pop.n_evaluated == 1

    def test_add_concatenates(self, evaluated_population) -> None:
        """Adding populations keeps order."""
        merged = evaluated_population + evaluated_population.take([0])

        assert len(merged) == 6
        np.testing.assert_array_equal(merged.fitness, [0.0, 1.0, 2.0, 3.0, 4.0, 0.0])

    def test_take_allows_repeats(self, evaluated_population) -> None:
        """take returns individuals at the given indices, repeats allowed."""
        taken = evaluated_population.take([4, 4, 1])

        np.testing.assert_array_equal(taken.fitness, [4.0, 4.0, 1.0])

    def test_genotypes(self, evaluated_population) -> None:
        """genotypes lists the genotypes in order."""
        assert [g.flatten() for g in evaluated_population.genotypes] == [[0], [1], [2], [3], [4]]
