"""Shared test fixtures for geneforge tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- Population builders for boolean, permutation, numeric and program genotypes
- Small program primitives and trees
"""

import numpy as np
import pytest

from geneforge import BooleanGene, Chromosome, DoubleGene, Gene, Genotype, Individual, Population
from geneforge.programs import Constant, Function, Variable, program


def boolean_genotype(*chromosomes: list[bool]) -> Genotype:
    """Build a genotype of boolean chromosomes from plain lists."""
    return Genotype(tuple(Chromosome(tuple(BooleanGene(v) for v in values)) for values in chromosomes))


def permutation_genotype(*chromosomes: list[int]) -> Genotype:
    """Build a genotype of permutation chromosomes from plain lists."""
    return Genotype(tuple(Chromosome(tuple(Gene(v) for v in values)) for values in chromosomes))


def population_of(genotypes: list[Genotype], fitness: list[float] | None = None) -> Population:
    """Build a population, optionally with fitness values."""
    if fitness is None:
        return Population.from_genotypes(genotypes)
    return Population(tuple(Individual(g, f) for g, f in zip(genotypes, fitness)))


def values_of(individual: Individual) -> list[list]:
    """Return the gene values of every chromosome of an individual."""
    return [chromosome.values for chromosome in individual.genotype]


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def boolean_population() -> Population:
    """Ten all-False individuals with two chromosomes of 8 genes each."""
    return population_of([boolean_genotype([False] * 8, [False] * 8) for _ in range(10)])


@pytest.fixture
def permutation_population(rng: np.random.Generator) -> Population:
    """Twelve random permutations of 0..9, one chromosome each."""
    return population_of([permutation_genotype([int(v) for v in rng.permutation(10)]) for _ in range(12)])


@pytest.fixture
def evaluated_population() -> Population:
    """Five individuals with fitness 0..4 (individual i has fitness i)."""
    genotypes = [permutation_genotype([i]) for i in range(5)]
    return population_of(genotypes, [0.0, 1.0, 2.0, 3.0, 4.0])


@pytest.fixture
def double_population() -> Population:
    """Six individuals with one chromosome of three DoubleGene values in [0, 10]."""
    genotypes = [
        Genotype((Chromosome(tuple(DoubleGene(float(i + j), (0.0, 10.0)) for j in range(3))),)) for i in range(6)
    ]
    return population_of(genotypes)


@pytest.fixture
def primitives() -> dict:
    """Arithmetic functions and terminals for program trees."""
    return {
        "add": Function("+", 2, lambda a, b: a + b),
        "mul": Function("*", 2, lambda a, b: a * b),
        "neg": Function("neg", 1, lambda a: -a),
        "x": Variable("x"),
        "one": Constant(1.0),
        "two": Constant(2.0),
    }


@pytest.fixture
def sample_program(primitives: dict):
    """The program ``x * (x + 1)``, of height 2 and size 5."""
    p = primitives
    return program(p["mul"], program(p["x"]), program(p["add"], program(p["x"]), program(p["one"])))
