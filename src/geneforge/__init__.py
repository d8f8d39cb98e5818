"""geneforge: Genetic Algorithm and Genetic Programming Toolkit.

A numpy based library of evolutionary operators (crossover, mutation,
selection) and a generational engine that sequences them.

Example (engine):
    >>> from geneforge import EngineConfig, build, max_generations
    >>> from geneforge.crossover import SinglePointCrossover
    >>> from geneforge.factories import boolean_chromosome, genotype_factory
    >>> from geneforge.mutation import BitFlipMutator
    >>> config = EngineConfig(
    ...     init=genotype_factory(boolean_chromosome(size=20)),
    ...     fitness=lambda genotype: float(sum(genotype.flatten())),
    ...     population_size=30,
    ...     alterers=(SinglePointCrossover(), BitFlipMutator(gene_rate=0.05)),
    ...     limits=(max_generations(20),),
    ...     seed=42,
    ... )
    >>> result = build(config).evolve()
    >>> len(result.population)
    30

Example (functional):
    >>> from geneforge import evolve
    >>> from geneforge.factories import genotype_factory, permutation_chromosome
    >>> result = evolve(
    ...     init=genotype_factory(permutation_chromosome(range(8))),
    ...     fitness=lambda genotype: -float(sum(abs(a - b) for a, b in enumerate(genotype.flatten()))),
    ...     population_size=20,
    ...     n_generations=10,
    ...     alterers=("pmx", "swap"),
    ...     seed=42,
    ... )
    >>> result.generations
    10
"""

from geneforge.algorithms import evolve
from geneforge.crossover import (
    AverageCrossover,
    CombineCrossover,
    Crossover,
    MultiPointCrossover,
    OrderedCrossover,
    PartiallyMappedCrossover,
    PositionBasedCrossover,
    SinglePointCrossover,
    SubtreeCrossover,
)
from geneforge.engine import Engine, EngineConfig, EngineStatus, build
from geneforge.errors import ConfigurationError, GeneforgeError, PreconditionError
from geneforge.evaluation import lift, lift_parallel
from geneforge.genetic import (
    BooleanGene,
    CharGene,
    Chromosome,
    DoubleGene,
    Gene,
    Genotype,
    IntGene,
    ProgramGene,
)
from geneforge.interceptors import EvolutionInterceptor
from geneforge.limits import max_generations, steady_generations, target_fitness
from geneforge.listeners import EvolutionListener, EvolutionRecorder, GenerationRecord, LoggingListener
from geneforge.mutation import (
    BitFlipMutator,
    InversionMutator,
    Mutator,
    PartialShuffleMutator,
    PointMutator,
    RandomMutator,
    SwapMutator,
)
from geneforge.optimizers import FitnessMaximizer, FitnessMinimizer, FitnessOptimizer
from geneforge.population import Individual, Population
from geneforge.registry import (
    AltererRegistry,
    OptimizerRegistry,
    SelectionRegistry,
    list_alterers,
    list_optimizers,
    list_selections,
)
from geneforge.results import EvolutionResult, EvolutionState
from geneforge.sampling import random_indices, select_indices, subsets
from geneforge.selection import random_selector, roulette_wheel, tournament_selector
from geneforge.trees import Tree

__all__ = [
    # Engine
    "build",
    "Engine",
    "EngineConfig",
    "EngineStatus",
    "evolve",
    # Limits
    "max_generations",
    "target_fitness",
    "steady_generations",
    # Listeners
    "EvolutionListener",
    "EvolutionRecorder",
    "LoggingListener",
    "GenerationRecord",
    # Interceptors
    "EvolutionInterceptor",
    # Selection strategies
    "tournament_selector",
    "roulette_wheel",
    "random_selector",
    # Optimizers
    "FitnessOptimizer",
    "FitnessMaximizer",
    "FitnessMinimizer",
    # Crossover operators
    "Crossover",
    "SinglePointCrossover",
    "MultiPointCrossover",
    "CombineCrossover",
    "AverageCrossover",
    "PartiallyMappedCrossover",
    "OrderedCrossover",
    "PositionBasedCrossover",
    "SubtreeCrossover",
    # Mutation operators
    "Mutator",
    "BitFlipMutator",
    "SwapMutator",
    "InversionMutator",
    "RandomMutator",
    "PartialShuffleMutator",
    "PointMutator",
    # Evaluation
    "lift",
    "lift_parallel",
    # Sampling
    "select_indices",
    "random_indices",
    "subsets",
    # Registry system
    "SelectionRegistry",
    "OptimizerRegistry",
    "AltererRegistry",
    "list_selections",
    "list_optimizers",
    "list_alterers",
    # Data structures
    "Gene",
    "BooleanGene",
    "IntGene",
    "DoubleGene",
    "CharGene",
    "ProgramGene",
    "Chromosome",
    "Genotype",
    "Individual",
    "Population",
    "Tree",
    # Result types
    "EvolutionResult",
    "EvolutionState",
    # Errors
    "GeneforgeError",
    "ConfigurationError",
    "PreconditionError",
]
