"""Generational engine.

The engine evolves a population of fixed size, one generation per ``step()``:

1. Intercept and evaluate: apply the interceptor's ``before`` hook, then
   attach fitness to every unevaluated individual.
2. Select survivors: ``survivor_count`` individuals kept as they are.
3. Select parents: ``offspring_count`` individuals handed to the alterers.
4. Alter: run the alterers in order (typically crossovers, then mutators).
5. Merge: survivors followed by offspring form the next population.
6. Evaluate the merged population, apply the interceptor's ``after`` hook
   (evaluating anything it leaves unevaluated) and update the best individual.
7. Notify listeners, then check the limits. Any limit met ends the evolution.

With ``offspring_count = floor((1 - survival_rate) * population_size)`` and
``survivor_count = population_size - offspring_count`` the population size
never changes. Every alterer must return exactly ``offspring_count``
individuals; anything else raises PreconditionError and aborts the evolution.

Example:
    >>> from geneforge import EngineConfig, build, max_generations
    >>> from geneforge.factories import boolean_chromosome, genotype_factory
    >>> from geneforge.mutation import BitFlipMutator
    >>> from geneforge.crossover import SinglePointCrossover
    >>> config = EngineConfig(
    ...     init=genotype_factory(boolean_chromosome(size=20)),
    ...     fitness=lambda genotype: float(sum(genotype.flatten())),
    ...     population_size=50,
    ...     alterers=(SinglePointCrossover(), BitFlipMutator(gene_rate=0.05)),
    ...     limits=(max_generations(100),),
    ...     seed=42,
    ... )
    >>> result = build(config).evolve()
    >>> best, best_fitness = result.best
"""

import logging
import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

# Import operator and selection packages to trigger strategy registration
import geneforge.crossover  # noqa: F401
import geneforge.mutation  # noqa: F401
import geneforge.selection  # noqa: F401
from geneforge.errors import ConfigurationError, PreconditionError, check_positive, check_probability
from geneforge.evaluation import check_n_workers, construct, evaluate_population
from geneforge.genetic import Genotype
from geneforge.interceptors import EvolutionInterceptor
from geneforge.listeners import GenerationRecord
from geneforge.optimizers import FitnessOptimizer
from geneforge.population import Individual, Population
from geneforge.protocols import Alterer, Limit, Listener, Selector
from geneforge.registry import AltererRegistry, OptimizerRegistry, SelectionRegistry
from geneforge.results import EvolutionResult, EvolutionState

logger = logging.getLogger(__name__)


class EngineStatus(Enum):
    """Lifecycle of an engine: CREATED -> EVOLVING -> TERMINATED."""

    CREATED = "created"
    EVOLVING = "evolving"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class EngineConfig:
    """Configuration of a generational engine.

    Strategies may be given as registry names or as callables. Names are
    resolved by ``build()`` with the registered factory's default parameters.

    Attributes:
        init: Genotype factory. Signature: (rng,) -> Genotype
        fitness: Fitness function. Signature: (Genotype,) -> float.
            May return NaN to mark a genotype as invalid.
        population_size: Number of individuals in every generation.
        survival_rate: Fraction of the population kept as survivors.
        parent_selector: Selector choosing the parents of the offspring.
        survivor_selector: Selector choosing the survivors.
        alterers: Operators applied in order to the selected parents.
        limits: Stopping conditions; at least one is required.
        optimizer: Optimization direction ("max", "min" or an optimizer).
        listeners: Observers notified at generation boundaries.
        interceptor: State transforms applied before and after every
            generation. Defaults to the identity.
        seed: Random seed for reproducibility. If None, uses system entropy.
        n_workers: Parallel workers for construction and evaluation. None runs
            sequentially, -1 uses all CPU cores.

    Raises:
        ConfigurationError: If any parameter is invalid.
    """

    init: Callable[[np.random.Generator], Genotype]
    fitness: Callable[[Genotype], float]
    population_size: int = 50
    survival_rate: float = 0.4
    parent_selector: str | Selector = "tournament"
    survivor_selector: str | Selector = "tournament"
    alterers: Sequence[str | Alterer] = ()
    limits: Sequence[Limit] = ()
    optimizer: str | FitnessOptimizer = "max"
    listeners: Sequence[Listener] = ()
    interceptor: EvolutionInterceptor = field(default_factory=EvolutionInterceptor.identity)
    seed: int | None = None
    n_workers: int | None = None

    def __post_init__(self) -> None:
        if not callable(self.init):
            raise ConfigurationError(f"init must be callable, got {type(self.init).__name__}")
        if not callable(self.fitness):
            raise ConfigurationError(f"fitness must be callable, got {type(self.fitness).__name__}")
        check_positive("population_size", self.population_size)
        check_probability("survival_rate", self.survival_rate)
        check_n_workers(self.n_workers)
        if not isinstance(self.interceptor, EvolutionInterceptor):
            raise ConfigurationError(
                f"interceptor must be an EvolutionInterceptor, got {type(self.interceptor).__name__}"
            )

        # Freeze sequences
        object.__setattr__(self, "alterers", tuple(self.alterers))
        object.__setattr__(self, "limits", tuple(self.limits))
        object.__setattr__(self, "listeners", tuple(self.listeners))

        if not self.limits:
            raise ConfigurationError("at least one limit is required, otherwise evolution never terminates")
        for limit in self.limits:
            if not callable(limit):
                raise ConfigurationError(f"limits must be callables, got {type(limit).__name__}")

    @property
    def offspring_count(self) -> int:
        """Number of offspring per generation: floor((1 - survival_rate) * population_size)."""
        # Rounding first keeps 0.6 * 50 at 30 despite floating point error
        return math.floor(round((1.0 - self.survival_rate) * self.population_size, 9))

    @property
    def survivor_count(self) -> int:
        return self.population_size - self.offspring_count


def _resolve(strategy: Any, registry: type) -> Any:
    return registry.get(strategy) if isinstance(strategy, str) else strategy


class Engine:
    """Generational genetic algorithm.

    Build engines with ``build(config)``. ``step()`` advances one generation and
    ``evolve()`` steps until a limit is met.

    Attributes:
        config: The engine configuration.
        status: Current lifecycle state.
        population: Current population (None before the first step).
        generation: Number of completed generations.
        evaluations: Total number of fitness function calls.
        best: Best individual found so far.
        steady: Consecutive generations without improvement of ``best``.
    """

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self.optimizer: FitnessOptimizer = _resolve(config.optimizer, OptimizerRegistry)
        self.parent_selector: Selector = _resolve(config.parent_selector, SelectionRegistry)
        self.survivor_selector: Selector = _resolve(config.survivor_selector, SelectionRegistry)
        self.alterers: tuple[Alterer, ...] = tuple(_resolve(alterer, AltererRegistry) for alterer in config.alterers)
        self.rng = np.random.default_rng(config.seed)

        self.status = EngineStatus.CREATED
        self.population: Population | None = None
        self.generation = 0
        self.evaluations = 0
        self.best: Individual | None = None
        self.steady = 0

    @property
    def state(self) -> EvolutionState:
        if self.population is None:
            raise PreconditionError("the engine has no population before its first step")
        return EvolutionState(
            generation=self.generation,
            population=self.population,
            best=self.best,
            steady=self.steady,
            evaluations=self.evaluations,
        )

    def step(self) -> EvolutionState:
        """Run one generation.

        Returns:
            The state after the generation.

        Raises:
            PreconditionError: If the engine has terminated, or an alterer or
                selector breaks the population size contract.
        """
        if self.status is EngineStatus.TERMINATED:
            raise PreconditionError("cannot step an engine that has terminated")

        config = self.config
        timings: dict[str, float] = {}
        start = time.perf_counter()

        if self.status is EngineStatus.CREATED:
            self.status = EngineStatus.EVOLVING
            logger.info(
                "Starting evolution: population_size=%d, survivors=%d, offspring=%d",
                config.population_size,
                config.survivor_count,
                config.offspring_count,
            )
            for listener in config.listeners:
                listener.on_evolution_started()
            tic = time.perf_counter()
            self.population = construct(config.init, config.population_size, self.rng, config.n_workers)
            timings["initialization"] = time.perf_counter() - tic

        generation = self.generation + 1
        for listener in config.listeners:
            listener.on_generation_started(generation)

        population = self._intercept(config.interceptor.before, "before", self.generation, self.population)

        tic = time.perf_counter()
        population = self._evaluate(population)
        timings["evaluation"] = time.perf_counter() - tic
        if self.best is None:
            self._update_best(population)

        tic = time.perf_counter()
        survivors = self.survivor_selector(population, config.survivor_count, self.optimizer, self.rng)
        self._check_size("survivor selection", survivors, config.survivor_count)
        timings["survivor_selection"] = time.perf_counter() - tic

        tic = time.perf_counter()
        offspring = self.parent_selector(population, config.offspring_count, self.optimizer, self.rng)
        self._check_size("parent selection", offspring, config.offspring_count)
        timings["parent_selection"] = time.perf_counter() - tic

        tic = time.perf_counter()
        for alterer in self.alterers:
            offspring = alterer(offspring, config.offspring_count, self.rng)
            self._check_size(repr(alterer), offspring, config.offspring_count)
        timings["alteration"] = time.perf_counter() - tic

        merged = survivors + offspring
        self._check_size("merge", merged, config.population_size)

        tic = time.perf_counter()
        merged = self._evaluate(merged)
        timings["evaluation"] += time.perf_counter() - tic

        merged = self._intercept(config.interceptor.after, "after", generation, merged)
        tic = time.perf_counter()
        merged = self._evaluate(merged)
        timings["evaluation"] += time.perf_counter() - tic

        improved = self._update_best(merged)
        self.steady = 0 if improved else self.steady + 1
        self.population = merged
        self.generation = generation

        record = self._record(merged, time.perf_counter() - start, timings)
        logger.debug(
            "Generation %d: best=%s steady=%d evaluations=%d",
            generation,
            record.best_fitness,
            self.steady,
            self.evaluations,
        )
        for listener in config.listeners:
            listener.on_generation_ended(record)

        state = self.state
        if any(limit(state) for limit in config.limits):
            self.status = EngineStatus.TERMINATED
            logger.info(
                "Evolution terminated after %d generations (%d evaluations), best fitness %s",
                self.generation,
                self.evaluations,
                state.best_fitness,
            )
            for listener in config.listeners:
                listener.on_evolution_ended(state)
        return state

    def evolve(self) -> EvolutionResult:
        """Step until a limit is met and return the result.

        Calling ``evolve()`` on a terminated engine returns its result again.
        """
        while self.status is not EngineStatus.TERMINATED:
            self.step()
        return self.result()

    def result(self) -> EvolutionResult:
        """Build the result for the current population.

        Raises:
            PreconditionError: If the engine has not stepped yet.
        """
        state = self.state
        fitness = state.population.fitness
        return EvolutionResult(
            population=state.population,
            fitness=fitness,
            best_idx=self.optimizer.best_index(fitness),
            generations=self.generation,
            evaluations=self.evaluations,
        )

    def _evaluate(self, population: Population) -> Population:
        evaluated, calls = evaluate_population(population, self.config.fitness, self.config.n_workers)
        self.evaluations += calls
        return evaluated

    def _intercept(
        self,
        hook: Callable[[EvolutionState], EvolutionState],
        stage: str,
        generation: int,
        population: Population,
    ) -> Population:
        """Run an interceptor hook and return the population of the state it returns."""
        state = EvolutionState(
            generation=generation,
            population=population,
            best=self.best,
            steady=self.steady,
            evaluations=self.evaluations,
        )
        intercepted = hook(state)
        if not isinstance(intercepted, EvolutionState):
            raise PreconditionError(
                f"interceptor {stage} hook must return an EvolutionState, got {type(intercepted).__name__}"
            )
        self._check_size(f"interceptor {stage} hook", intercepted.population, self.config.population_size)
        return intercepted.population

    def _update_best(self, population: Population) -> bool:
        """Track the best individual; return True if it improved."""
        candidate = population[self.optimizer.best_index(population.fitness)]
        if self.best is None or self.optimizer.is_better(candidate.fitness, self.best.fitness):
            self.best = candidate
            return True
        return False

    def _record(self, population: Population, duration: float, timings: dict[str, float]) -> GenerationRecord:
        fitness = population.fitness
        scores = self.optimizer.score(fitness)
        evaluated = fitness[~np.isnan(fitness)]
        return GenerationRecord(
            generation=self.generation,
            best_fitness=self.best.fitness if self.best is not None else math.nan,
            generation_best=float(fitness[int(np.argmax(scores))]),
            worst_fitness=float(fitness[int(np.argmin(scores))]),
            mean_fitness=float(evaluated.mean()) if len(evaluated) else math.nan,
            steady=self.steady,
            evaluations=self.evaluations,
            duration=duration,
            timings=timings,
        )

    @staticmethod
    def _check_size(stage: str, population: Population, expected: int) -> None:
        if len(population) != expected:
            raise PreconditionError(f"{stage} returned {len(population)} individuals, expected {expected}")


def build(config: EngineConfig) -> Engine:
    """Build an engine from a configuration.

    Raises:
        KeyError: If a strategy name is not registered.
    """
    return Engine(config)
