"""Stopping conditions for the generational engine.

Each factory returns a ``limit(state) -> bool`` callable. The engine evaluates
all of its limits after every generation and stops as soon as one of them
returns True.

Example:
    >>> limits = [max_generations(500), target_fitness(100.0), steady_generations(20)]
"""

from collections.abc import Callable

from geneforge.errors import ConfigurationError, check_positive
from geneforge.optimizers import FitnessOptimizer
from geneforge.registry import OptimizerRegistry
from geneforge.results import EvolutionState


def max_generations(n: int):
    """Stop once ``n`` generations have been completed.

    Raises:
        ConfigurationError: If n is not a positive integer.
    """
    check_positive("n", n)

    def limit(state: EvolutionState) -> bool:
        return state.generation >= n

    return limit


def target_fitness(target: float | Callable[[float], bool], optimizer: str | FitnessOptimizer = "max"):
    """Stop once the best fitness found reaches a target.

    Args:
        target: Either a fitness value, reached when the best fitness is at
            least as good as it according to the optimizer, or a predicate on
            the best fitness.
        optimizer: Optimization direction used to compare against a value
            target. Ignored for predicates.

    Raises:
        ConfigurationError: If the target is neither callable nor a number.
    """
    if callable(target):
        predicate = target
    else:
        if isinstance(target, bool) or not isinstance(target, (int, float)):
            raise ConfigurationError(f"target must be a number or a predicate, got {target!r}")
        direction = OptimizerRegistry.get(optimizer) if isinstance(optimizer, str) else optimizer

        def predicate(fitness: float) -> bool:
            return direction.compare(fitness, target) >= 0

    def limit(state: EvolutionState) -> bool:
        if state.best is None:
            return False
        return bool(predicate(state.best_fitness))

    return limit


def steady_generations(n: int):
    """Stop once the best fitness has not improved for ``n`` consecutive generations.

    Raises:
        ConfigurationError: If n is not a positive integer.
    """
    check_positive("n", n)

    def limit(state: EvolutionState) -> bool:
        return state.steady >= n

    return limit
