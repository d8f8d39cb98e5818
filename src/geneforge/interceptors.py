"""Evolution interceptors.

An interceptor transforms the evolution state around each generation. Its
``before`` hook receives the state at the start of ``Engine.step()``, before
evaluation; its ``after`` hook receives the state once the merged population
has been evaluated, before the best individual is updated and the limits are
checked.

Unlike listeners, interceptors change the evolution: the engine continues with
the population of the state they return. Both hooks must keep the population
size; the engine checks it after each call. Individuals an interceptor adds or
replaces without a fitness are evaluated by the engine.

Example:
    >>> from dataclasses import replace
    >>> def drop_fitness(state):
    ...     population = Population(tuple(Individual(ind.genotype) for ind in state.population))
    ...     return replace(state, population=population)
    >>> interceptor = EvolutionInterceptor.intercept_before(drop_fitness)
"""

from collections.abc import Callable
from dataclasses import dataclass

from geneforge.errors import ConfigurationError
from geneforge.results import EvolutionState

StateTransform = Callable[[EvolutionState], EvolutionState]


def _unchanged(state: EvolutionState) -> EvolutionState:
    return state


@dataclass(frozen=True)
class EvolutionInterceptor:
    """Pair of state transforms applied around every generation.

    Attributes:
        before: Applied at the start of a generation.
        after: Applied once the generation's population is evaluated.
    """

    before: StateTransform = _unchanged
    after: StateTransform = _unchanged

    def __post_init__(self) -> None:
        for name in ("before", "after"):
            if not callable(getattr(self, name)):
                raise ConfigurationError(f"{name} must be callable, got {type(getattr(self, name)).__name__}")

    @classmethod
    def identity(cls) -> "EvolutionInterceptor":
        """Interceptor that leaves every state unchanged."""
        return cls()

    @classmethod
    def intercept_before(cls, fn: StateTransform) -> "EvolutionInterceptor":
        """Interceptor applying ``fn`` at the start of every generation."""
        return cls(before=fn)

    @classmethod
    def intercept_after(cls, fn: StateTransform) -> "EvolutionInterceptor":
        """Interceptor applying ``fn`` at the end of every generation."""
        return cls(after=fn)
