"""Evolution listeners and generation records.

Listeners observe the engine at generation boundaries. They receive a
``GenerationRecord`` after every generation and cannot influence the
evolution.

- EvolutionListener: Base class with no-op hooks, for subclassing
- EvolutionRecorder: Keeps every record in memory
- LoggingListener: Writes a summary line to the ``geneforge.listeners`` logger
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from geneforge.errors import check_positive
from geneforge.results import EvolutionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRecord:
    """Statistics of one completed generation.

    Attributes:
        generation: Generation number, starting at 1.
        best_fitness: Best fitness found so far.
        generation_best: Best fitness in this generation's population.
        worst_fitness: Worst fitness in this generation's population.
        mean_fitness: Mean of the evaluated fitness values of the population.
        steady: Consecutive generations without improvement of the best fitness.
        evaluations: Total number of fitness evaluations so far.
        duration: Wall clock duration of the generation, in seconds.
        timings: Duration of each phase of the generation, in seconds.
    """

    generation: int
    best_fitness: float
    generation_best: float
    worst_fitness: float
    mean_fitness: float
    steady: int
    evaluations: int
    duration: float
    timings: Mapping[str, float] = field(default_factory=dict)


class EvolutionListener:
    """Listener with empty hooks. Subclasses override the ones they need."""

    def on_evolution_started(self) -> None:
        pass

    def on_generation_started(self, generation: int) -> None:
        pass

    def on_generation_ended(self, record: GenerationRecord) -> None:
        pass

    def on_evolution_ended(self, state: EvolutionState) -> None:
        pass


class EvolutionRecorder(EvolutionListener):
    """Keep the record of every generation.

    Example:
        >>> recorder = EvolutionRecorder()
        >>> engine = build(EngineConfig(..., listeners=(recorder,)))
        >>> result = engine.evolve()
        >>> [record.best_fitness for record in recorder.records]
    """

    def __init__(self) -> None:
        self.records: list[GenerationRecord] = []
        self.started = False
        self.final_state: EvolutionState | None = None

    def on_evolution_started(self) -> None:
        self.started = True

    def on_generation_ended(self, record: GenerationRecord) -> None:
        self.records.append(record)

    def on_evolution_ended(self, state: EvolutionState) -> None:
        self.final_state = state

    @property
    def best_fitness_history(self) -> list[float]:
        return [record.best_fitness for record in self.records]


class LoggingListener(EvolutionListener):
    """Log a summary of every ``every``-th generation.

    Args:
        every: Log one generation out of ``every``.
        level: Logging level of the generation summaries.

    Raises:
        ConfigurationError: If every is not a positive integer.
    """

    def __init__(self, every: int = 1, level: int = logging.INFO) -> None:
        self.every = check_positive("every", every)
        self.level = level

    def on_evolution_started(self) -> None:
        logger.log(self.level, "Evolution started")

    def on_generation_ended(self, record: GenerationRecord) -> None:
        if record.generation % self.every != 0:
            return
        logger.log(
            self.level,
            "Generation %d: best=%.6g mean=%.6g worst=%.6g steady=%d evaluations=%d (%.3fs)",
            record.generation,
            record.best_fitness,
            record.mean_fitness,
            record.worst_fitness,
            record.steady,
            record.evaluations,
            record.duration,
        )

    def on_evolution_ended(self, state: EvolutionState) -> None:
        logger.log(
            self.level,
            "Evolution ended after %d generations: best fitness %.6g",
            state.generation,
            state.best_fitness,
        )
