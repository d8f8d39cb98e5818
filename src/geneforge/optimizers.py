"""Optimization direction strategies.

An optimizer defines what "better fitness" means. Selection, sorting and
best-individual tracking all go through it, so the rest of the library never
compares raw fitness values directly.

Every optimizer maps fitness values onto a *score* where higher is better and
NaN (an unevaluated or rejected individual) becomes ``-inf``. Comparison,
sorting and best-index lookup are all derived from that score, which makes
``compare(a, b) == -compare(b, a)`` hold for every pair, NaN included.

Example:
    >>> optimizer = FitnessMinimizer()
    >>> optimizer.compare(1.0, 2.0)
    1
    >>> optimizer.best_index(np.array([3.0, 1.0, np.nan]))
    1
"""

from abc import ABC, abstractmethod

import numpy as np

from geneforge.population import Population
from geneforge.registry import OptimizerRegistry


class FitnessOptimizer(ABC):
    """Base class for optimization directions."""

    name: str = ""

    @abstractmethod
    def _orient(self, fitness: np.ndarray) -> np.ndarray:
        """Return values ordered so that higher is better (NaN preserved)."""

    def score(self, fitness: np.ndarray | float) -> np.ndarray:
        """Map fitness onto scores where higher is better and NaN becomes -inf.

        Args:
            fitness: Scalar or array of fitness values.

        Returns:
            Float64 array of the same shape.
        """
        oriented = self._orient(np.asarray(fitness, dtype=np.float64))
        return np.where(np.isnan(oriented), -np.inf, oriented)

    def compare(self, a: float, b: float) -> int:
        """Return 1 if ``a`` is better than ``b``, -1 if worse and 0 if equivalent."""
        score_a, score_b = self.score(a), self.score(b)
        if score_a > score_b:
            return 1
        if score_a < score_b:
            return -1
        return 0

    def is_better(self, a: float, b: float) -> bool:
        return self.compare(a, b) > 0

    def argsort(self, fitness: np.ndarray) -> np.ndarray:
        """Return indices ordering fitness from best to worst (stable on ties)."""
        return np.argsort(-self.score(fitness), kind="stable")

    def sort(self, population: Population) -> Population:
        """Return the population ordered from best to worst."""
        return population.take(self.argsort(population.fitness))

    def best_index(self, fitness: np.ndarray) -> int:
        """Return the index of the best fitness (the first one on ties).

        Raises:
            ValueError: If fitness is empty.
        """
        if len(fitness) == 0:
            raise ValueError("cannot find the best index of an empty fitness array")
        return int(np.argmax(self.score(fitness)))

    def fitness_transform(self, fitness: np.ndarray) -> np.ndarray:
        """Return non-negative weights where better fitness gets a larger weight.

        The worst evaluated individual gets weight 0 and unevaluated ones get 0.
        Used by fitness-proportionate selection.
        """
        scores = self.score(fitness)
        finite = np.isfinite(scores)
        if not finite.any():
            return np.zeros(len(scores), dtype=np.float64)
        weights = np.zeros(len(scores), dtype=np.float64)
        weights[finite] = scores[finite] - scores[finite].min()
        return weights

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class FitnessMaximizer(FitnessOptimizer):
    """Higher fitness is better."""

    name = "max"

    def _orient(self, fitness: np.ndarray) -> np.ndarray:
        return fitness


class FitnessMinimizer(FitnessOptimizer):
    """Lower fitness is better."""

    name = "min"

    def _orient(self, fitness: np.ndarray) -> np.ndarray:
        return -fitness


OptimizerRegistry.register("max", FitnessMaximizer)
OptimizerRegistry.register("min", FitnessMinimizer)
