"""Classic test problems for benchmarking the geneforge operators.

Every problem provides a genotype factory and a fitness function, and knows
its optimization direction and (where one exists) its optimal fitness:

- OneMax: maximize the number of ones in a bit string
- TSP: minimize the length of a closed tour through random cities
- Symbolic regression: minimize the error of a program fitting a polynomial

References:
    Goldberg, D. E. (1989). Genetic Algorithms in Search, Optimization and
    Machine Learning. Addison-Wesley.
    Koza, J. R. (1992). Genetic Programming. MIT Press.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from geneforge.factories import boolean_chromosome, genotype_factory, permutation_chromosome, program_chromosome
from geneforge.genetic import Genotype
from geneforge.programs import Constant, Function, Variable, evaluate

# Problem configuration
ONEMAX_BITS: int = 64
N_CITIES: int = 20
CITY_SEED: int = 1234
SAMPLE_POINTS: np.ndarray = np.linspace(-1.0, 1.0, 21)


@dataclass(frozen=True)
class Problem:
    """A benchmark problem.

    Attributes:
        init: Genotype factory.
        fitness: Fitness function.
        optimizer: "max" or "min".
        optimum: Best achievable fitness, or None if unknown.
    """

    init: Callable[[np.random.Generator], Genotype]
    fitness: Callable[[Genotype], float]
    optimizer: str
    optimum: float | None = None


def onemax(genotype: Genotype) -> float:
    """OneMax: the number of True genes."""
    return float(sum(genotype.flatten()))


def _cities() -> np.ndarray:
    return np.random.default_rng(CITY_SEED).uniform(0.0, 100.0, size=(N_CITIES, 2))


CITIES: np.ndarray = _cities()


def tour_length(genotype: Genotype) -> float:
    """TSP: length of the closed tour visiting the cities in genotype order."""
    order = np.asarray(genotype.flatten())
    points = CITIES[order]
    return float(np.linalg.norm(points - np.roll(points, -1, axis=0), axis=1).sum())


FUNCTIONS = (
    Function("+", 2, lambda a, b: a + b),
    Function("-", 2, lambda a, b: a - b),
    Function("*", 2, lambda a, b: a * b),
)
TERMINALS = (Variable("x"), Constant(1.0))


def regression_error(genotype: Genotype) -> float:
    """Symbolic regression: mean absolute error against x**2 + x + 1."""
    program = genotype[0][0].value
    target = SAMPLE_POINTS**2 + SAMPLE_POINTS + 1.0
    predicted = np.array([evaluate(program, {"x": x}) for x in SAMPLE_POINTS], dtype=np.float64)
    return float(np.mean(np.abs(predicted - target)))


PROBLEMS: dict[str, Problem] = {
    "onemax": Problem(
        init=genotype_factory(boolean_chromosome(ONEMAX_BITS)),
        fitness=onemax,
        optimizer="max",
        optimum=float(ONEMAX_BITS),
    ),
    "tsp": Problem(
        init=genotype_factory(permutation_chromosome(range(N_CITIES))),
        fitness=tour_length,
        optimizer="min",
    ),
    "regression": Problem(
        init=genotype_factory(program_chromosome(1, TERMINALS, FUNCTIONS, min_height=1, max_height=5)),
        fitness=regression_error,
        optimizer="min",
        optimum=0.0,
    ),
}
