"""Input checks shared by the selection strategies."""

from geneforge.errors import PreconditionError
from geneforge.population import Population


def check_selection(population: Population, count: int) -> None:
    """Validate a selection request.

    Raises:
        PreconditionError: If count is negative, or positive while the
            population is empty.
    """
    if count < 0:
        raise PreconditionError(f"count must be non-negative, got {count}")
    if count > 0 and len(population) == 0:
        raise PreconditionError(f"cannot select {count} individuals from an empty population")
