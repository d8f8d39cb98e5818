"""Exception hierarchy for geneforge.

Two families of failures are distinguished:

- ConfigurationError: raised while building an operator or engine with invalid
  parameters (a rate outside [0, 1], fewer than two parents, a non-positive
  population size). These are fatal to construction and never clamped.
- PreconditionError: raised at call time when an operator receives input it
  cannot handle (wrong number of parents, chromosome length mismatch, a
  population whose size differs from the requested one). They abort the current
  alteration step and propagate out of ``Engine.evolve()``.

Both derive from ``ValueError`` so callers may catch them as plain value errors.
"""

import math


class GeneforgeError(Exception):
    """Base class for all errors raised by geneforge."""


class ConfigurationError(GeneforgeError, ValueError):
    """Invalid construction-time parameter."""


class PreconditionError(GeneforgeError, ValueError):
    """Invalid input passed to an operation at call time."""


def check_probability(name: str, value: float) -> float:
    """Validate that a rate lies in [0, 1].

    Args:
        name: Parameter name used in the error message.
        value: The rate to validate.

    Returns:
        The rate as a float.

    Raises:
        ConfigurationError: If the value is NaN or outside [0, 1].
    """
    value = float(value)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be in [0, 1], got {value}")
    return value


def check_positive(name: str, value: int) -> int:
    """Validate that an integer parameter is strictly positive.

    Raises:
        ConfigurationError: If the value is not a positive integer.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return value
