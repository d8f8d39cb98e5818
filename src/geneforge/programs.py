"""Genetic programming primitives, evaluation and random tree generation.

Programs are ``Tree`` instances whose node values are primitives:

- Function: an operation of fixed arity applied to the values of its children
- Variable: a leaf read from the evaluation environment by name
- Constant: a leaf holding a fixed value

Random programs are built with the classic Koza initialisers. ``generate_full``
places leaves only at the target height, ``generate_grow`` may stop early, and
``generate_ramped`` picks one of the two with equal probability.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from geneforge.errors import ConfigurationError, PreconditionError
from geneforge.trees import Tree


@dataclass(frozen=True)
class Function:
    """Program operation of fixed arity.

    Example:
        >>> add = Function("+", 2, lambda a, b: a + b)
        >>> evaluate(program(add, program(Constant(1.0)), program(Constant(2.0))), {})
        3.0
    """

    name: str
    arity: int
    fn: Callable[..., Any] = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.arity < 1:
            raise ConfigurationError(f"Function arity must be at least 1, got {self.arity}")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Variable:
    """Leaf primitive reading ``environment[name]``."""

    name: str
    arity: int = field(default=0, init=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Constant:
    """Leaf primitive holding a fixed value."""

    value: Any
    arity: int = field(default=0, init=False)

    def __str__(self) -> str:
        return str(self.value)


Terminal = Variable | Constant
Primitive = Function | Variable | Constant


def program(primitive: Primitive, *children: Tree) -> Tree:
    """Build a program node whose declared arity is the primitive's arity."""
    return Tree(primitive, tuple(children), primitive.arity)


def evaluate(tree: Tree, environment: Mapping[str, Any]) -> Any:
    """Evaluate a program tree bottom-up.

    Args:
        tree: Program whose node values are primitives.
        environment: Values of the variables, by name.

    Returns:
        The value computed by the root.

    Raises:
        PreconditionError: If a variable is unbound or a node holds something
            other than a primitive.
    """
    node = tree.value
    if isinstance(node, Constant):
        return node.value
    if isinstance(node, Variable):
        if node.name not in environment:
            raise PreconditionError(f"variable '{node.name}' is not bound in the environment")
        return environment[node.name]
    if isinstance(node, Function):
        return node.fn(*(evaluate(child, environment) for child in tree.children))
    raise PreconditionError(f"cannot evaluate node of type {type(node).__name__}")


def _check_generator_args(terminals: Sequence[Terminal], min_height: int, max_height: int) -> None:
    if not terminals:
        raise ConfigurationError("at least one terminal is required to generate programs")
    if min_height < 0:
        raise ConfigurationError(f"min_height must be non-negative, got {min_height}")
    if max_height <= min_height:
        raise ConfigurationError(f"max_height ({max_height}) must be greater than min_height ({min_height})")


def _generate(
    terminals: Sequence[Terminal],
    functions: Sequence[Function],
    height: int,
    depth: int,
    is_leaf: Callable[[int, int], bool],
    rng: np.random.Generator,
) -> Tree:
    if not functions or is_leaf(height, depth):
        return program(terminals[int(rng.integers(len(terminals)))])
    function = functions[int(rng.integers(len(functions)))]
    children = [_generate(terminals, functions, height, depth + 1, is_leaf, rng) for _ in range(function.arity)]
    return program(function, *children)


def generate_full(
    terminals: Sequence[Terminal],
    functions: Sequence[Function],
    min_height: int,
    max_height: int,
    rng: np.random.Generator,
) -> Tree:
    """Generate a tree whose leaves all sit at a height drawn from [min_height, max_height).

    Raises:
        ConfigurationError: If there are no terminals or the height range is empty.
    """
    _check_generator_args(terminals, min_height, max_height)
    height = int(rng.integers(min_height, max_height))
    return _generate(terminals, functions, height, 0, lambda h, d: d >= h, rng)


def generate_grow(
    terminals: Sequence[Terminal],
    functions: Sequence[Function],
    min_height: int,
    max_height: int,
    rng: np.random.Generator,
) -> Tree:
    """Generate a tree that may place a leaf at any depth up to a drawn height.

    Below the drawn height, a leaf is chosen with probability proportional to
    the number of terminals among all primitives.
    """
    _check_generator_args(terminals, min_height, max_height)
    height = int(rng.integers(min_height, max_height))
    leaf_ratio = len(terminals) / (len(terminals) + len(functions))
    return _generate(terminals, functions, height, 0, lambda h, d: d >= h or rng.random() < leaf_ratio, rng)


def generate_ramped(
    terminals: Sequence[Terminal],
    functions: Sequence[Function],
    min_height: int,
    max_height: int,
    rng: np.random.Generator,
) -> Tree:
    """Ramped half-and-half: ``generate_full`` or ``generate_grow`` with equal odds."""
    if rng.random() < 0.5:
        return generate_full(terminals, functions, min_height, max_height, rng)
    return generate_grow(terminals, functions, min_height, max_height, rng)
