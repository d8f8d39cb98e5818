"""Immutable n-ary trees for program genes.

A Tree node holds a value, a declared arity and a tuple of children. Nodes are
addressed by *paths*: tuples of child indices leading from the root to the node
(``()`` is the root itself). Structural edits never modify a tree; ``replace``
rebuilds the spine along a path and shares every untouched subtree.

The declared arity is not enforced at construction so that malformed trees can
be detected where it matters (``check_arity``) with a descriptive error.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from geneforge.errors import PreconditionError

Path = tuple[int, ...]
"""Child-index path from a root to one of its nodes."""


@dataclass(frozen=True)
class Tree:
    """Immutable tree node.

    Attributes:
        value: The node's payload (for programs, a primitive).
        children: The node's subtrees, in order.
        arity: Declared number of children. Defaults to ``len(children)``.

    Example:
        >>> leaf = Tree("x")
        >>> tree = Tree("+", (leaf, Tree("1")))
        >>> tree.height, tree.size
        (1, 3)
        >>> tree.to_simple_string()
        '+(x, 1)'
    """

    value: Any
    children: tuple["Tree", ...] = ()
    arity: int | None = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))
        if self.arity is None:
            object.__setattr__(self, "arity", len(self.children))
        elif self.arity < 0:
            raise PreconditionError(f"arity must be non-negative, got {self.arity}")

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @cached_property
    def height(self) -> int:
        """Edges on the longest path to a leaf (0 for a leaf)."""
        if not self.children:
            return 0
        return 1 + max(child.height for child in self.children)

    @cached_property
    def size(self) -> int:
        """Number of nodes in the tree, this one included."""
        return 1 + sum(child.size for child in self.children)

    @property
    def nodes(self) -> list["Tree"]:
        """All subtrees in pre-order, starting with this node."""
        return [node for _, node in self.walk()]

    def paths(self) -> list[Path]:
        """Paths to every node in pre-order, aligned with ``nodes``."""
        return [path for path, _ in self.walk()]

    def walk(self, prefix: Path = ()) -> Iterator[tuple[Path, "Tree"]]:
        """Yield ``(path, subtree)`` pairs in pre-order."""
        yield prefix, self
        for i, child in enumerate(self.children):
            yield from child.walk(prefix + (i,))

    def subtree(self, path: Path) -> "Tree":
        """Return the node at ``path``.

        Raises:
            PreconditionError: If the path does not lead to a node.
        """
        node = self
        for depth, index in enumerate(path):
            if not 0 <= index < len(node.children):
                raise PreconditionError(
                    f"path {path} is invalid: node at depth {depth} has {len(node.children)} children, "
                    f"got index {index}"
                )
            node = node.children[index]
        return node

    def replace(self, path: Path, replacement: "Tree") -> "Tree":
        """Return a new tree with the node at ``path`` replaced.

        Args:
            path: Location of the node to replace. ``()`` replaces the root.
            replacement: The subtree to graft at that location.

        Returns:
            The rebuilt tree. Subtrees off the path are shared, not copied.

        Raises:
            PreconditionError: If the path does not lead to a node.

        Example:
            >>> tree = Tree("+", (Tree("x"), Tree("y")))
            >>> tree.replace((1,), Tree("z")).to_simple_string()
            '+(x, z)'
        """
        if not path:
            return replacement
        index, rest = path[0], path[1:]
        if not 0 <= index < len(self.children):
            raise PreconditionError(
                f"path index {index} is out of bounds for a node with {len(self.children)} children"
            )
        children = list(self.children)
        children[index] = children[index].replace(rest, replacement)
        return Tree(self.value, tuple(children), self.arity)

    def check_arity(self) -> None:
        """Verify that every node has exactly as many children as its arity.

        Raises:
            PreconditionError: On the first node (in pre-order) whose child
                count differs from its declared arity.
        """
        for path, node in self.walk():
            if len(node.children) != node.arity:
                raise PreconditionError(
                    f"node {node.value!r} at path {path} declares arity {node.arity} "
                    f"but has {len(node.children)} children"
                )

    def to_simple_string(self) -> str:
        if not self.children:
            return str(self.value)
        return f"{self.value}({', '.join(child.to_simple_string() for child in self.children)})"
