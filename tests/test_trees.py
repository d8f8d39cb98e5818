"""Tests for immutable program trees."""

import pytest

from geneforge.errors import PreconditionError
from geneforge.trees import Tree


@pytest.fixture
def tree() -> Tree:
    """``+(x, *(y, 1))``."""
    return Tree("+", (Tree("x"), Tree("*", (Tree("y"), Tree("1")))))


class TestTreeShape:
    """Tests for height, size and traversal."""

    def test_leaf(self) -> None:
        """A leaf has height 0, size 1 and arity 0."""
        leaf = Tree("x")

        assert leaf.is_leaf
        assert leaf.height == 0
        assert leaf.size == 1
        assert leaf.arity == 0

    def test_height_and_size(self, tree) -> None:
        """Height counts edges on the longest path; size counts nodes."""
        assert tree.height == 2
        assert tree.size == 5

    def test_pre_order_nodes(self, tree) -> None:
        """nodes lists subtrees in pre-order."""
        assert [node.value for node in tree.nodes] == ["+", "x", "*", "y", "1"]

    def test_paths_align_with_nodes(self, tree) -> None:
        """paths lists the address of every node in pre-order."""
        assert tree.paths() == [(), (0,), (1,), (1, 0), (1, 1)]
        for path, node in zip(tree.paths(), tree.nodes):
            assert tree.subtree(path) == node

    def test_to_simple_string(self, tree) -> None:
        """to_simple_string renders nested calls."""
        assert tree.to_simple_string() == "+(x, *(y, 1))"

    def test_negative_arity(self) -> None:
        """A negative arity is rejected."""
        with pytest.raises(PreconditionError, match="arity must be non-negative"):
            Tree("x", (), -1)


class TestTreeEditing:
    """Tests for subtree access and replacement."""

    def test_subtree_invalid_path(self, tree) -> None:
        """An invalid path raises PreconditionError."""
        with pytest.raises(PreconditionError, match="is invalid"):
            tree.subtree((0, 0))

    def test_replace(self, tree) -> None:
        """replace grafts a subtree and leaves the original untouched."""
        replaced = tree.replace((1, 0), Tree("z"))

        assert replaced.to_simple_string() == "+(x, *(z, 1))"
        assert tree.to_simple_string() == "+(x, *(y, 1))"

    def test_replace_root(self, tree) -> None:
        """Replacing the empty path returns the replacement."""
        assert tree.replace((), Tree("z")) == Tree("z")

    def test_replace_shares_untouched_subtrees(self, tree) -> None:
        """Subtrees off the replaced path are shared, not copied."""
        replaced = tree.replace((1, 1), Tree("2"))

        assert replaced.children[0] is tree.children[0]
        assert replaced.children[1].children[0] is tree.children[1].children[0]

    def test_replace_out_of_bounds(self, tree) -> None:
        """Replacing at a path that does not exist raises PreconditionError."""
        with pytest.raises(PreconditionError, match="out of bounds"):
            tree.replace((3,), Tree("z"))


class TestCheckArity:
    """Tests for arity verification."""

    def test_well_formed(self, tree) -> None:
        """A tree built without explicit arity is well formed."""
        tree.check_arity()

    def test_malformed(self) -> None:
        """A node declaring more children than it has is reported with its path."""
        malformed = Tree("+", (Tree("x"), Tree("-", (Tree("y"),), 2)))

        with pytest.raises(PreconditionError, match=r"node '-' at path \(1,\) declares arity 2 but has 1 children"):
            malformed.check_arity()
