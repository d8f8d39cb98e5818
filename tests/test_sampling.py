"""Tests for the probabilistic index selection utilities."""

import numpy as np
import pytest

from geneforge.errors import PreconditionError
from geneforge.sampling import random_indices, select_indices, subsets

# =============================================================================
# TestSelectIndices
# =============================================================================


class TestSelectIndices:
    """Tests for select_indices."""

    def test_zero_probability_selects_nothing(self, rng) -> None:
        """A probability of 0 returns an empty list."""
        assert select_indices(0.0, 10, rng) == []

    def test_unit_probability_selects_everything(self, rng) -> None:
        """A probability of 1 returns the full range."""
        assert select_indices(1.0, 5, rng) == [0, 1, 2, 3, 4]

    def test_empty_range(self, rng) -> None:
        """A range of size 0 selects nothing regardless of probability."""
        assert select_indices(0.5, 0, rng) == []
        assert select_indices(1.0, 0, rng) == []

    def test_extreme_probabilities_consume_no_draws(self) -> None:
        """Probabilities of 0 and 1 do not advance the random stream."""
        rng = np.random.default_rng(7)
        select_indices(0.0, 100, rng)
        select_indices(1.0, 100, rng)
        assert rng.random() == np.random.default_rng(7).random()

    def test_one_draw_per_index_in_ascending_order(self) -> None:
        """Each index is included when its own draw is below the probability."""
        draws = np.random.default_rng(3).random(20)
        expected = [i for i in range(20) if draws[i] < 0.3]

        assert select_indices(0.3, 20, np.random.default_rng(3)) == expected

    def test_indices_are_ascending_and_in_range(self, rng) -> None:
        """Selected indices are sorted and within the range."""
        indices = select_indices(0.5, 50, rng)
        assert indices == sorted(indices)
        assert all(0 <= i < 50 for i in indices)

    def test_deterministic_for_seed(self) -> None:
        """The same seed gives the same selection."""
        first = select_indices(0.4, 30, np.random.default_rng(11))
        second = select_indices(0.4, 30, np.random.default_rng(11))
        assert first == second

    @pytest.mark.parametrize("probability", [-0.1, 1.5, float("nan")])
    def test_rejects_invalid_probability(self, rng, probability) -> None:
        """Probabilities outside [0, 1] are rejected, not clamped."""
        with pytest.raises(PreconditionError, match="probability must be in"):
            select_indices(probability, 5, rng)

    def test_rejects_negative_range(self, rng) -> None:
        """A negative range size is rejected."""
        with pytest.raises(PreconditionError, match="range_size must be non-negative"):
            select_indices(0.5, -1, rng)


# =============================================================================
# TestRandomIndices
# =============================================================================


class TestRandomIndices:
    """Tests for random_indices."""

    def test_returns_sorted_distinct_indices(self, rng) -> None:
        """Indices are distinct, sorted and within range."""
        indices = random_indices(4, 10, rng)
        assert len(indices) == 4
        assert len(set(indices)) == 4
        assert indices == sorted(indices)
        assert all(0 <= i < 10 for i in indices)

    def test_full_range(self, rng) -> None:
        """Drawing every index returns the whole range."""
        assert random_indices(6, 6, rng) == [0, 1, 2, 3, 4, 5]

    def test_zero_count(self, rng) -> None:
        """Drawing nothing returns an empty list."""
        assert random_indices(0, 6, rng) == []

    def test_rejects_count_above_range(self, rng) -> None:
        """More indices than available is rejected."""
        with pytest.raises(PreconditionError, match="cannot exceed"):
            random_indices(3, 2, rng)


# =============================================================================
# TestSubsets
# =============================================================================


class TestSubsets:
    """Tests for parent grouping."""

    def test_exclusive_groups_partition_elements(self, rng) -> None:
        """Exclusive groups use every element exactly once."""
        groups = subsets(list(range(12)), 3, True, rng)
        assert len(groups) == 4
        assert all(len(group) == 3 for group in groups)
        assert sorted(v for group in groups for v in group) == list(range(12))

    def test_non_exclusive_groups_cover_every_element(self, rng) -> None:
        """Every element appears in at least one non-exclusive group."""
        groups = subsets(list(range(9)), 2, False, rng)
        assert all(len(group) == 2 for group in groups)
        assert {v for group in groups for v in group} == set(range(9))

    def test_exclusive_requires_divisible_size(self, rng) -> None:
        """Exclusive grouping of 10 elements into groups of 3 is rejected."""
        with pytest.raises(PreconditionError, match="multiple of the subset size"):
            subsets(list(range(10)), 3, True, rng)

    def test_rejects_empty_input(self, rng) -> None:
        """Grouping an empty collection is rejected."""
        with pytest.raises(PreconditionError, match="empty collection"):
            subsets([], 2, False, rng)

    def test_rejects_non_positive_size(self, rng) -> None:
        """A subset size of 0 is rejected."""
        with pytest.raises(PreconditionError, match="subset size must be positive"):
            subsets([1, 2], 0, False, rng)
