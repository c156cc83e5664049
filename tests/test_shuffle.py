"""Tests for ranged Fisher-Yates shuffling."""

from __future__ import annotations

from collections import Counter

import pytest
from hypothesis import given
from shuffrand.errors import ValidationError
from shuffrand.shuffle import crypto_shuffle, shuffle_sequence
from shuffrand.types import ShuffleRequest

from tests.strategies import distinct_items, items, windowed_items


class TestPermutation:
    """Tests that shuffling only rearranges."""

    @given(values=items)
    def test_full_window_is_permutation(self, values: list[int]) -> None:
        """The output holds exactly the input's elements."""
        result = crypto_shuffle(values)
        assert sorted(result) == sorted(values)
        assert len(result) == len(values)

    @given(case=windowed_items())
    def test_outside_window_untouched(self, case: tuple[list[int], int, int]) -> None:
        """Only positions inside [range_start, range_end) may change."""
        values, start, end = case
        result = crypto_shuffle(values, range_start=start, range_end=end)
        assert result[:start] == values[:start]
        assert result[end:] == values[end:]
        assert sorted(result[start:end]) == sorted(values[start:end])

    def test_letters_window(self) -> None:
        """Shuffling [A..E] over [1, 4) keeps A and E fixed."""
        for _ in range(200):
            result = crypto_shuffle(['A', 'B', 'C', 'D', 'E'], range_start=1, range_end=4)
            assert result[0] == 'A'
            assert result[4] == 'E'
            assert sorted(result[1:4]) == ['B', 'C', 'D']

    def test_empty_sequence(self) -> None:
        """An empty sequence shuffles to an empty list."""
        assert crypto_shuffle([]) == []

    def test_single_element_window_is_noop(self, scripted_entropy) -> None:
        """Zero- and one-element windows draw nothing."""
        source = scripted_entropy()
        assert crypto_shuffle([1, 2, 3], range_start=1, range_end=2, avoid_identical=True) == [1, 2, 3]
        assert crypto_shuffle([1, 2, 3], range_start=2, range_end=2) == [1, 2, 3]
        assert source.requests == []

    def test_swaps_follow_drawn_indices(self, scripted_entropy) -> None:
        """Each step swaps position i with an index drawn from [start, i]."""
        # i=3 draws 0 (swap d,a), i=2 draws 2 (stay), i=1 draws 0 (swap d,b)
        scripted_entropy(b'\x00', b'\x02', b'\x00')
        assert crypto_shuffle(['a', 'b', 'c', 'd']) == ['b', 'd', 'c', 'a']

    def test_tuple_input_returns_list(self) -> None:
        """Copying mode accepts immutable sequences and returns a list."""
        result = crypto_shuffle((1, 2, 3))
        assert isinstance(result, list)
        assert sorted(result) == [1, 2, 3]


class TestInPlace:
    """Tests for in-place and copying modes."""

    def test_in_place_mutates_and_returns_input(self) -> None:
        """in_place=True permutes and returns the same object."""
        values = list(range(20))
        result = crypto_shuffle(values, in_place=True)
        assert result is values
        assert sorted(values) == list(range(20))

    def test_copy_leaves_input_untouched(self) -> None:
        """The default mode returns a new list and leaves the input alone."""
        values = list(range(20))
        result = crypto_shuffle(values)
        assert result is not values
        assert values == list(range(20))

    def test_in_place_requires_mutable_sequence(self) -> None:
        """Tuples cannot be shuffled in place."""
        with pytest.raises(ValidationError, match='mutable sequence'):
            crypto_shuffle((1, 2, 3), in_place=True)


class TestAvoidIdentical:
    """Tests for identity avoidance."""

    def test_in_place_two_elements_never_identical(self) -> None:
        """In-place shuffles of two elements always swap them."""
        for _ in range(10_000):
            values = [1, 2]
            crypto_shuffle(values, in_place=True, avoid_identical=True)
            assert values == [2, 1]

    def test_copy_two_elements_never_identical(self) -> None:
        """Copying shuffles of two elements always swap them."""
        for _ in range(2_000):
            assert crypto_shuffle(['x', 'y'], avoid_identical=True) == ['y', 'x']

    @given(values=distinct_items)
    def test_distinct_items_always_differ(self, values: list[int]) -> None:
        """With distinct items the result never equals the input."""
        assert crypto_shuffle(values, avoid_identical=True) != values

    def test_identity_swaps_window_ends(self, scripted_entropy) -> None:
        """An identity outcome swaps the first and last element of the window."""
        # i=3 -> 3, i=2 -> 2: identity over window [1, 4)
        scripted_entropy(b'\x02', b'\x01')
        values = ['a', 'b', 'c', 'd', 'e']
        crypto_shuffle(values, range_start=1, range_end=4, in_place=True, avoid_identical=True)
        assert values == ['a', 'd', 'c', 'b', 'e']

    def test_duplicates_cannot_be_forced_apart(self) -> None:
        """A window of equal items stays identical; there is nothing to swap."""
        assert crypto_shuffle([7, 7, 7], avoid_identical=True) == [7, 7, 7]

    def test_float_items_compare_with_tolerance(self, scripted_entropy) -> None:
        """Floats within machine epsilon count as the same arrangement."""
        # i=1 draws from 0..1 -> 1: identity
        scripted_entropy(b'\x01')
        assert crypto_shuffle([0.1, 0.2], avoid_identical=True) == [0.2, 0.1]

    @pytest.mark.slow
    def test_three_items_spread_over_five_arrangements(self) -> None:
        """Avoidance removes the identity and leaves the other permutations."""
        counts = Counter(tuple(crypto_shuffle([1, 2, 3], avoid_identical=True)) for _ in range(30_000))
        assert (1, 2, 3) not in counts
        assert len(counts) == 5


class TestWindowValidation:
    """Tests for window validation."""

    @pytest.mark.parametrize(
        ('start', 'end'),
        [(0, 6), (4, 2), (6, 6)],
    )
    def test_out_of_bounds_or_inverted(self, start: int, end: int) -> None:
        """Windows past the end or with start > end are rejected."""
        with pytest.raises(ValidationError, match='range_start <= range_end'):
            crypto_shuffle([1, 2, 3, 4, 5], range_start=start, range_end=end)

    def test_negative_start(self) -> None:
        """Negative indices fail schema validation."""
        with pytest.raises(ValidationError, match='^Invalid crypto_shuffle parameters'):
            crypto_shuffle([1, 2, 3], range_start=-1)

    def test_non_integer_index(self) -> None:
        """Indices must be integers."""
        with pytest.raises(ValidationError):
            crypto_shuffle([1, 2, 3], range_end=1.5)

    def test_non_boolean_flag(self) -> None:
        """Flags must be booleans."""
        with pytest.raises(ValidationError):
            crypto_shuffle([1, 2, 3], in_place='yes')

    def test_non_sequence(self) -> None:
        """Sets have no order to shuffle."""
        with pytest.raises(ValidationError, match='expected a sequence'):
            shuffle_sequence(ShuffleRequest(sequence={1, 2, 3}))


class TestUniformity:
    """Statistical tests for the permutation distribution."""

    @pytest.mark.slow
    def test_three_items_chi_squared(self) -> None:
        """All six permutations of three items are equally likely."""
        trials = 60_000
        counts = Counter(tuple(crypto_shuffle([1, 2, 3])) for _ in range(trials))
        assert len(counts) == 6
        expected = trials / 6
        chi_squared = sum((count - expected) ** 2 / expected for count in counts.values())
        # df=5; the 0.9995 quantile is about 22.1
        assert chi_squared < 25
