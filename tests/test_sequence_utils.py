"""
Tests for sequence utility functions.
"""

import pytest
import sys
sys.path.append('..')

from sparsetensor.sequence_utils import (
    reduce_on_sequence, product, multiplies, Multiplies,
    swap_elements, swap_elements_split
)


class TestFunctionObjects:
    """Test function objects."""

    def test_multiplies(self):
        """Test multiplication function object."""
        mult = Multiplies()
        assert mult(3, 4) == 12
        assert mult(0, 5) == 0

        # Test the global instance
        assert multiplies(3, 4) == 12


class TestReduceOnSequence:
    """Test reduce_on_sequence and product."""

    def test_reduce_multiply(self):
        """Test reduction with multiplication."""
        assert reduce_on_sequence([2, 3, 4], multiplies, 1) == 24
        assert reduce_on_sequence([5], multiplies, 2) == 10
        assert reduce_on_sequence([], multiplies, 5) == 5

    def test_product(self):
        """Test product of dimensions."""
        assert product([2, 3, 4]) == 24
        assert product((7,)) == 7
        assert product([3, 0, 2]) == 0
        assert product([]) == 1


class TestSwapElements:
    """Test swapping elements in a sequence."""

    def test_swap_basic(self):
        """Test the documented example."""
        assert swap_elements([1, 2, 3, 4, 5], 1, 3) == [1, 4, 3, 2, 5]

    def test_swap_reversed_positions(self):
        """Test that position order does not matter."""
        assert swap_elements([1, 2, 3, 4, 5], 3, 1) == [1, 4, 3, 2, 5]
        assert swap_elements([1, 2, 3], 2, 0) == [3, 2, 1]

    def test_swap_same_position(self):
        """Test that swapping a position with itself is a no-op."""
        assert swap_elements([1, 2, 3], 1, 1) == [1, 2, 3]

    def test_swap_does_not_mutate(self):
        """Test that the input sequence is left untouched."""
        original = [1, 2, 3]
        result = swap_elements(original, 0, 2)
        assert original == [1, 2, 3]
        assert result == [3, 2, 1]
        assert result is not original

    def test_swap_tuple_input(self):
        """Test swapping inside a tuple returns a list."""
        assert swap_elements((4, 5, 6), 0, 1) == [5, 4, 6]

    def test_swap_invalid_position(self):
        """Test out of range positions."""
        with pytest.raises(IndexError):
            swap_elements([1, 2, 3], 0, 3)
        with pytest.raises(IndexError):
            swap_elements([1, 2, 3], -1, 1)

    @pytest.mark.parametrize("pos_a,pos_b", [
        (0, 0), (0, 1), (1, 0), (0, 4), (4, 0), (2, 3), (3, 2), (1, 4),
    ])
    def test_split_variant_agrees(self, pos_a, pos_b):
        """Test that the split-and-join variant gives the same result."""
        seq = ['a', 'b', 'c', 'd', 'e']
        assert swap_elements_split(seq, pos_a, pos_b) == swap_elements(seq, pos_a, pos_b)
