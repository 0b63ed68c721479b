"""
Multi-dimensional index loop used for dense traversal.
"""

from typing import List, Iterator
import itertools


class StaticFord:
    """
    Multi-dimensional for loop.

    Visits every index of an N-dimensional index space in row-major order,
    the last dimension varying fastest.
    """

    def __init__(self, lengths: List[int]):
        """
        Initialize multi-dimensional loop.

        Args:
            lengths: Length of each dimension
        """
        if not lengths:
            raise ValueError("Lengths cannot be empty")

        self.lengths = list(lengths)

    def indices(self) -> Iterator[List[int]]:
        """Yield every multi-dimensional index."""
        ranges = [range(max(length, 0)) for length in self.lengths]
        for index in itertools.product(*ranges):
            yield list(index)

    def get_num_of_access(self) -> int:
        """Get the total number of indices visited."""
        total = 1
        for length in self.lengths:
            total *= max(length, 0)
        return total
