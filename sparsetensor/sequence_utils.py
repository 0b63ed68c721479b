"""
Sequence helpers used by the transpose engine and shape bookkeeping.

Every function here returns a new list and leaves its input untouched.
"""

from typing import List, Callable, Any, Sequence


class Multiplies:
    """Function object for multiplication."""
    def __call__(self, a: int, b: int) -> int:
        return a * b


def reduce_on_sequence(seq: Sequence[int], reduce_func: Callable[[int, int], int], init: int) -> int:
    """
    Reduce a sequence using a reduction function with an initial value.

    Args:
        seq: Sequence of integers to reduce
        reduce_func: Function that takes two integers and returns one
        init: Initial value for the reduction

    Returns:
        Reduced value

    Example:
        reduce_on_sequence([2, 3, 4], multiplies, 1) -> 24
    """
    result = init
    for value in seq:
        result = reduce_func(result, value)
    return result


def product(seq: Sequence[int]) -> int:
    """Product of all values, 1 for an empty sequence."""
    return reduce_on_sequence(seq, multiplies, 1)


def _check_position(seq: Sequence[Any], pos: int) -> None:
    if not 0 <= pos < len(seq):
        raise IndexError(f"Position {pos} out of range for sequence of length {len(seq)}")


def swap_elements(seq: Sequence[Any], pos_a: int, pos_b: int) -> List[Any]:
    """
    Swap the elements at two positions of a sequence.

    Args:
        seq: Sequence to swap in
        pos_a: First 0-based position
        pos_b: Second 0-based position

    Returns:
        New list with the two elements exchanged

    Example:
        swap_elements([1, 2, 3, 4, 5], 1, 3) -> [1, 4, 3, 2, 5]
    """
    _check_position(seq, pos_a)
    _check_position(seq, pos_b)

    result = list(seq)
    result[pos_a], result[pos_b] = result[pos_b], result[pos_a]
    return result


def swap_elements_split(seq: Sequence[Any], pos_a: int, pos_b: int) -> List[Any]:
    """
    Swap two elements by splitting the sequence around them and joining it back.

    Gives the same result as swap_elements.
    """
    _check_position(seq, pos_a)
    _check_position(seq, pos_b)

    if pos_a == pos_b:
        return list(seq)
    if pos_b < pos_a:
        pos_a, pos_b = pos_b, pos_a

    initial = list(seq[:pos_a])
    between = list(seq[pos_a:pos_b])
    tail = list(seq[pos_b:])
    return initial + [tail[0]] + between[1:] + [between[0]] + tail[1:]


# Constants for common use
multiplies = Multiplies()
