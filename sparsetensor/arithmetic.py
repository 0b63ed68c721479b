"""
Scalar-broadcast arithmetic.

Each operation maps the scalar operation over the tensor, so it touches
only stored cells and the identity. Arithmetic between two tensors is not
supported.
"""

import numbers
import operator
from typing import Any, Callable

from .coordinate_mapper import map_values
from .errors import TensorArithmeticError
from .tensor import Tensor


def _check_scalar(value: Any) -> None:
    if isinstance(value, Tensor):
        raise TensorArithmeticError()
    if not isinstance(value, numbers.Number):
        raise TypeError(f"Expected a number, got {value!r}")


def _broadcast(tensor: Tensor, number: Any, op: Callable[[Any, Any], Any]) -> Tensor:
    _check_scalar(number)
    return map_values(tensor, lambda cell: op(cell, number))


def add_number(tensor: Tensor, number: Any) -> Tensor:
    """Add number to every cell."""
    return _broadcast(tensor, number, operator.add)


def sub_number(tensor: Tensor, number: Any) -> Tensor:
    """Subtract number from every cell."""
    return _broadcast(tensor, number, operator.sub)


def mul_number(tensor: Tensor, number: Any) -> Tensor:
    """Multiply every cell by number."""
    return _broadcast(tensor, number, operator.mul)


def div_number(tensor: Tensor, number: Any) -> Tensor:
    """Divide every cell by number."""
    return _broadcast(tensor, number, operator.truediv)
