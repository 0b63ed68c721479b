"""
Error types raised by sparse tensor operations.

All errors derive from TensorError so callers can catch them at one
boundary, and from the closest builtin exception so generic handlers
(IndexError, TypeError, ArithmeticError) keep working.
"""

from typing import Any


class TensorError(Exception):
    """Base class for all sparse tensor errors."""


class AccessError(TensorError, IndexError):
    """Raised when a key cannot be used to index a tensor."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(
            f"The requested key {key!r} could not be found inside this "
            f"Vector/Matrix/Tensor. It probably is out of range"
        )


class CollectableError(TensorError, TypeError):
    """Raised when an element cannot be pushed into a tensor being built."""

    def __init__(self, element: Any):
        self.element = element
        super().__init__(
            f"Could not insert {element!r} to the Vector/Matrix/Tensor.\n"
            "Make sure that you pass in Tensors that are order n-1 from the tensor "
            "you add them to, and that they have the same dimensions (save for the "
            "highest one).\n"
            "For instance, you can only add vectors of length 3 to a n×3 matrix, "
            "and matrices of size 2×4 can only be added to an order-3 tensor of size n×2×4."
        )


class TensorArithmeticError(TensorError, ArithmeticError):
    """Raised for arithmetic that is not allowed between tensors."""

    def __init__(self, message: str = "This arithmetic operation is not allowed "
                                      "when working with Vectors/Matrices/Tensors."):
        super().__init__(message)
