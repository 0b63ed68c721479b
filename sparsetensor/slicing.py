"""
Decomposing tensors into slices and building them back up.

A slice is what fixing the outermost index leaves: a bare value for a
vector, a tensor of one order less otherwise. Tensors are built
incrementally by pushing compatible slices onto an accumulator whose
outermost dimension grows by one per push.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import TensorConfig, DEFAULT_CONFIG
from .errors import CollectableError
from .nested_utils import is_identity
from .tensor import Tensor, make_empty_tensor

logger = logging.getLogger(__name__)


def slices(tensor: Tensor) -> List[Any]:
    """
    Return all slices along the outermost axis.

    For a vector this is the list of values, for a matrix the list of rows,
    for an order-3 tensor the list of matrices, and so on.
    """
    return [tensor.fetch(i) for i in range(tensor.dimensions[0])]


def _element_contents(dimensions: Tuple[int, ...], identity: Any, element: Any,
                      config: TensorConfig) -> Tuple[bool, Any]:
    """
    Check that element can be appended to a tensor with the given dimensions.

    Returns:
        Tuple of (whether anything has to be stored, what to store)

    Raises:
        CollectableError: If the element has the wrong order or shape
    """
    if isinstance(element, Tensor):
        if len(dimensions) > 1 and element.dimensions == dimensions[1:]:
            contents = element.contents_for_identity(identity, config.prune_identity)
            return bool(contents), contents
    elif len(dimensions) == 1:
        if config.prune_identity and is_identity(element, identity):
            return False, None
        return True, element
    raise CollectableError(element)


def push_element(accumulator: Tensor, element: Any,
                 config: Optional[TensorConfig] = None) -> Tensor:
    """
    Append one slice to a tensor, growing its outermost dimension by one.

    An n×rest accumulator accepts a tensor with dimensions rest; a vector
    accepts a bare value. A slice whose identity differs from the
    accumulator identity is written out cell by cell, so every cell keeps
    its value.

    Raises:
        CollectableError: If element does not fit the accumulator
    """
    config = config or DEFAULT_CONFIG
    dimensions = accumulator.dimensions
    store, stored = _element_contents(dimensions, accumulator.identity, element, config)

    contents = dict(accumulator.contents)
    if store:
        contents[dimensions[0]] = stored
    return Tensor(dimensions=(dimensions[0] + 1,) + dimensions[1:],
                  identity=accumulator.identity, contents=contents)


class TensorBuilder:
    """
    Accumulator that builds a tensor from a stream of slices.

    The builder owns a private working copy of the initial contents, so
    pushing is linear in the number of slices. It is closed by finish() or
    abort(); leaving a with-block through an exception aborts it.

    Example:
        builder = TensorBuilder(make_empty_tensor([0, 3]))
        builder.push(row_a).push(row_b)
        matrix = builder.finish()
    """

    def __init__(self, initial: Tensor, config: Optional[TensorConfig] = None):
        """
        Initialize builder.

        Args:
            initial: Tensor to append to, typically empty with a known
                lower-order shape such as [0, 3]
            config: Configuration, DEFAULT_CONFIG when omitted
        """
        self._dimensions = initial.dimensions
        self._identity = initial.identity
        self._contents: Dict[int, Any] = dict(initial.contents)
        self._config = config or DEFAULT_CONFIG
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("TensorBuilder is already finished or aborted")

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def accumulator(self) -> Tensor:
        """Snapshot of the tensor built so far."""
        self._check_open()
        return Tensor(dimensions=self._dimensions, identity=self._identity,
                      contents=dict(self._contents))

    def push(self, element: Any) -> 'TensorBuilder':
        """
        Append one slice.

        Raises:
            CollectableError: If element does not fit the accumulator
        """
        self._check_open()
        store, stored = _element_contents(self._dimensions, self._identity, element, self._config)
        if store:
            self._contents[self._dimensions[0]] = stored
        self._dimensions = (self._dimensions[0] + 1,) + self._dimensions[1:]
        return self

    def extend(self, elements: Iterable[Any]) -> 'TensorBuilder':
        """Append every element of an iterable."""
        for element in elements:
            self.push(element)
        return self

    def finish(self) -> Tensor:
        """Close the builder and return the built tensor."""
        self._check_open()
        self._closed = True
        logger.debug("Finished building %s tensor", list(self._dimensions))
        return Tensor(dimensions=self._dimensions, identity=self._identity, contents=self._contents)

    def abort(self) -> None:
        """Close the builder and discard everything pushed so far."""
        self._check_open()
        self._closed = True
        self._contents = {}
        logger.debug("Aborted building %s tensor", list(self._dimensions))

    def __enter__(self) -> 'TensorBuilder':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if exc_type is not None and not self._closed:
            self.abort()
        return False


def collect(elements: Iterable[Any], into: Tensor,
            config: Optional[TensorConfig] = None) -> Tensor:
    """Push every element into a copy of the given tensor and return it."""
    with TensorBuilder(into, config) as builder:
        builder.extend(elements)
        return builder.finish()


def from_slices(ordered_slices: Sequence[Any], config: Optional[TensorConfig] = None) -> Tensor:
    """
    Build a tensor from its slices.

    A list of values builds a vector, a list of same-length vectors a
    matrix, a list of same-size matrices an order-3 tensor, and so on.

    Raises:
        ValueError: If ordered_slices is empty
        CollectableError: If the slices do not share one shape
    """
    ordered_slices = list(ordered_slices)
    if not ordered_slices:
        raise ValueError("Cannot build a tensor from an empty sequence of slices: "
                         "its dimensions are unknown")

    first = ordered_slices[0]
    if isinstance(first, Tensor):
        initial = make_empty_tensor((0,) + first.dimensions, first.identity)
        return collect(ordered_slices, initial, config)
    config = config or DEFAULT_CONFIG
    return collect(ordered_slices, make_empty_tensor((0,), config.default_identity), config)
