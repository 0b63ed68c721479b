"""
Value mapping over sparse tensors, with and without coordinates.

Sparse mappers call the supplied function only for stored cells plus once
for the identity. This gives the same result as calling it for every cell
only if the function is pure: its output must depend on its argument
alone. Dense mappers call the function for every cell of the index space.
"""

import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from .config import TensorConfig, DEFAULT_CONFIG
from .functional_utils import StaticFord
from .nested_utils import is_identity, put_at_path
from .tensor import Tensor

logger = logging.getLogger(__name__)


class _IdentityMarker:
    """Marker passed in place of coordinates when mapping the identity."""

    def __repr__(self) -> str:
        return "IDENTITY"


IDENTITY = _IdentityMarker()


class CoordinateValue(NamedTuple):
    """A cell value tagged with its outer-to-inner coordinates."""
    coordinates: Tuple[int, ...]
    value: Any


def _map_contents(contents: Dict[int, Any], depth: int, fun: Callable[[Any], Any],
                  prune: bool, identity: Any) -> Dict[int, Any]:
    mapped = {}
    for key, value in contents.items():
        if depth == 1:
            new_value = fun(value)
            if prune and is_identity(new_value, identity):
                continue
        else:
            new_value = _map_contents(value, depth - 1, fun, prune, identity)
            if prune and not new_value:
                continue
        mapped[key] = new_value
    return mapped


def _map_contents_with_coordinates(contents: Dict[int, Any], depth: int,
                                   fun: Callable[[Tuple[Any, Any]], Any],
                                   coordinates: List[int], prune: bool,
                                   identity: Any) -> Dict[int, Any]:
    mapped = {}
    for key, value in contents.items():
        path = coordinates + [key]
        if depth == 1:
            new_value = fun((path, value))
            if prune and is_identity(new_value, identity):
                continue
        else:
            new_value = _map_contents_with_coordinates(value, depth - 1, fun, path, prune, identity)
            if prune and not new_value:
                continue
        mapped[key] = new_value
    return mapped


def map_values(tensor: Tensor, fun: Callable[[Any], Any],
               config: Optional[TensorConfig] = None) -> Tensor:
    """
    Map fun over all values in the tensor.

    fun is called once per stored value and once for the identity, never
    once per unset cell, so it has to be a pure function.

    Args:
        tensor: Tensor to map over
        fun: Function taking a value and returning the new value
        config: Configuration, DEFAULT_CONFIG when omitted

    Returns:
        New tensor with the same dimensions
    """
    config = config or DEFAULT_CONFIG
    new_identity = fun(tensor.identity)
    contents = _map_contents(tensor.contents, tensor.order, fun,
                             config.prune_identity, new_identity)
    return Tensor(dimensions=tensor.dimensions, identity=new_identity, contents=contents)


def sparse_map_with_coordinates(tensor: Tensor, fun: Callable[[Tuple[Any, Any]], Any],
                                config: Optional[TensorConfig] = None) -> Tensor:
    """
    Map fun over the stored values, passing their coordinates.

    fun receives a (coordinate_list, value) tuple for every stored value,
    and (IDENTITY, identity) exactly once to compute the new identity.
    Unset cells never call fun, so fun has to be pure for the result to
    match dense_map_with_coordinates.

    Args:
        tensor: Tensor to map over
        fun: Function taking a (coordinates, value) tuple
        config: Configuration, DEFAULT_CONFIG when omitted

    Returns:
        New tensor with the same dimensions
    """
    config = config or DEFAULT_CONFIG
    new_identity = fun((IDENTITY, tensor.identity))
    contents = _map_contents_with_coordinates(tensor.contents, tensor.order, fun, [],
                                              config.prune_identity, new_identity)
    return Tensor(dimensions=tensor.dimensions, identity=new_identity, contents=contents)


def dense_map_with_coordinates(tensor: Tensor, fun: Callable[[Tuple[List[int], Any]], Any]) -> Tensor:
    """
    Map fun over every cell of the tensor, including unset ones.

    fun receives a (coordinate_list, value) tuple for each of the
    prod(dimensions) cells in row-major order; unset cells pass the
    identity. Every cell of the result is stored explicitly and the result
    keeps the identity of the input, since fun expects real coordinates.

    The cells agree with sparse_map_with_coordinates for a pure fun, but
    the identities differ whenever fun does not map the identity onto
    itself, and then the two results do not compare equal. Compare
    to_list() outputs in that case.
    """
    loop = StaticFord(list(tensor.dimensions))
    logger.debug("Dense mapping over %d cells of %s tensor",
                 loop.get_num_of_access(), list(tensor.dimensions))

    contents: Dict[int, Any] = {}
    for index in loop.indices():
        value = tensor.get_cell(index)
        put_at_path(contents, index, fun((list(index), value)))
    return Tensor(dimensions=tensor.dimensions, identity=tensor.identity, contents=contents)


def with_coordinates(tensor: Tensor) -> Tensor:
    """
    Return a dense tensor whose cells are CoordinateValue pairs.

    Every cell, unset ones included, holds its own coordinates and value.
    The identity is left unchanged.
    """
    return dense_map_with_coordinates(
        tensor, lambda pair: CoordinateValue(tuple(pair[0]), pair[1])
    )
