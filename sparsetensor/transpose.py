"""
Axis swapping for sparse tensors.

A swap of the outermost axis with axis k works on stored cells only:

1. tag every stored value with its coordinates,
2. flatten the tagged contents into a list of CoordinateValue pairs,
3. swap positions 0 and k of every coordinate,
4. inflate the pairs back into nested contents,
5. swap positions 0 and k of the dimensions.

Any two axes a and b are swapped through the outermost axis as a pivot:
swap(0, a), swap(0, b), swap(0, a).
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from .config import TensorConfig
from .coordinate_mapper import CoordinateValue, IDENTITY, sparse_map_with_coordinates
from .nested_utils import put_at_path
from .sequence_utils import swap_elements
from .tensor import Tensor

logger = logging.getLogger(__name__)

# Tagged values never equal the identity, nothing to prune
_TAGGING_CONFIG = TensorConfig(prune_identity=False)


def _tag(pair: Any) -> Any:
    coordinates, value = pair
    if coordinates is IDENTITY:
        return value
    return CoordinateValue(tuple(coordinates), value)


def flatten_coordinates(contents: Dict[int, Any]) -> List[CoordinateValue]:
    """
    Flatten nested contents whose leaves are CoordinateValue pairs.

    Levels holding pairs are collected directly, deeper levels are
    flattened recursively and concatenated.
    """
    pairs: List[CoordinateValue] = []
    for value in contents.values():
        if isinstance(value, CoordinateValue):
            pairs.append(value)
        else:
            pairs.extend(flatten_coordinates(value))
    return pairs


def inflate(pairs: Sequence[CoordinateValue]) -> Dict[int, Any]:
    """Nest CoordinateValue pairs back into contents, creating levels as needed."""
    contents: Dict[int, Any] = {}
    for coordinates, value in pairs:
        put_at_path(contents, coordinates, value)
    return contents


def _normalize_axis(tensor: Tensor, axis: int) -> int:
    normalized = axis + tensor.order if axis < 0 else axis
    if not 0 <= normalized < tensor.order:
        raise ValueError(f"Axis {axis} out of range for tensor of order {tensor.order}")
    return normalized


def transpose_outer(tensor: Tensor, axis: int) -> Tensor:
    """
    Swap the outermost axis with the given axis.

    Cost is proportional to the number of stored cells.
    """
    axis = _normalize_axis(tensor, axis)
    if axis == 0:
        return tensor

    tagged = sparse_map_with_coordinates(tensor, _tag, _TAGGING_CONFIG)
    pairs = flatten_coordinates(tagged.contents)
    swapped = [
        CoordinateValue(tuple(swap_elements(coordinates, 0, axis)), value)
        for coordinates, value in pairs
    ]
    logger.debug("Swapping axes 0 and %d over %d stored cells", axis, len(swapped))

    return Tensor(
        dimensions=tuple(swap_elements(tensor.dimensions, 0, axis)),
        identity=tensor.identity,
        contents=inflate(swapped),
    )


def transpose(tensor: Tensor, axis_a: int, axis_b: Optional[int] = None) -> Tensor:
    """
    Swap two axes of a tensor.

    Args:
        tensor: Tensor to transpose
        axis_a: First axis; with axis_b omitted it is swapped with the
            outermost axis
        axis_b: Second axis

    Returns:
        New tensor with the two axes exchanged

    Example:
        transpose(make_tensor([[1, 2, 3], [4, 5, 6]], [2, 3]), 0, 1).to_list()
        -> [[1, 4], [2, 5], [3, 6]]
    """
    if axis_b is None:
        return transpose_outer(tensor, axis_a)

    axis_a = _normalize_axis(tensor, axis_a)
    axis_b = _normalize_axis(tensor, axis_b)
    if axis_a == axis_b:
        return tensor
    if axis_a == 0:
        return transpose_outer(tensor, axis_b)
    if axis_b == 0:
        return transpose_outer(tensor, axis_a)

    result = transpose_outer(tensor, axis_a)
    result = transpose_outer(result, axis_b)
    return transpose_outer(result, axis_a)
