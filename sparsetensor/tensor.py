"""
Sparse, order-polymorphic tensor stored as nested dicts.

A tensor of order n keeps its cells in a dict of dicts n levels deep. Only
cells that differ from the tensor identity are stored; every read of a
missing cell resolves to the identity. Tensors are immutable values: every
operation returns a new Tensor and never touches the contents of its input.
"""

import numbers
import warnings
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import TensorConfig, DEFAULT_CONFIG
from .errors import AccessError
from .nested_utils import (
    is_identity, values_equal, iter_leaves, prune_identity, put_at_path, get_at_path
)
from .functional_utils import StaticFord
from .sequence_utils import product


class _Pop:
    """Removal signal returned by get_and_update callbacks."""

    def __repr__(self) -> str:
        return "POP"


POP = _Pop()

_UNSET = object()


def _is_sequence(item: Any) -> bool:
    return isinstance(item, (list, tuple))


def _nested_list_to_nested_map(values: Sequence[Any], dimensions: Sequence[int],
                               identity: Any, prune: bool) -> Dict[int, Any]:
    if len(values) > dimensions[0]:
        raise ValueError(
            f"Got {len(values)} values for a dimension of size {dimensions[0]}"
        )

    contents = {}
    for index, item in enumerate(values):
        if len(dimensions) == 1:
            if prune and is_identity(item, identity):
                continue
            contents[index] = item
        else:
            if not _is_sequence(item):
                raise ValueError(
                    f"Expected a nested sequence at index {index}, got {item!r}"
                )
            child = _nested_list_to_nested_map(item, dimensions[1:], identity, prune)
            if child or not prune:
                contents[index] = child
    return contents


def _check_dimensions(dimensions: Sequence[Any]) -> Tuple[int, ...]:
    if any(isinstance(d, bool) or not isinstance(d, numbers.Integral) for d in dimensions):
        raise ValueError(f"Dimensions must be integers, got {list(dimensions)}")
    dimensions = tuple(int(d) for d in dimensions)
    if not dimensions:
        raise ValueError("A tensor needs at least one dimension")
    if any(d < 0 for d in dimensions):
        raise ValueError(f"Dimensions must be non-negative, got {list(dimensions)}")
    return dimensions


def _check_contents(contents: Any, dimensions: Tuple[int, ...], path: Tuple[int, ...] = ()) -> None:
    if not isinstance(contents, dict):
        raise ValueError(f"Expected a dict at {list(path)}, got {contents!r}")
    for key, value in contents.items():
        if (isinstance(key, bool) or not isinstance(key, numbers.Integral)
                or not 0 <= key < dimensions[0]):
            raise ValueError(
                f"Stored key {key!r} at {list(path)} is out of range for a "
                f"dimension of size {dimensions[0]}"
            )
        if len(dimensions) > 1:
            _check_contents(value, dimensions[1:], path + (key,))


def _nested_map_to_nested_list(contents: Dict[int, Any], dimensions: Sequence[int],
                               identity: Any) -> List[Any]:
    dimension = dimensions[0]
    if dimension <= 0:
        return []
    if len(dimensions) == 1:
        return [contents.get(i, identity) for i in range(dimension)]
    return [
        _nested_map_to_nested_list(contents.get(i, {}), dimensions[1:], identity)
        for i in range(dimension)
    ]


@dataclass(frozen=True, eq=False)
class Tensor:
    """
    Sparse N-dimensional array.

    Attributes:
        dimensions: Size of every axis, outermost first
        identity: Value of every cell that has no stored entry
        contents: Nested dicts holding the stored cells
    """

    dimensions: Tuple[int, ...] = (1,)
    identity: Any = 0
    contents: Dict[int, Any] = field(default_factory=dict)

    def __post_init__(self):
        """
        Normalize dimensions and check that every stored key is in range.

        Contents are taken as given, identity-valued leaves included; use
        make_tensor or make_empty_tensor to build pruned tensors.
        """
        dimensions = _check_dimensions(self.dimensions)
        _check_contents(self.contents, dimensions)
        object.__setattr__(self, 'dimensions', dimensions)

    # Construction

    @classmethod
    def new(cls, nested_values: Sequence[Any], dimensions: Optional[Sequence[int]] = None,
            identity: Any = _UNSET, config: Optional[TensorConfig] = None) -> 'Tensor':
        """
        Create a tensor from a list of lists (of lists ...).

        Args:
            nested_values: Nested sequence of cell values
            dimensions: Dimensions of the tensor; defaults to [len(nested_values)]
            identity: Value that all unset cells default to
            config: Configuration, DEFAULT_CONFIG when omitted

        Returns:
            New Tensor
        """
        config = config or DEFAULT_CONFIG
        if identity is _UNSET:
            identity = config.default_identity

        nested_values = list(nested_values)
        if dimensions is None:
            dimensions = [len(nested_values)]
            if any(_is_sequence(item) for item in nested_values):
                warnings.warn(
                    "Nested input without explicit dimensions: only the outer "
                    "dimension is inferred and inner sequences are stored as values"
                )

        dimensions = _check_dimensions(dimensions)
        contents = _nested_list_to_nested_map(
            nested_values, dimensions, identity, config.prune_identity
        )
        return cls(dimensions=dimensions, identity=identity, contents=contents)

    @classmethod
    def from_array(cls, array: Any, identity: Any = 0) -> 'Tensor':
        """
        Create a tensor from a dense numpy array.

        Dimensions are taken from the array shape; only cells that differ
        from the identity are stored.
        """
        array = np.asarray(array)
        if array.ndim == 0:
            raise ValueError("Cannot build a tensor from a 0-dimensional array")

        contents: Dict[int, Any] = {}
        for coordinates in zip(*np.nonzero(array != identity)):
            value = array[coordinates]
            if isinstance(value, np.generic):
                value = value.item()
            put_at_path(contents, [int(c) for c in coordinates], value)
        return cls(dimensions=array.shape, identity=identity, contents=contents)

    def to_list(self) -> List[Any]:
        """Return the tensor as a nested list, identity filling unset cells."""
        return _nested_map_to_nested_list(self.contents, self.dimensions, self.identity)

    def to_array(self, dtype: Any = None) -> np.ndarray:
        """
        Return the tensor as a dense numpy array.

        Args:
            dtype: Array dtype, inferred from the identity and stored values
                when omitted
        """
        entries = self.entries()
        if dtype is None:
            dtype = np.asarray([self.identity, *entries.values()]).dtype
        array = np.full(self.dimensions, self.identity, dtype=dtype)
        for coordinates, value in entries.items():
            array[coordinates] = value
        return array

    # Shape queries

    @property
    def order(self) -> int:
        """Number of dimensions: 1 for vectors, 2 for matrices, ..."""
        return len(self.dimensions)

    @property
    def is_vector(self) -> bool:
        return self.order == 1

    @property
    def is_matrix(self) -> bool:
        return self.order == 2

    @property
    def size(self) -> int:
        """Total number of logical cells, stored or not."""
        return product(self.dimensions)

    @property
    def stored_count(self) -> int:
        """Number of stored leaves."""
        return sum(1 for _ in iter_leaves(self.contents, self.order))

    def get_cell(self, coordinates: Sequence[int]) -> Any:
        """Value of the cell at a full coordinate, identity when unset."""
        if len(coordinates) != self.order:
            raise AccessError(tuple(coordinates))
        return get_at_path(self.contents, list(coordinates), self.identity)

    def entries(self) -> Dict[Tuple[int, ...], Any]:
        """Map from coordinate tuple to value for every non-identity cell."""
        return {
            coordinates: value
            for coordinates, value in iter_leaves(self.contents, self.order)
            if not is_identity(value, self.identity)
        }

    def contents_for_identity(self, identity: Any, prune: bool = True) -> Dict[int, Any]:
        """
        Contents that read back the same cells under another identity.

        With a different identity every unset cell has to be written out, so
        this walks the whole index space.

        Args:
            identity: Identity of the tensor that will hold the contents
            prune: Drop leaves equal to the new identity
        """
        if values_equal(identity, self.identity):
            if prune:
                return prune_identity(self.contents, self.order, identity)
            return self.contents

        contents: Dict[int, Any] = {}
        for index in StaticFord(list(self.dimensions)).indices():
            value = self.get_cell(index)
            if prune and is_identity(value, identity):
                continue
            put_at_path(contents, index, value)
        return contents

    # Indexed access

    def _normalize_key(self, key: Any) -> int:
        if isinstance(key, bool) or not isinstance(key, numbers.Integral):
            raise AccessError(key)

        current_dimension = self.dimensions[0]
        index = int(key)
        if index < 0:
            index += current_dimension
        if index < 0 or index >= current_dimension:
            raise AccessError(key)
        return index

    def _slice(self, contents: Dict[int, Any]) -> 'Tensor':
        return Tensor(dimensions=self.dimensions[1:], identity=self.identity, contents=contents)

    def fetch(self, key: int) -> Any:
        """
        Return the slice at key along the outermost axis.

        For a vector this is the bare value (or the identity). For higher
        orders it is a tensor of one order less sharing the identity.
        Negative keys count from the end.

        Raises:
            AccessError: If key is not an integer or out of range
        """
        index = self._normalize_key(key)
        if self.is_vector:
            return self.contents.get(index, self.identity)
        return self._slice(self.contents.get(index, {}))

    def __getitem__(self, key: Union[int, Tuple[int, ...]]) -> Any:
        """Fetch a slice; a tuple key fetches along successive axes."""
        if not isinstance(key, tuple):
            return self.fetch(key)
        if not key:
            raise AccessError(key)

        result: Any = self
        for part in key:
            if not isinstance(result, Tensor):
                raise AccessError(key)
            result = result.fetch(part)
        return result

    def pop(self, key: int, default: Any = None) -> Tuple[Any, 'Tensor']:
        """
        Remove the entry at key.

        Dimensions do not change: the removed cells read as identity
        afterwards.

        Returns:
            Tuple of (removed value or slice, or default if nothing was
            stored, updated tensor)
        """
        index = self._normalize_key(key)
        if index not in self.contents:
            return default, self

        contents = dict(self.contents)
        removed = contents.pop(index)
        if not self.is_vector:
            removed = self._slice(removed)
        return removed, replace(self, contents=contents)

    def get_and_update(self, key: int, fun: Callable[[Any], Any],
                       config: Optional[TensorConfig] = None) -> Tuple[Any, 'Tensor']:
        """
        Get the value at key and update it in one pass.

        fun receives the current value (a tensor slice for orders above 1)
        and returns either a (result, replacement) pair or POP to remove the
        entry. For orders above 1 the replacement must be a tensor with the
        dimensions of the slice; if its identity differs, its unset cells are
        written out so they keep reading as that identity.

        Returns:
            Tuple of (result, updated tensor); on POP the result is the
            current value
        """
        config = config or DEFAULT_CONFIG
        index = self._normalize_key(key)
        current = self.fetch(index)
        outcome = fun(current)

        contents = dict(self.contents)
        if outcome is POP:
            contents.pop(index, None)
            return current, replace(self, contents=contents)

        result, replacement = outcome
        if self.is_vector:
            if config.prune_identity and is_identity(replacement, self.identity):
                contents.pop(index, None)
            else:
                contents[index] = replacement
        else:
            if not isinstance(replacement, Tensor) or replacement.dimensions != self.dimensions[1:]:
                raise ValueError(
                    f"Replacement for key {key} must be a Tensor with dimensions "
                    f"{list(self.dimensions[1:])}, got {replacement!r}"
                )
            sub_contents = replacement.contents_for_identity(self.identity, config.prune_identity)
            if sub_contents:
                contents[index] = sub_contents
            else:
                contents.pop(index, None)
        return result, replace(self, contents=contents)

    def lift(self) -> 'Tensor':
        """
        Add an outer dimension of size 1.

        A length-n vector becomes a 1×n matrix, an n×m matrix a 1×n×m
        tensor, and so on.
        """
        contents = {0: self.contents} if self.contents else {}
        return Tensor(dimensions=(1,) + self.dimensions, identity=self.identity, contents=contents)

    # Protocols

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        if self.dimensions != other.dimensions:
            return False
        if not values_equal(self.identity, other.identity):
            return False

        mine, theirs = self.entries(), other.entries()
        if mine.keys() != theirs.keys():
            return False
        return all(values_equal(value, theirs[coordinates]) for coordinates, value in mine.items())

    __hash__ = None

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the slices along the outermost axis."""
        for index in range(self.dimensions[0]):
            yield self.fetch(index)

    def __contains__(self, element: Any) -> bool:
        raise TypeError("Membership testing is not supported for tensors")

    def map(self, fun: Callable[[Any], Any]) -> 'Tensor':
        """Apply fun to every stored value and to the identity."""
        from .coordinate_mapper import map_values
        return map_values(self, fun)

    def transpose(self, axis_a: int, axis_b: Optional[int] = None) -> 'Tensor':
        """Swap two axes, or the outermost axis with axis_a if only one is given."""
        from .transpose import transpose
        return transpose(self, axis_a, axis_b)

    def slices(self) -> List[Any]:
        """Return every slice along the outermost axis."""
        from .slicing import slices
        return slices(self)

    def __add__(self, other: Any) -> 'Tensor':
        from .arithmetic import add_number
        return add_number(self, other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> 'Tensor':
        from .arithmetic import sub_number
        return sub_number(self, other)

    def __mul__(self, other: Any) -> 'Tensor':
        from .arithmetic import mul_number
        return mul_number(self, other)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> 'Tensor':
        from .arithmetic import div_number
        return div_number(self, other)


def make_tensor(nested_values: Sequence[Any], dimensions: Optional[Sequence[int]] = None,
                identity: Any = _UNSET, config: Optional[TensorConfig] = None) -> Tensor:
    """
    Create a tensor from nested lists.

    Example:
        make_tensor([[1, 2], [3, 4]], [2, 2]).to_list() -> [[1, 2], [3, 4]]
    """
    return Tensor.new(nested_values, dimensions, identity, config)


def make_empty_tensor(dimensions: Sequence[int], identity: Any = 0) -> Tensor:
    """Create a tensor with no stored cells."""
    return Tensor(dimensions=tuple(dimensions), identity=identity, contents={})


def from_array(array: Any, identity: Any = 0) -> Tensor:
    """Create a tensor from a dense numpy array."""
    return Tensor.from_array(array, identity)
