"""
sparsetensor - Sparse, order-polymorphic tensors on nested dicts

This package provides N-dimensional tensors that store only the cells
differing from a default identity value, with indexed access, coordinate
aware mapping, slicing and composition, and axis transposition.
"""

import logging

# Errors
from .errors import (
    TensorError,
    AccessError,
    CollectableError,
    TensorArithmeticError
)

# Configuration
from .config import (
    TensorConfig,
    DEFAULT_CONFIG
)

# Structural utilities
from .sequence_utils import (
    reduce_on_sequence,
    product,
    swap_elements,
    swap_elements_split,
    multiplies
)
from .nested_utils import (
    write_at_path,
    put_at_path,
    get_at_path,
    remove_at_path,
    prune_identity,
    is_identity,
    values_equal
)

# Tensor core
from .tensor import (
    Tensor,
    POP,
    make_tensor,
    make_empty_tensor,
    from_array
)

# Coordinate mapper
from .coordinate_mapper import (
    IDENTITY,
    CoordinateValue,
    map_values,
    sparse_map_with_coordinates,
    dense_map_with_coordinates,
    with_coordinates
)

# Slicing and composition
from .slicing import (
    TensorBuilder,
    slices,
    from_slices,
    push_element,
    collect
)

# Transpose engine
from .transpose import (
    transpose,
    transpose_outer,
    flatten_coordinates,
    inflate
)

# Iteration protocol
from .iteration import (
    Instruction,
    Done,
    Halted,
    Suspended,
    reduce_slices,
    fold_slices,
    count,
    member
)

# Scalar arithmetic
from .arithmetic import (
    add_number,
    sub_number,
    mul_number,
    div_number
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Errors
    'TensorError',
    'AccessError',
    'CollectableError',
    'TensorArithmeticError',

    # Configuration
    'TensorConfig',
    'DEFAULT_CONFIG',

    # Structural utilities
    'reduce_on_sequence',
    'product',
    'swap_elements',
    'swap_elements_split',
    'multiplies',
    'write_at_path',
    'put_at_path',
    'get_at_path',
    'remove_at_path',
    'prune_identity',
    'is_identity',
    'values_equal',

    # Tensor core
    'Tensor',
    'POP',
    'make_tensor',
    'make_empty_tensor',
    'from_array',

    # Coordinate mapper
    'IDENTITY',
    'CoordinateValue',
    'map_values',
    'sparse_map_with_coordinates',
    'dense_map_with_coordinates',
    'with_coordinates',

    # Slicing and composition
    'TensorBuilder',
    'slices',
    'from_slices',
    'push_element',
    'collect',

    # Transpose engine
    'transpose',
    'transpose_outer',
    'flatten_coordinates',
    'inflate',

    # Iteration protocol
    'Instruction',
    'Done',
    'Halted',
    'Suspended',
    'reduce_slices',
    'fold_slices',
    'count',
    'member',

    # Scalar arithmetic
    'add_number',
    'sub_number',
    'mul_number',
    'div_number',
]

__version__ = '0.1.0'
