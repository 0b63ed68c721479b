"""
Configuration defaults for sparse tensors.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TensorConfig:
    """
    Defaults used when building and writing tensors.

    Attributes:
        default_identity: Identity used by Tensor.new when none is given
        prune_identity: Drop leaves equal to the identity (and branches
            left empty) whenever a tensor is written
    """
    default_identity: Any = 0
    prune_identity: bool = True


DEFAULT_CONFIG = TensorConfig()
