"""
Pull-based traversal over the slices of a tensor.

reduce_slices drives a reducer one slice at a time. The reducer answers
every step with an (instruction, accumulator) command: CONT to go on,
HALT to stop right away, or SUSPEND to pause and hand back a resume
function that continues with the remaining slices.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Sequence, Tuple, Union

from .sequence_utils import product
from .slicing import slices
from .tensor import Tensor


class Instruction(Enum):
    """Commands a reducer can give the traversal."""
    CONT = auto()
    HALT = auto()
    SUSPEND = auto()


Command = Tuple[Instruction, Any]


@dataclass(frozen=True)
class Done:
    """All slices were consumed."""
    acc: Any


@dataclass(frozen=True)
class Halted:
    """The reducer stopped the traversal early."""
    acc: Any


@dataclass(frozen=True)
class Suspended:
    """
    The reducer paused the traversal.

    Attributes:
        acc: Accumulator at the time of suspension
        resume: Call with the next command to continue with the
            remaining slices
    """
    acc: Any
    resume: Callable[[Command], 'ReduceResult']


ReduceResult = Union[Done, Halted, Suspended]


def _reduce(remaining: Sequence[Any], command: Command,
            fun: Callable[[Any, Any], Command]) -> ReduceResult:
    position = 0
    while True:
        instruction, acc = command
        if instruction is Instruction.HALT:
            return Halted(acc)
        if instruction is Instruction.SUSPEND:
            rest = remaining[position:]
            return Suspended(acc, lambda next_command: _reduce(rest, next_command, fun))
        if instruction is not Instruction.CONT:
            raise ValueError(f"Unknown instruction {instruction!r}")
        if position >= len(remaining):
            return Done(acc)
        command = fun(remaining[position], acc)
        position += 1


def reduce_slices(tensor: Tensor, command: Command,
                  fun: Callable[[Any, Any], Command]) -> ReduceResult:
    """
    Reduce over the slices of a tensor with early exit and suspension.

    Args:
        tensor: Tensor whose slices are traversed in order
        command: Initial (instruction, accumulator) command
        fun: Reducer taking (slice, accumulator) and returning the next
            command

    Returns:
        Done, Halted or Suspended with the accumulator
    """
    return _reduce(slices(tensor), command, fun)


def fold_slices(tensor: Tensor, acc: Any, fun: Callable[[Any, Any], Command]) -> Any:
    """
    Run a reduction over the slices to its end and return the accumulator.

    Suspensions are resumed immediately.
    """
    result = reduce_slices(tensor, (Instruction.CONT, acc), fun)
    while isinstance(result, Suspended):
        result = result.resume((Instruction.CONT, result.acc))
    return result.acc


def count(tensor: Tensor) -> int:
    """Number of logical cells: the product of all dimensions."""
    return product(tensor.dimensions)


def member(tensor: Tensor, element: Any) -> bool:
    """Membership cannot be computed for a sparse tensor."""
    raise TypeError("Membership testing is not supported for tensors")
