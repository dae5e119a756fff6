"""CPU package for the CHIP-8 interpreter."""

from .core import Chip8CPU, Display, NullDisplay, Quirks, StepResult
from .errors import (
    CPUError,
    InvalidOpcodeError,
    StackOverflowError,
    StackUnderflowError,
    UnsupportedInstructionError,
)
from .opcodes import Instruction, Op, decode
from .state import CallStack, MachineState, StateSnapshot
from . import opcodes

__all__ = [
    "CPUError",
    "CallStack",
    "Chip8CPU",
    "Display",
    "Instruction",
    "InvalidOpcodeError",
    "MachineState",
    "NullDisplay",
    "Op",
    "Quirks",
    "StackOverflowError",
    "StackUnderflowError",
    "StateSnapshot",
    "StepResult",
    "UnsupportedInstructionError",
    "decode",
    "opcodes",
]
