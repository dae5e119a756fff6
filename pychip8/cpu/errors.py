"""Execution errors raised by the CHIP-8 engine."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for CPU-related failures."""


class InvalidOpcodeError(CPUError):
    """Raised when the fetched word matches no known instruction."""

    def __init__(self, word: int, address: int | None = None) -> None:
        where = "" if address is None else f" at {address:#06x}"
        super().__init__(f"unknown instruction {word:#06x}{where}")
        self.word = word
        self.address = address


class UnsupportedInstructionError(CPUError):
    """Raised for legacy ``0NNN`` machine-code calls."""

    def __init__(self, word: int, address: int | None = None) -> None:
        where = "" if address is None else f" at {address:#06x}"
        super().__init__(f"RCA 1802 call {word:#06x} unsupported{where}")
        self.word = word
        self.address = address


class StackOverflowError(CPUError):
    """Raised when a call is made with the call stack full."""


class StackUnderflowError(CPUError):
    """Raised when returning with an empty call stack."""


__all__ = [
    "CPUError",
    "InvalidOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnsupportedInstructionError",
]
