"""Memory bus for the CHIP-8 interpreter."""

from .memory import (
    MAX_ROM_SIZE,
    MEMORY_SIZE,
    PROGRAM_ORIGIN,
    BusError,
    Memory,
    OutOfBoundsError,
)

__all__ = [
    "BusError",
    "MAX_ROM_SIZE",
    "MEMORY_SIZE",
    "Memory",
    "OutOfBoundsError",
    "PROGRAM_ORIGIN",
]
