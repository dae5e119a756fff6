"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .clock import ClockRates, ClockTicks, MachineClock
from .machine import Machine, MachineConfig, SliceResult, create_machine

__all__ = [
    "ClockRates",
    "ClockTicks",
    "Machine",
    "MachineClock",
    "MachineConfig",
    "SliceResult",
    "create_machine",
]
