"""CHIP-8 interpreter.

The core lives in :mod:`pychip8.cpu` (decoder, machine state and execution
engine). The remaining packages are the collaborators around it: memory,
display, keypad, audio, ROM loading, host pacing and the pygame frontend.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__version__ = "0.1.0"

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
