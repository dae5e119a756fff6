"""CHIP-8 machine state: registers, memory, call stack, timers and keypad."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from pychip8.bus import PROGRAM_ORIGIN, Memory
from pychip8.io import Keypad
from pychip8.video.font import FONT_GLYPHS, FONT_START

from .errors import StackOverflowError, StackUnderflowError

REGISTER_COUNT: Final[int] = 0x10
STACK_DEPTH: Final[int] = 16
FLAG_REGISTER: Final[int] = 0xF


class CallStack:
    """Fixed-capacity return address stack.

    Slots are preallocated; ``_top`` is the number of occupied slots.
    """

    def __init__(self, capacity: int = STACK_DEPTH) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._slots = [0] * capacity
        self._top = 0

    def __len__(self) -> int:
        return self._top

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def push(self, address: int) -> None:
        if self._top >= len(self._slots):
            raise StackOverflowError(f"call stack overflow (depth {len(self._slots)})")
        self._slots[self._top] = address
        self._top += 1

    def pop(self) -> int:
        if self._top == 0:
            raise StackUnderflowError("call stack underflow")
        self._top -= 1
        return self._slots[self._top]

    def peek(self) -> int | None:
        if self._top == 0:
            return None
        return self._slots[self._top - 1]

    def entries(self) -> tuple[int, ...]:
        """Return the occupied slots, bottom first."""

        return tuple(self._slots[: self._top])

    def clear(self) -> None:
        self._top = 0


@dataclass(frozen=True)
class StateSnapshot:
    """Immutable copy of the register file used for tracing."""

    pc: int
    i: int
    v: tuple[int, ...]
    sp: int
    delay_timer: int
    sound_timer: int
    cycles: int


@dataclass
class MachineState:
    """Everything the execution engine mutates."""

    memory: Memory = field(default_factory=Memory)
    registers: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0
    pc: int = PROGRAM_ORIGIN
    stack: CallStack = field(default_factory=CallStack)
    delay_timer: int = 0
    sound_timer: int = 0
    keypad: Keypad = field(default_factory=Keypad)
    cycles: int = 0

    @classmethod
    def from_rom(
        cls,
        rom: bytes,
        *,
        keypad: Keypad | None = None,
        install_font: bool = True,
    ) -> "MachineState":
        """Build a fresh state with ``rom`` copied to the program origin.

        Oversized images are truncated to the memory that is left.
        """

        memory = Memory()
        if install_font:
            memory.load_image(FONT_GLYPHS, FONT_START)
        memory.load_image(bytes(rom), PROGRAM_ORIGIN)
        return cls(memory=memory, keypad=keypad or Keypad())

    def read_reg(self, index: int) -> int:
        return self.registers[index & 0xF]

    def write_reg(self, index: int, value: int) -> None:
        self.registers[index & 0xF] = value & 0xFF

    def set_flag(self, value: int | bool) -> None:
        self.registers[FLAG_REGISTER] = 1 if value else 0

    def tick_timers(self, ticks: int = 1) -> None:
        """Count both timers down by ``ticks``, stopping at zero."""

        if ticks <= 0:
            return
        self.delay_timer = max(0, self.delay_timer - ticks)
        self.sound_timer = max(0, self.sound_timer - ticks)

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            pc=self.pc,
            i=self.i,
            v=tuple(self.registers),
            sp=len(self.stack),
            delay_timer=self.delay_timer,
            sound_timer=self.sound_timer,
            cycles=self.cycles,
        )

    def describe(self) -> str:
        """Multi-line register dump for the debug shell."""

        lines = [f"PC={self.pc:04X} I={self.i:04X} SP={len(self.stack)} DT={self.delay_timer:02X} ST={self.sound_timer:02X}"]
        for row in range(0, REGISTER_COUNT, 4):
            lines.append(
                "  " + " ".join(f"V{index:X}={self.registers[index]:02X}" for index in range(row, row + 4))
            )
        return "\n".join(lines)


__all__ = [
    "CallStack",
    "FLAG_REGISTER",
    "MachineState",
    "REGISTER_COUNT",
    "STACK_DEPTH",
    "StateSnapshot",
]
