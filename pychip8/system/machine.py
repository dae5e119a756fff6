"""CHIP-8 machine assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.bus import Memory
from pychip8.cpu import Chip8CPU, MachineState, Quirks, StateSnapshot, StepResult
from pychip8.cpu.core import default_random_byte
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import FrameBuffer

from .clock import ClockRates, MachineClock

StepObserver = Callable[[StateSnapshot, StepResult], None]

_LOG_EVERY_CYCLES = 10_000


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    rom_image: bytes = b""
    quirks: Quirks = field(default_factory=Quirks)
    rates: ClockRates = field(default_factory=ClockRates)
    random_byte: Optional[Callable[[], int]] = None
    wrap_sprites: bool = False
    keypad: Keypad | None = None


@dataclass(frozen=True)
class SliceResult:
    """What happened during one :meth:`Machine.run_slice` call."""

    steps: int
    timer_ticks: int
    redraw: bool
    last: StepResult | None = None

    @property
    def error(self):
        if self.last is None:
            return None
        return self.last.error


@dataclass
class Machine:
    """Aggregates the core and its collaborators."""

    cpu: Chip8CPU
    framebuffer: FrameBuffer
    keypad: Keypad
    clock: MachineClock
    rom_image: bytes

    @property
    def state(self) -> MachineState:
        return self.cpu.state

    @property
    def memory(self) -> Memory:
        return self.cpu.state.memory

    def reset(self) -> None:
        """Start over from the original ROM image."""

        self.keypad.reset()
        self.cpu.reset(self.rom_image)
        self.clock.reset()

    def run_slice(self, elapsed: float, observer: StepObserver | None = None) -> SliceResult:
        """Advance the machine by ``elapsed`` seconds of wall-clock time.

        Stops at the first failing step; the error is reported in the result.
        """

        ticks = self.clock.advance(elapsed)
        steps = 0
        last: StepResult | None = None
        for _ in range(ticks.cpu_steps):
            before = self.cpu.state.snapshot() if observer is not None else None
            last = self.cpu.step()
            if observer is not None and before is not None:
                observer(before, last)
            if not last.ok:
                break
            steps += 1
            if debug_enabled("cpu") and self.cpu.state.cycles % _LOG_EVERY_CYCLES == 0:
                debug_log(
                    "cpu",
                    "cycle=%d pc=%04x last=%s",
                    self.cpu.state.cycles,
                    last.pc,
                    last.instruction,
                )

        timer_ticks = 0
        if not self.cpu.quirks.timers_tick_per_step:
            timer_ticks = ticks.timer_ticks
            self.cpu.tick_timers(timer_ticks)

        return SliceResult(
            steps=steps,
            timer_ticks=timer_ticks,
            redraw=ticks.refreshes > 0,
            last=last,
        )


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    keypad = config.keypad or Keypad()
    framebuffer = FrameBuffer(wrap=config.wrap_sprites)
    state = MachineState.from_rom(config.rom_image, keypad=keypad)
    cpu = Chip8CPU(
        state,
        display=framebuffer,
        random_byte=config.random_byte or default_random_byte,
        quirks=config.quirks,
    )
    return Machine(
        cpu=cpu,
        framebuffer=framebuffer,
        keypad=keypad,
        clock=MachineClock(config.rates),
        rom_image=bytes(config.rom_image),
    )
