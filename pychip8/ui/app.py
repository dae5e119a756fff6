"""Pygame frontend for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional

from pychip8.audio import DEFAULT_TONE_HZ, SoundTimerGate, SquareWaveBeeper
from pychip8.cpu import Quirks, decode
from pychip8.loader import RomLoadError, load_rom_from_path
from pychip8.system import ClockRates, Machine, MachineConfig, SliceResult, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import PALETTES, Renderer

_FRAME_RATE = 120
_MIXER_RATE = 44_100
_SHELL_HELP = (
    "Commands: [Enter]=resume, [c]pu, [m]em [start len], [d]isasm [start count], "
    "[s]creen, [t]race, [n] step, [r]eset, [q]uit"
)


@dataclass
class AppConfig:
    """Configuration for the pygame frontend."""

    rom_path: Optional[Path] = None
    scale: int = 10
    fullscreen: bool = False
    cpu_hz: float = 700
    palette: str = "mono"
    tone_hz: float = DEFAULT_TONE_HZ
    wrap_sprites: bool = False
    quirks: Quirks = field(default_factory=Quirks)


class Chip8App:
    """Window, input, audio and the Esc debug shell around a :class:`Machine`.

    A step error halts execution but keeps the window open so the state can be
    inspected from the shell; F5 resets the machine.
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._halted = False
        self._machine: Machine | None = None
        self._beeper: SquareWaveBeeper | None = None
        self._tone = SoundTimerGate(self._handle_tone, frequency=config.tone_hz)
        self._perf_frame = 0 if debug_enabled("perf") else None
        self._pygame = None
        self._trace = TraceRecorder(512) if debug_enabled("trace") else None
        self._shell_commands: Dict[str, Callable[[Machine, str], bool]] = {
            "c": self._show_cpu,
            "m": self._dump_memory,
            "d": self._dump_disassembly,
            "s": self._show_screen,
            "t": self._dump_trace,
            "n": self._single_step,
            "r": self._shell_reset,
            "q": self._shell_quit,
        }

    @property
    def halted(self) -> bool:
        return self._halted

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        rom_path = self._config.rom_path
        if rom_path is None:
            raise RuntimeError("ROM image is required")
        machine = self._create_machine(rom_path)
        self._machine = machine

        pygame.mixer.pre_init(_MIXER_RATE, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {rom_path.name}")
        self._pygame = pygame
        self._beeper = _open_beeper(pygame)

        renderer = Renderer(PALETTES.get(self._config.palette, PALETTES["mono"]))
        framebuffer = machine.framebuffer
        scale = self._config.scale
        screen = pygame.display.set_mode(
            (framebuffer.width * scale, framebuffer.height * scale),
            pygame.FULLSCREEN if self._config.fullscreen else 0,
        )

        ticker = pygame.time.Clock()
        self._running = True
        previous = time.perf_counter()

        while self._running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                    if self._handle_window_key(machine, event):
                        previous = time.perf_counter()

            now = time.perf_counter()
            elapsed, previous = now - previous, now

            redraw = True
            if not self._halted:
                result = self._run_slice(machine, elapsed)
                redraw = result.redraw
                self._log_perf(result, elapsed)

            if redraw and (framebuffer.dirty or self._halted):
                frame = renderer.render(framebuffer, scale=scale)
                screen.blit(frame.to_surface(), (0, 0))
                pygame.display.flip()
                framebuffer.mark_clean()

            ticker.tick(_FRAME_RATE)

        if self._beeper is not None:
            self._beeper.shutdown()
        pygame.quit()

    def _handle_window_key(self, machine: Machine, event) -> bool:
        """Route one pygame key event; return ``True`` if the loop was paused."""

        pygame = self._pygame
        pressed = event.type == pygame.KEYDOWN
        if pressed and event.key == pygame.K_ESCAPE:
            self._enter_debug_shell(machine)
            return True
        if pressed and event.key == pygame.K_F5:
            self._reset(machine)
            return False
        self._handle_key_event(pygame.key.name(event.key), pressed=pressed)
        return False

    def _create_machine(self, rom_path: Path) -> Machine:
        try:
            rom = load_rom_from_path(rom_path)
        except RomLoadError as exc:
            raise RuntimeError(str(exc)) from exc
        return create_machine(
            MachineConfig(
                rom_image=rom,
                quirks=self._config.quirks,
                rates=ClockRates(cpu_hz=self._config.cpu_hz),
                wrap_sprites=self._config.wrap_sprites,
            )
        )

    def _run_slice(self, machine: Machine, elapsed: float) -> SliceResult:
        observer = self._trace.record_result if self._trace is not None else None
        result = machine.run_slice(elapsed, observer)
        if result.error is None:
            self._tone.update(machine.state.sound_timer)
            return result

        self._halted = True
        self._tone.update(0)
        print(f"Execution halted: {result.error}")
        if self._trace is not None:
            self._trace.dump("trace", limit=32)
        print("Press Esc for the debug menu, F5 to reset.")
        return result

    def _log_perf(self, result: SliceResult, elapsed: float) -> None:
        if self._perf_frame is None or elapsed <= 0:
            return
        self._perf_frame += 1
        debug_log(
            "perf",
            "frame=%d steps=%d timer_ticks=%d frame_ms=%.3f",
            self._perf_frame,
            result.steps,
            result.timer_ticks,
            elapsed * 1000.0,
        )

    def _reset(self, machine: Machine) -> None:
        machine.reset()
        self._halted = False
        self._tone.update(0)
        if self._trace is not None:
            self._trace.clear()
        if debug_enabled("cpu"):
            debug_log("cpu", "reset pc=%04x", machine.state.pc)

    def _handle_key_event(self, name: str, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        key = _canonical_name(name)
        if debug_enabled("input"):
            debug_log("input", "host_key=%s mapped=%s down=%s", name, key, pressed)
        if key is None:
            return
        (machine.keypad.press if pressed else machine.keypad.release)(key)

    def _handle_tone(self, enabled: bool, frequency: float) -> None:
        if self._beeper is not None:
            self._beeper.set_state(enabled, frequency)

    # ------------------------------------------------------------------
    # Debug shell

    def _enter_debug_shell(self, machine: Machine) -> None:
        self._tone.update(0)
        print("\n--- CHIP-8 debug shell ---")
        print(_SHELL_HELP)
        while self._running:
            try:
                line = input("chip8> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not self._run_shell_command(machine, line.strip().lower()):
                break
        print("Resuming.")
        if self._pygame is not None:
            self._pygame.event.clear()

    def _run_shell_command(self, machine: Machine, command: str) -> bool:
        """Execute one shell line; return ``False`` to leave the shell."""

        if not command or command == "resume":
            return False
        name, _, argument = command.partition(" ")
        handler = self._shell_commands.get(name[:1])
        if handler is None:
            print(_SHELL_HELP)
            return True
        return handler(machine, argument.strip())

    def _show_cpu(self, machine: Machine, _: str) -> bool:
        state = machine.state
        print(state.describe())
        print("Stack: " + (" ".join(f"{address:03X}" for address in state.stack.entries()) or "-"))
        held = "".join(f"{key:X}" for key, down in enumerate(machine.keypad.snapshot()) if down)
        print("Keys down: " + (held or "-"))
        return True

    def _show_screen(self, machine: Machine, _: str) -> bool:
        print("\n".join(machine.framebuffer.rows()))
        return True

    def _single_step(self, machine: Machine, _: str) -> bool:
        result = machine.cpu.step()
        suffix = f"  !! {result.error}" if result.error is not None else ""
        print(f"{result.pc:04X}: {result.instruction}{suffix}")
        return True

    def _shell_reset(self, machine: Machine, _: str) -> bool:
        self._reset(machine)
        print("Machine reset.")
        return True

    def _shell_quit(self, machine: Machine, _: str) -> bool:
        self._running = False
        return False

    def _dump_memory(self, machine: Machine, argument: str) -> bool:
        try:
            start, length = _parse_range(argument, default_start=machine.state.i, default_length=0x40)
        except ValueError:
            print("Usage: m [start_hex] [length]")
            return True
        memory = machine.memory
        end = min(start + length, len(memory))
        for address in range(start, end, 16):
            row = memory.load_block(address, min(16, end - address))
            print(f"{address:03X}: " + " ".join(f"{value:02X}" for value in row))
        return True

    def _dump_disassembly(self, machine: Machine, argument: str) -> bool:
        try:
            start, count = _parse_range(argument, default_start=machine.state.pc, default_length=16)
        except ValueError:
            print("Usage: d [start_hex] [count]")
            return True
        memory = machine.memory
        pc = machine.state.pc
        for address in range(start, min(start + 2 * count, len(memory) - 1), 2):
            word = memory.load16(address)
            marker = ">" if address == pc else " "
            print(f"{marker}{address:03X}: {word:04X}  {decode(word)}")
        return True

    def _dump_trace(self, machine: Machine, argument: str) -> bool:
        if self._trace is None:
            print("Tracing is off. Start with CHIP8_DEBUG=trace to record instructions.")
            return True
        lines = self._trace.format_entries(64)
        if not lines:
            print("No instructions recorded yet.")
        for line in lines:
            print(f"  {line}")
        return True


def _open_beeper(pygame) -> SquareWaveBeeper | None:
    if pygame.mixer.get_init() is None:
        try:
            pygame.mixer.init(_MIXER_RATE, -16, 1)
        except pygame.error as exc:  # pragma: no cover - hardware dependent
            debug_log("audio", "no mixer: %s", exc)
            return None
    settings = pygame.mixer.get_init()
    if settings is None:
        return None
    try:
        return SquareWaveBeeper(sample_rate=settings[0])
    except RuntimeError as exc:
        debug_log("audio", "no beeper: %s", exc)
        return None


def _parse_range(argument: str | None, *, default_start: int, default_length: int) -> tuple[int, int]:
    """Parse ``"<start hex> [length]"``; empty input gives the defaults."""

    if not argument:
        return default_start, default_length
    parts = argument.split()
    start = int(parts[0], 16)
    length = int(parts[1], 0) if len(parts) > 1 else default_length
    if start < 0 or length <= 0:
        raise ValueError("range must be positive")
    return start, length


def _canonical_name(name: str) -> str | None:
    """Map a pygame key name to a single keypad character, if it is one."""

    lowered = name.lower()
    if len(lowered) == 3 and lowered[0] == "[" and lowered[2] == "]":
        # numeric keypad keys are named "[1]" etc.
        lowered = lowered[1]
    return lowered if len(lowered) == 1 else None
