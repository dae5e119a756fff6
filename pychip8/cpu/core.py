"""CHIP-8 execution engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Protocol, Sequence

from pychip8.bus import BusError
from pychip8.video.font import glyph_address

from .errors import CPUError, InvalidOpcodeError, UnsupportedInstructionError
from .opcodes import Instruction, Op, decode
from .state import MachineState

INSTRUCTION_SIZE = 2
SKIP = INSTRUCTION_SIZE * 2
STAY = 0


class Display(Protocol):
    """What the engine needs from the display collaborator."""

    def clear(self) -> None:
        ...

    def draw_sprite(self, x: int, y: int, rows: Sequence[int]) -> bool:
        """XOR ``rows`` onto the screen; return ``True`` if a pixel was erased."""
        ...


class NullDisplay:
    """Display that ignores draw requests. Used when running headless."""

    def clear(self) -> None:
        return None

    def draw_sprite(self, x: int, y: int, rows: Sequence[int]) -> bool:
        return False


def default_random_byte() -> int:
    return random.randrange(0x100)


@dataclass
class Quirks:
    """Compatibility switches for behaviour that differs between interpreters."""

    shift_uses_vy: bool = False
    load_store_increments_i: bool = False
    logic_resets_vf: bool = False
    jump_uses_vx: bool = False
    timers_tick_per_step: bool = False


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single :meth:`Chip8CPU.step` call."""

    pc: int
    word: int | None = None
    instruction: Instruction | None = None
    advance: int = 0
    error: CPUError | BusError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def waiting(self) -> bool:
        """True when the instruction asked to be executed again."""

        return (
            self.ok
            and self.instruction is not None
            and self.instruction.op is Op.AWAIT_KEY
            and self.advance == STAY
        )

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


@dataclass
class Chip8CPU:
    """Fetch/decode/execute loop over a :class:`MachineState`.

    Every handler returns how far the program counter moves once it is done:
    ``INSTRUCTION_SIZE`` by default, ``SKIP`` for a taken skip and ``STAY`` when
    the handler set PC itself (or is waiting for a key).
    """

    state: MachineState
    display: Display = field(default_factory=NullDisplay)
    random_byte: Callable[[], int] = default_random_byte
    quirks: Quirks = field(default_factory=Quirks)

    def reset(self, rom: bytes) -> None:
        """Rebuild the machine state from ``rom``, keeping the same keypad."""

        self.state = MachineState.from_rom(rom, keypad=self.state.keypad)
        self.display.clear()

    def fetch(self) -> int:
        return self.state.memory.load16(self.state.pc)

    def step(self) -> StepResult:
        """Execute a single instruction.

        Errors are returned in the result instead of raised; a failed step
        leaves PC, the cycle counter and the timers where they were.
        """

        state = self.state
        pc_before = state.pc
        word: int | None = None
        instruction: Instruction | None = None
        try:
            word = self.fetch()
            instruction = decode(word)
            handler = getattr(self, instruction.handler)
            advance = handler(instruction)
        except (CPUError, BusError) as exc:
            state.pc = pc_before
            return StepResult(pc=pc_before, word=word, instruction=instruction, error=exc)

        if self.quirks.timers_tick_per_step:
            state.tick_timers(1)
        state.pc += advance
        state.cycles += 1
        return StepResult(pc=pc_before, word=word, instruction=instruction, advance=advance)

    def run(self, max_steps: int) -> StepResult | None:
        """Step up to ``max_steps`` times, stopping at the first error."""

        result: StepResult | None = None
        for _ in range(max_steps):
            result = self.step()
            if not result.ok:
                break
        return result

    def tick_timers(self, ticks: int = 1) -> None:
        self.state.tick_timers(ticks)

    # ------------------------------------------------------------------
    # Flow control

    def op_sys(self, instruction: Instruction) -> int:
        raise UnsupportedInstructionError(instruction.word, self.state.pc)

    def op_unknown(self, instruction: Instruction) -> int:
        raise InvalidOpcodeError(instruction.word, self.state.pc)

    def op_clear_screen(self, _: Instruction) -> int:
        self.display.clear()
        return INSTRUCTION_SIZE

    def op_return(self, _: Instruction) -> int:
        self.state.pc = self.state.stack.pop()
        return STAY

    def op_jump(self, instruction: Instruction) -> int:
        self.state.pc = instruction.nnn
        return STAY

    def op_call(self, instruction: Instruction) -> int:
        self.state.stack.push(self.state.pc + INSTRUCTION_SIZE)
        self.state.pc = instruction.nnn
        return STAY

    def op_jump_indirect(self, instruction: Instruction) -> int:
        offset_reg = instruction.x if self.quirks.jump_uses_vx else 0
        self.state.pc = instruction.nnn + self.state.read_reg(offset_reg)
        return STAY

    # ------------------------------------------------------------------
    # Conditional skips

    def op_skip_eq(self, instruction: Instruction) -> int:
        return self._skip_if(self.state.read_reg(instruction.x) == instruction.kk)

    def op_skip_ne(self, instruction: Instruction) -> int:
        return self._skip_if(self.state.read_reg(instruction.x) != instruction.kk)

    def op_skip_reg_eq(self, instruction: Instruction) -> int:
        return self._skip_if(self.state.read_reg(instruction.x) == self.state.read_reg(instruction.y))

    def op_skip_reg_ne(self, instruction: Instruction) -> int:
        return self._skip_if(self.state.read_reg(instruction.x) != self.state.read_reg(instruction.y))

    def op_skip_key(self, instruction: Instruction) -> int:
        return self._skip_if(self.state.keypad.is_pressed(self.state.read_reg(instruction.x)))

    def op_skip_not_key(self, instruction: Instruction) -> int:
        return self._skip_if(not self.state.keypad.is_pressed(self.state.read_reg(instruction.x)))

    # ------------------------------------------------------------------
    # Register arithmetic

    def op_set_reg(self, instruction: Instruction) -> int:
        self.state.write_reg(instruction.x, instruction.kk)
        return INSTRUCTION_SIZE

    def op_add_const(self, instruction: Instruction) -> int:
        value = self.state.read_reg(instruction.x) + instruction.kk
        self.state.write_reg(instruction.x, value & 0xFF)
        return INSTRUCTION_SIZE

    def op_copy_reg(self, instruction: Instruction) -> int:
        self.state.write_reg(instruction.x, self.state.read_reg(instruction.y))
        return INSTRUCTION_SIZE

    def op_or_reg(self, instruction: Instruction) -> int:
        return self._logic(instruction, lambda a, b: a | b)

    def op_and_reg(self, instruction: Instruction) -> int:
        return self._logic(instruction, lambda a, b: a & b)

    def op_xor_reg(self, instruction: Instruction) -> int:
        return self._logic(instruction, lambda a, b: a ^ b)

    def op_add_reg(self, instruction: Instruction) -> int:
        total = self.state.read_reg(instruction.x) + self.state.read_reg(instruction.y)
        self.state.write_reg(instruction.x, total & 0xFF)
        self.state.set_flag(total > 0xFF)
        return INSTRUCTION_SIZE

    def op_sub_reg(self, instruction: Instruction) -> int:
        a = self.state.read_reg(instruction.x)
        b = self.state.read_reg(instruction.y)
        self.state.write_reg(instruction.x, (a - b) & 0xFF)
        self.state.set_flag(a >= b)
        return INSTRUCTION_SIZE

    def op_sub_reg_rev(self, instruction: Instruction) -> int:
        a = self.state.read_reg(instruction.x)
        b = self.state.read_reg(instruction.y)
        self.state.write_reg(instruction.x, (b - a) & 0xFF)
        self.state.set_flag(b >= a)
        return INSTRUCTION_SIZE

    def op_shr_reg(self, instruction: Instruction) -> int:
        value = self._shift_source(instruction)
        self.state.write_reg(instruction.x, value >> 1)
        self.state.set_flag(value & 0x01)
        return INSTRUCTION_SIZE

    def op_shl_reg(self, instruction: Instruction) -> int:
        value = self._shift_source(instruction)
        self.state.write_reg(instruction.x, (value << 1) & 0xFF)
        self.state.set_flag((value >> 7) & 0x01)
        return INSTRUCTION_SIZE

    def op_random(self, instruction: Instruction) -> int:
        value = self.random_byte() & 0xFF
        self.state.write_reg(instruction.x, value & instruction.kk)
        return INSTRUCTION_SIZE

    # ------------------------------------------------------------------
    # Address register and memory

    def op_set_i(self, instruction: Instruction) -> int:
        self.state.i = instruction.nnn
        return INSTRUCTION_SIZE

    def op_add_i(self, instruction: Instruction) -> int:
        self.state.i = (self.state.i + self.state.read_reg(instruction.x)) & 0xFFFF
        return INSTRUCTION_SIZE

    def op_font_sprite(self, instruction: Instruction) -> int:
        self.state.i = glyph_address(self.state.read_reg(instruction.x))
        return INSTRUCTION_SIZE

    def op_store_bcd(self, instruction: Instruction) -> int:
        value = self.state.read_reg(instruction.x)
        digits = (value // 100 % 10, value // 10 % 10, value % 10)
        self.state.memory.store_block(self.state.i, digits)
        return INSTRUCTION_SIZE

    def op_store_regs(self, instruction: Instruction) -> int:
        count = instruction.x + 1
        self.state.memory.store_block(self.state.i, self.state.registers[:count])
        self._advance_i_after_transfer(count)
        return INSTRUCTION_SIZE

    def op_load_regs(self, instruction: Instruction) -> int:
        count = instruction.x + 1
        values = self.state.memory.load_block(self.state.i, count)
        self.state.registers[:count] = values
        self._advance_i_after_transfer(count)
        return INSTRUCTION_SIZE

    # ------------------------------------------------------------------
    # Timers, keypad and display

    def op_read_delay(self, instruction: Instruction) -> int:
        self.state.write_reg(instruction.x, self.state.delay_timer & 0xFF)
        return INSTRUCTION_SIZE

    def op_set_delay(self, instruction: Instruction) -> int:
        self.state.delay_timer = self.state.read_reg(instruction.x)
        return INSTRUCTION_SIZE

    def op_set_sound(self, instruction: Instruction) -> int:
        self.state.sound_timer = self.state.read_reg(instruction.x)
        return INSTRUCTION_SIZE

    def op_await_key(self, instruction: Instruction) -> int:
        key = self.state.keypad.first_pressed()
        if key is None:
            return STAY
        self.state.write_reg(instruction.x, key)
        return INSTRUCTION_SIZE

    def op_draw(self, instruction: Instruction) -> int:
        rows = self.state.memory.load_block(self.state.i, instruction.n)
        x = self.state.read_reg(instruction.x)
        y = self.state.read_reg(instruction.y)
        collision = self.display.draw_sprite(x, y, rows)
        self.state.set_flag(collision)
        return INSTRUCTION_SIZE

    # ------------------------------------------------------------------
    # Helpers

    def _skip_if(self, condition: bool) -> int:
        return SKIP if condition else INSTRUCTION_SIZE

    def _logic(self, instruction: Instruction, operation: Callable[[int, int], int]) -> int:
        a = self.state.read_reg(instruction.x)
        b = self.state.read_reg(instruction.y)
        self.state.write_reg(instruction.x, operation(a, b))
        if self.quirks.logic_resets_vf:
            self.state.set_flag(False)
        return INSTRUCTION_SIZE

    def _shift_source(self, instruction: Instruction) -> int:
        # Vy is decoded for every shift but only read with the quirk enabled.
        if self.quirks.shift_uses_vy:
            return self.state.read_reg(instruction.y)
        return self.state.read_reg(instruction.x)

    def _advance_i_after_transfer(self, count: int) -> None:
        if self.quirks.load_store_increments_i:
            self.state.i = (self.state.i + count) & 0xFFFF


__all__ = [
    "Chip8CPU",
    "Display",
    "INSTRUCTION_SIZE",
    "NullDisplay",
    "Quirks",
    "SKIP",
    "STAY",
    "StepResult",
    "default_random_byte",
]
