import pytest

from pychip8.cpu import CallStack, MachineState, StackOverflowError, StackUnderflowError
from pychip8.io import Keypad
from pychip8.video import FONT_GLYPHS, FONT_START


def test_from_rom_places_program_and_font() -> None:
    state = MachineState.from_rom(b"\x6A\x05\x7A\x01")

    assert state.pc == 0x200
    assert state.i == 0
    assert state.cycles == 0
    assert bytes(state.registers) == bytes(16)
    assert state.memory.load_block(0x200, 4) == b"\x6A\x05\x7A\x01"
    assert state.memory.load_block(FONT_START, len(FONT_GLYPHS)) == FONT_GLYPHS
    assert len(state.stack) == 0


def test_from_rom_without_font_leaves_low_memory_empty() -> None:
    state = MachineState.from_rom(b"", install_font=False)

    assert state.memory.load_block(0, 0x200) == bytes(0x200)


def test_from_rom_truncates_oversized_image() -> None:
    state = MachineState.from_rom(bytes([0x11]) * 0x1000)

    assert state.memory.load8(0xFFF) == 0x11


def test_from_rom_reuses_given_keypad() -> None:
    keypad = Keypad()

    assert MachineState.from_rom(b"", keypad=keypad).keypad is keypad


def test_register_access_masks_index_and_value() -> None:
    state = MachineState()
    state.write_reg(0x13, 0x1AB)

    assert state.read_reg(3) == 0xAB


def test_set_flag_writes_zero_or_one() -> None:
    state = MachineState()
    state.set_flag(0x80)
    assert state.read_reg(0xF) == 1
    state.set_flag(False)
    assert state.read_reg(0xF) == 0


def test_tick_timers_saturates_at_zero() -> None:
    state = MachineState(delay_timer=3, sound_timer=1)

    state.tick_timers()
    assert (state.delay_timer, state.sound_timer) == (2, 0)
    state.tick_timers(5)
    assert (state.delay_timer, state.sound_timer) == (0, 0)


def test_snapshot_is_detached_copy() -> None:
    state = MachineState()
    state.write_reg(1, 7)
    state.stack.push(0x202)

    snap = state.snapshot()
    state.write_reg(1, 9)

    assert snap.v[1] == 7
    assert snap.sp == 1
    assert snap.pc == 0x200


def test_describe_lists_registers() -> None:
    state = MachineState()
    state.write_reg(0xA, 0x42)

    text = state.describe()

    assert text.startswith("PC=0200 I=0000 SP=0")
    assert "VA=42" in text


def test_call_stack_is_lifo_with_fixed_depth() -> None:
    stack = CallStack()
    for address in range(0x200, 0x220, 2):
        stack.push(address)

    assert len(stack) == stack.capacity == 16
    assert stack.peek() == 0x21E
    with pytest.raises(StackOverflowError):
        stack.push(0x300)
    assert len(stack) == 16

    assert stack.pop() == 0x21E
    assert stack.entries()[0] == 0x200


def test_call_stack_underflow() -> None:
    stack = CallStack(capacity=2)

    assert stack.peek() is None
    with pytest.raises(StackUnderflowError):
        stack.pop()


def test_call_stack_clear() -> None:
    stack = CallStack()
    stack.push(0x300)
    stack.clear()

    assert len(stack) == 0
    assert stack.entries() == ()
