"""Integration tests for the assembled machine."""

from pychip8.cpu import Quirks, StackUnderflowError
from pychip8.system import ClockRates, MachineConfig, create_machine


def _words(*words: int) -> bytes:
    return b"".join(word.to_bytes(2, "big") for word in words)


DELAY_LOOP = _words(0x6010, 0xF015, 0x1204)


def _machine(rom: bytes, **kwargs):
    return create_machine(MachineConfig(rom_image=rom, rates=ClockRates(cpu_hz=12), **kwargs))


def test_timers_follow_wall_clock_not_instruction_count() -> None:
    machine = _machine(DELAY_LOOP)

    result = machine.run_slice(0.25)

    assert result.steps == 3
    assert result.timer_ticks == 15
    assert result.redraw
    assert result.error is None
    assert machine.state.delay_timer == 0x10 - 15


def test_per_step_timers_ignore_wall_clock() -> None:
    machine = _machine(DELAY_LOOP, quirks=Quirks(timers_tick_per_step=True))

    result = machine.run_slice(0.25)

    assert result.timer_ticks == 0
    assert machine.state.delay_timer == 0x10 - 2


def test_slice_stops_at_first_error() -> None:
    machine = _machine(_words(0x6001, 0x00EE, 0x6002))

    result = machine.run_slice(0.25)

    assert result.steps == 1
    assert isinstance(result.error, StackUnderflowError)
    assert machine.state.pc == 0x202
    assert machine.state.read_reg(0) == 1


def test_observer_sees_state_before_each_step() -> None:
    machine = _machine(DELAY_LOOP)
    seen = []

    machine.run_slice(0.25, lambda before, result: seen.append((before.pc, result.pc, before.delay_timer)))

    assert seen == [(0x200, 0x200, 0), (0x202, 0x202, 0), (0x204, 0x204, 0x10)]


def test_zero_elapsed_does_nothing() -> None:
    machine = _machine(DELAY_LOOP)

    result = machine.run_slice(0.0)

    assert result.steps == 0
    assert result.last is None
    assert result.error is None
    assert not result.redraw


def test_reset_reloads_rom_and_releases_keys() -> None:
    machine = _machine(DELAY_LOOP)
    machine.run_slice(0.25)
    machine.keypad.press(3)

    machine.reset()

    assert machine.state.pc == 0x200
    assert machine.state.delay_timer == 0
    assert machine.state.keypad is machine.keypad
    assert not machine.keypad.is_pressed(3)
    assert machine.memory.load_block(0x200, len(DELAY_LOOP)) == DELAY_LOOP


def test_create_machine_wires_collaborators() -> None:
    machine = _machine(_words(0xC0FF, 0xA050, 0xD005), random_byte=lambda: 0x5A, wrap_sprites=True)

    machine.run_slice(0.25)

    assert machine.state.read_reg(0) == 0x5A
    assert machine.framebuffer.wrap
    assert machine.cpu.display is machine.framebuffer
    assert machine.framebuffer.lit_count() == 14
