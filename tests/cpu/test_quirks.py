"""Behaviour switched by :class:`pychip8.cpu.Quirks`."""

from pychip8.cpu import Chip8CPU, MachineState, Quirks


def _cpu(program: bytes, **quirks) -> Chip8CPU:
    return Chip8CPU(MachineState.from_rom(program), quirks=Quirks(**quirks))


def test_shift_reads_vy_when_enabled() -> None:
    cpu = _cpu(bytes([0x81, 0x26]), shift_uses_vy=True)
    cpu.state.write_reg(1, 0xFF)
    cpu.state.write_reg(2, 0b0000_0011)

    cpu.step().raise_for_error()

    assert cpu.state.read_reg(1) == 0b0000_0001
    assert cpu.state.read_reg(0xF) == 1


def test_load_store_advance_i_when_enabled() -> None:
    cpu = _cpu(bytes([0xA3, 0x00, 0xF2, 0x55, 0xF1, 0x65]), load_store_increments_i=True)

    cpu.step().raise_for_error()
    cpu.step().raise_for_error()
    assert cpu.state.i == 0x303

    cpu.step().raise_for_error()
    assert cpu.state.i == 0x305


def test_logic_resets_vf_when_enabled() -> None:
    cpu = _cpu(bytes([0x6F, 0x05, 0x81, 0x22]), logic_resets_vf=True)

    cpu.step().raise_for_error()
    cpu.step().raise_for_error()

    assert cpu.state.read_reg(0xF) == 0


def test_jump_uses_vx_when_enabled() -> None:
    cpu = _cpu(bytes([0x63, 0x10, 0x60, 0x01, 0xB3, 0x40]), jump_uses_vx=True)

    for _ in range(3):
        cpu.step().raise_for_error()

    assert cpu.state.pc == 0x350


def test_timers_tick_per_step_when_enabled() -> None:
    cpu = _cpu(bytes([0x60, 0x05, 0xF0, 0x15, 0x12, 0x04]), timers_tick_per_step=True)

    for _ in range(4):
        cpu.step().raise_for_error()

    # set on step two, then ticked on steps two, three and four
    assert cpu.state.delay_timer == 2


def test_failed_step_does_not_tick_timers() -> None:
    cpu = _cpu(bytes([0x00, 0xEE]), timers_tick_per_step=True)
    cpu.state.delay_timer = 4

    assert not cpu.step().ok
    assert cpu.state.delay_timer == 4
