import pytest

from pychip8.bus import MAX_ROM_SIZE, MEMORY_SIZE, PROGRAM_ORIGIN, BusError, Memory, OutOfBoundsError


def test_memory_defaults_to_four_kib() -> None:
    memory = Memory()

    assert len(memory) == MEMORY_SIZE == 0x1000
    assert MAX_ROM_SIZE == 0x1000 - PROGRAM_ORIGIN
    assert memory.snapshot() == bytes(0x1000)


def test_words_are_big_endian() -> None:
    memory = Memory()
    memory.store16(0x300, 0xABCD)

    assert memory.load8(0x300) == 0xAB
    assert memory.load8(0x301) == 0xCD
    assert memory.load16(0x300) == 0xABCD


def test_store8_masks_value() -> None:
    memory = Memory()
    memory.store8(0x10, 0x1FF)

    assert memory.load8(0x10) == 0xFF


@pytest.mark.parametrize("address", [-1, 0x1000, 0x2000])
def test_byte_access_outside_range_raises(address: int) -> None:
    memory = Memory()

    with pytest.raises(OutOfBoundsError):
        memory.load8(address)
    with pytest.raises(OutOfBoundsError):
        memory.store8(address, 0)


def test_word_read_straddling_end_raises() -> None:
    memory = Memory()

    with pytest.raises(OutOfBoundsError) as excinfo:
        memory.load16(0xFFF)

    assert excinfo.value.address == 0x1000
    assert excinfo.value.access == "read"
    assert isinstance(excinfo.value, BusError)


def test_failed_block_store_leaves_memory_untouched() -> None:
    memory = Memory()

    with pytest.raises(OutOfBoundsError):
        memory.store_block(0xFFE, [1, 2, 3])

    assert memory.load_block(0xFFE, 2) == b"\x00\x00"


def test_block_round_trip() -> None:
    memory = Memory()
    memory.store_block(0x400, [0x01, 0x102, 0x03])

    assert memory.load_block(0x400, 3) == b"\x01\x02\x03"


def test_load_image_truncates_at_end() -> None:
    memory = Memory()

    copied = memory.load_image(bytes([0xAA]) * (MAX_ROM_SIZE + 10))

    assert copied == MAX_ROM_SIZE
    assert memory.load8(0xFFF) == 0xAA
    assert memory.load8(PROGRAM_ORIGIN - 1) == 0


def test_load_image_rejects_bad_start() -> None:
    memory = Memory()

    with pytest.raises(OutOfBoundsError):
        memory.load_image(b"\x00", start=0x1001)
