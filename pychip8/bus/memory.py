"""Flat CHIP-8 memory.

The interpreter sees a single 4 KiB address space. Everything below the
program origin is reserved for the interpreter itself (the built-in font lives
there); ROM images are copied verbatim starting at ``PROGRAM_ORIGIN``.
"""

from __future__ import annotations

from typing import Iterable

MEMORY_SIZE = 0x1000
PROGRAM_ORIGIN = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_ORIGIN


class BusError(Exception):
    """Raised when memory is used incorrectly."""


class OutOfBoundsError(BusError):
    """Raised for reads or writes outside the 4 KiB address space."""

    def __init__(self, address: int, access: str = "access") -> None:
        super().__init__(f"invalid memory {access} at {address:#06x}")
        self.address = address
        self.access = access


class Memory:
    """Byte-addressable, bounds-checked memory block."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        if size <= 0:
            raise BusError("memory must have a positive size")
        self._data = bytearray(size)

    def __len__(self) -> int:
        return len(self._data)

    def _check(self, address: int, length: int, access: str) -> None:
        if address < 0 or length < 0:
            raise OutOfBoundsError(address, access)
        end = address + length
        if end > len(self._data):
            # report the first address that falls outside
            raise OutOfBoundsError(max(address, len(self._data)), access)

    def load8(self, address: int) -> int:
        self._check(address, 1, "read")
        return self._data[address]

    def store8(self, address: int, value: int) -> None:
        self._check(address, 1, "write")
        self._data[address] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word from ``address`` and ``address + 1``."""

        self._check(address, 2, "read")
        return (self._data[address] << 8) | self._data[address + 1]

    def store16(self, address: int, value: int) -> None:
        self._check(address, 2, "write")
        self._data[address] = (value >> 8) & 0xFF
        self._data[address + 1] = value & 0xFF

    def load_block(self, address: int, length: int) -> bytes:
        self._check(address, length, "read")
        return bytes(self._data[address : address + length])

    def store_block(self, address: int, values: Iterable[int]) -> None:
        """Write ``values`` starting at ``address``.

        The whole range is validated first, so a failing write leaves memory
        untouched.
        """

        payload = bytes(value & 0xFF for value in values)
        self._check(address, len(payload), "write")
        self._data[address : address + len(payload)] = payload

    def load_image(self, data: bytes, start: int = PROGRAM_ORIGIN) -> int:
        """Copy ``data`` to ``start``, truncating at the end of memory.

        Returns the number of bytes copied.
        """

        if not 0 <= start <= len(self._data):
            raise OutOfBoundsError(start, "write")
        length = min(len(data), len(self._data) - start)
        self._data[start : start + length] = data[:length]
        return length

    def snapshot(self) -> bytes:
        return bytes(self._data)


__all__ = [
    "BusError",
    "MAX_ROM_SIZE",
    "MEMORY_SIZE",
    "Memory",
    "OutOfBoundsError",
    "PROGRAM_ORIGIN",
]
