"""Built-in hexadecimal font for CHIP-8 programs."""

from __future__ import annotations

from typing import Final

FONT_START: Final[int] = 0x050
FONT_WIDTH: Final[int] = 4
FONT_HEIGHT: Final[int] = 5
GLYPH_BYTES: Final[int] = FONT_HEIGHT

# 4x5 glyphs for 0-F, one byte per row, pixels in the high nibble
FONT_GLYPHS: Final[bytes] = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)


def glyph_address(digit: int) -> int:
    """Return the address of the glyph for the low nibble of ``digit``."""

    return FONT_START + (digit & 0xF) * GLYPH_BYTES


def glyph_rows(digit: int) -> bytes:
    offset = (digit & 0xF) * GLYPH_BYTES
    return FONT_GLYPHS[offset : offset + GLYPH_BYTES]
