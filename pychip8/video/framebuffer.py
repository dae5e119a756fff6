"""Monochrome 64x32 framebuffer with XOR sprite drawing."""

from __future__ import annotations

from typing import Sequence

from pychip8.utils import debug_enabled, debug_log

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8


class FrameBuffer:
    """Pixel store the CPU draws into.

    Sprite origins always wrap around the screen. Pixels that run past the
    right or bottom edge are clipped unless ``wrap`` is set, in which case they
    wrap as well.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT, *, wrap: bool = False) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self.width = width
        self.height = height
        self.wrap = wrap
        self._pixels = bytearray(width * height)
        self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))
        self._dirty = True
        if debug_enabled("video"):
            debug_log("video", "clear")

    def draw_sprite(self, x: int, y: int, rows: Sequence[int]) -> bool:
        """XOR an 8-pixel-wide sprite at ``(x, y)``.

        Returns ``True`` if any lit pixel was switched off.
        """

        origin_x = x % self.width
        origin_y = y % self.height
        collision = False
        for row_index, bits in enumerate(rows):
            py = origin_y + row_index
            if py >= self.height:
                if not self.wrap:
                    break
                py %= self.height
            for bit in range(SPRITE_WIDTH):
                if not bits & (0x80 >> bit):
                    continue
                px = origin_x + bit
                if px >= self.width:
                    if not self.wrap:
                        break
                    px %= self.width
                offset = py * self.width + px
                if self._pixels[offset]:
                    collision = True
                self._pixels[offset] ^= 1
        self._dirty = True
        if debug_enabled("video"):
            debug_log("video", "draw x=%d y=%d rows=%d collision=%s", origin_x, origin_y, len(rows), collision)
        return collision

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer")
        return bool(self._pixels[y * self.width + x])

    def lit_count(self) -> int:
        return sum(self._pixels)

    def snapshot(self) -> bytes:
        return bytes(self._pixels)

    def rows(self) -> list[str]:
        """Render as text, ``#`` for lit pixels; used by the debug shell."""

        lines = []
        for y in range(self.height):
            start = y * self.width
            lines.append("".join("#" if value else "." for value in self._pixels[start : start + self.width]))
        return lines
