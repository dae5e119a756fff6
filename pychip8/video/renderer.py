"""Convert the framebuffer into scaled RGB frames for the frontend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import FrameBuffer
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """A rendered frame: ``width * height`` RGB triples in row-major order."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        """Return the frame as a ``pygame.Surface``."""

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scale framebuffer pixels and map them through a two-colour palette."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._background, self._foreground = validate_palette(palette)

    def render(self, framebuffer: FrameBuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")

        background = bytes(self._background)
        foreground = bytes(self._foreground)
        width = framebuffer.width * scale
        height = framebuffer.height * scale
        pixels = framebuffer.snapshot()

        out = bytearray()
        for y in range(framebuffer.height):
            start = y * framebuffer.width
            line = bytearray()
            for value in pixels[start : start + framebuffer.width]:
                line += (foreground if value else background) * scale
            out += bytes(line) * scale
        return RenderResult(width, height, bytes(out))
