"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_GLYPHS, FONT_HEIGHT, FONT_START, FONT_WIDTH, glyph_address
from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, FrameBuffer
from .palette import AMBER, MONOCHROME, PALETTES, PHOSPHOR, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "AMBER",
    "FONT_GLYPHS",
    "FONT_HEIGHT",
    "FONT_START",
    "FONT_WIDTH",
    "FrameBuffer",
    "MONOCHROME",
    "PALETTES",
    "PHOSPHOR",
    "RenderResult",
    "Renderer",
    "SCREEN_HEIGHT",
    "SCREEN_WIDTH",
    "glyph_address",
    "validate_palette",
]
