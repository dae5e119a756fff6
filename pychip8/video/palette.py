"""Two-colour palettes: index 0 is the background, index 1 a lit pixel."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

RGBColor = Tuple[int, int, int]
Palette = Tuple[RGBColor, RGBColor]

MONOCHROME: Palette = ((0x00, 0x00, 0x00), (0xFF, 0xFF, 0xFF))
AMBER: Palette = ((0x1A, 0x0F, 0x00), (0xFF, 0xB0, 0x00))
PHOSPHOR: Palette = ((0x00, 0x14, 0x00), (0x33, 0xFF, 0x66))

PALETTES: Dict[str, Palette] = {
    "mono": MONOCHROME,
    "amber": AMBER,
    "green": PHOSPHOR,
}


def _color(value: Sequence[int]) -> RGBColor:
    if len(value) != 3:
        raise ValueError(f"expected an RGB triple, got {tuple(value)!r}")
    red, green, blue = (int(channel) & 0xFF for channel in value)
    return (red, green, blue)


def validate_palette(palette: Sequence[Sequence[int]]) -> Palette:
    """Normalise ``palette`` to two 8-bit RGB triples."""

    if len(palette) != 2:
        raise ValueError("palette needs a background and a foreground colour")
    background, foreground = palette
    return (_color(background), _color(foreground))
