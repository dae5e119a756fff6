"""Input helpers for the CHIP-8 interpreter."""

from .keypad import KEY_COUNT, KEYMAP_TEMPLATE, Keypad

__all__ = [
    "KEY_COUNT",
    "KEYMAP_TEMPLATE",
    "Keypad",
]
