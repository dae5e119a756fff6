"""CHIP-8 hexadecimal keypad handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Conventional mapping of the COSMAC VIP keypad onto a QWERTY block:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEYMAP_TEMPLATE: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


@dataclass
class Keypad:
    """Sixteen key flags shared between the host and the engine.

    The host presses and releases keys; the engine only reads them.
    """

    keymap: Mapping[str, int] = field(default_factory=lambda: dict(KEYMAP_TEMPLATE))
    _pressed: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    _active: Dict[int, int] = field(default_factory=dict)
    _listeners: list[Callable[[int, bool], None]] = field(default_factory=list)

    def press(self, key: int | str) -> None:
        index = self._lookup(key)
        if index is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key)
            return
        before = self._pressed[index]
        self._active[index] = self._active.get(index, 0) + 1
        self._pressed[index] = True
        if debug_enabled("input"):
            debug_log("input", "key_press key=%X", index)
        if not before:
            self._notify_listeners(index, True)

    def release(self, key: int | str) -> None:
        index = self._lookup(key)
        if index is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key)
            return
        count = self._active.get(index, 0)
        before = self._pressed[index]
        if count <= 1:
            self._pressed[index] = False
            self._active.pop(index, None)
        else:
            self._active[index] = count - 1
        if debug_enabled("input"):
            debug_log("input", "key_release key=%X count=%d", index, self._active.get(index, 0))
        if before and not self._pressed[index]:
            self._notify_listeners(index, False)

    def is_pressed(self, key: int) -> bool:
        return self._pressed[key & 0xF]

    def first_pressed(self) -> int | None:
        """Return the lowest pressed key index, or ``None``."""

        for index, pressed in enumerate(self._pressed):
            if pressed:
                return index
        return None

    def reset(self) -> None:
        self._pressed[:] = [False] * KEY_COUNT
        self._active.clear()

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._pressed)

    def add_listener(self, listener: Callable[[int, bool], None]) -> None:
        self._listeners.append(listener)

    def _lookup(self, key: int | str) -> int | None:
        if isinstance(key, int):
            return key & 0xF
        return self.keymap.get(key.lower())

    def _notify_listeners(self, key: int, pressed: bool) -> None:
        for listener in tuple(self._listeners):
            listener(key, pressed)
