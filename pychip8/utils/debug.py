"""Category-filtered debug output for the CHIP-8 interpreter.

Categories are read once from ``CHIP8_DEBUG`` (comma separated, ``all`` turns
everything on) and cached; call :func:`reload_categories` after changing the
environment.
"""

from __future__ import annotations

import os
from typing import FrozenSet, Optional

ENV_VAR = "CHIP8_DEBUG"
_PREFIX = "CHIP8"

_cached: Optional[FrozenSet[str]] = None


def parse_categories(value: str) -> FrozenSet[str]:
    return frozenset(token.strip().lower() for token in value.split(",") if token.strip())


def _categories() -> FrozenSet[str]:
    global _cached
    if _cached is None:
        _cached = parse_categories(os.environ.get(ENV_VAR, ""))
    return _cached


def reload_categories() -> set[str]:
    global _cached
    _cached = None
    return set(_categories())


def debug_enabled(category: str | None = None) -> bool:
    active = _categories()
    if not active:
        return False
    return category is None or "all" in active or category.lower() in active


def _render(message: str, args: tuple) -> str:
    if not args:
        return message
    try:
        return message % args
    except (TypeError, ValueError):
        return f"{message} {args!r}"


def debug_log(category: str, message: str, *args) -> None:
    if debug_enabled(category):
        print(f"[{_PREFIX}][{category}] {_render(message, args)}")


__all__ = ["ENV_VAR", "debug_enabled", "debug_log", "parse_categories", "reload_categories"]
