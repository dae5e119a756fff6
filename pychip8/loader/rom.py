"""Raw ROM image loading."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MAX_ROM_SIZE
from pychip8.utils import debug_enabled, debug_log


class RomLoadError(RuntimeError):
    """Raised when a ROM image cannot be read."""


def load_rom(stream: BinaryIO) -> bytes:
    """Read a raw ROM image from ``stream``.

    The bytes are returned untouched; images larger than the program area are
    truncated later when copied into memory.
    """

    try:
        data = stream.read()
    except OSError as exc:
        raise RomLoadError(f"failed to read ROM: {exc}") from exc
    if data is None:
        raise RomLoadError("ROM stream returned no data")
    if debug_enabled("rom") and len(data) > MAX_ROM_SIZE:
        debug_log("rom", "truncating image size=%d limit=%d", len(data), MAX_ROM_SIZE)
    return bytes(data)


def load_rom_from_path(path: Path | str) -> bytes:
    """Load a raw ROM image from the filesystem."""

    rom_path = Path(path)
    try:
        with rom_path.open("rb") as handle:
            data = load_rom(handle)
    except FileNotFoundError as exc:
        raise RomLoadError(f"ROM file not found: {rom_path}") from exc
    except IsADirectoryError as exc:
        raise RomLoadError(f"ROM path is a directory: {rom_path}") from exc
    except OSError as exc:
        raise RomLoadError(f"cannot open ROM {rom_path}: {exc}") from exc
    if debug_enabled("rom"):
        debug_log("rom", "loaded name=%s size=%d", rom_path.name, len(data))
    return data
