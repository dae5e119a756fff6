"""Command-line entry point for the CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.cpu import Quirks
from pychip8.system.clock import DEFAULT_CPU_HZ
from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import PALETTES


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter",
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to the CHIP-8 ROM image",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the interpreter in fullscreen mode",
    )
    parser.add_argument(
        "--cpu-hz",
        type=float,
        default=DEFAULT_CPU_HZ,
        help=f"Instructions executed per second (default: {DEFAULT_CPU_HZ})",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default="mono",
        help="Display colours (default: mono)",
    )
    parser.add_argument(
        "--wrap-sprites",
        action="store_true",
        help="Wrap sprite pixels around the screen edges instead of clipping",
    )
    quirks = parser.add_argument_group("quirks")
    quirks.add_argument("--shift-vy", action="store_true", help="8XY6/8XYE shift VY into VX")
    quirks.add_argument("--load-store-i", action="store_true", help="FX55/FX65 advance I")
    quirks.add_argument("--logic-vf", action="store_true", help="8XY1-8XY3 reset VF")
    quirks.add_argument("--jump-vx", action="store_true", help="BXNN jumps to XNN + VX")
    quirks.add_argument(
        "--timers-per-step",
        action="store_true",
        help="Decrement timers once per instruction instead of at 60 Hz",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.is_file():
        parser.exit(1, f"run.py: ROM file not found: {args.rom}\n")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.cpu_hz <= 0:
        parser.error("--cpu-hz must be positive")

    config = AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        fullscreen=args.fullscreen,
        cpu_hz=args.cpu_hz,
        palette=args.palette,
        wrap_sprites=args.wrap_sprites,
        quirks=Quirks(
            shift_uses_vy=args.shift_vy,
            load_store_increments_i=args.load_store_i,
            logic_resets_vf=args.logic_vf,
            jump_uses_vx=args.jump_vx,
            timers_tick_per_step=args.timers_per_step,
        ),
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
