"""Command-line front door for kilo.

Parses CLI options, loads the initial row from an optional file, sets up
logging, and hands control to the editor runtime.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .geometry import GEOMETRY_STRATEGIES
from .logging_config import setup_logging
from .render import KILO_VERSION
from .runtime import run_editor
from .runtime.config import load_settings, save_geometry
from .source import load_initial_row


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kilo", description="A small terminal text editor.")
    parser.add_argument("path", nargs="?", default=None, help="File whose first line is shown.")
    parser.add_argument(
        "--geometry",
        choices=GEOMETRY_STRATEGIES,
        default=None,
        help="How to find the window size (default: from config, else ioctl).",
    )
    parser.add_argument(
        "--remember",
        action="store_true",
        help="Persist --geometry as the default for later runs.",
    )
    parser.add_argument("--version", action="version", version=f"kilo {KILO_VERSION}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the editor; always exits via ``SystemExit``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.remember and args.geometry is None:
        parser.error("--remember requires --geometry")

    settings = load_settings()
    if args.geometry is not None:
        settings = dataclasses.replace(settings, geometry=args.geometry)
        if args.remember:
            save_geometry(args.geometry)

    rows = []
    if args.path is not None:
        path = Path(args.path)
        try:
            row = load_initial_row(path)
        except OSError as exc:
            raise SystemExit(f"kilo: cannot open {path}: {exc.strerror or exc}") from exc
        if row is not None:
            rows.append(row)

    if not sys.stdin.isatty():
        raise SystemExit("kilo: standard input is not a terminal")

    setup_logging(settings.log_level)
    raise SystemExit(run_editor(rows, settings, sys.stdin.fileno(), sys.stdout.fileno()))


if __name__ == "__main__":
    main()
