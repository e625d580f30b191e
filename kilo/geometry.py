"""Window geometry resolution.

The OS window-size query is tried first unless the cursor-query strategy is
requested. The fallback parks the cursor in the far corner and asks the
terminal to report its position.
"""

from __future__ import annotations

import logging
import os
import re

from . import ansi
from .input.reader import ByteSource
from .terminal import TerminalError, write_bytes

logger = logging.getLogger("kilo")

GEOMETRY_IOCTL = "ioctl"
GEOMETRY_CURSOR_QUERY = "cursor-query"
GEOMETRY_STRATEGIES = (GEOMETRY_IOCTL, GEOMETRY_CURSOR_QUERY)

MAX_REPORT_BYTES = 31
_CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)")


class GeometryError(TerminalError):
    """Terminal geometry could not be determined."""


def parse_cursor_report(report: bytes) -> tuple[int, int]:
    """Parse ``ESC [ rows ; cols`` (terminator already stripped)."""
    match = _CURSOR_REPORT_RE.fullmatch(report)
    if match is None:
        raise GeometryError("getCursorPosition", f"malformed report {report!r}")
    return int(match.group(1)), int(match.group(2))


def _write_exact(fd: int, data: bytes) -> None:
    try:
        written = write_bytes(fd, data)
    except TerminalError as exc:
        raise GeometryError("getWindowSize", exc.reason) from exc
    if written != len(data):
        raise GeometryError("getWindowSize", f"short write ({written} of {len(data)} bytes)")


def get_cursor_position(source: ByteSource, out_fd: int) -> tuple[int, int]:
    """Ask the terminal where the cursor is and read back its report."""
    _write_exact(out_fd, ansi.CURSOR_POSITION_REQUEST)
    report = bytearray()
    while len(report) < MAX_REPORT_BYTES:
        byte = source.read_byte()
        if byte is None or byte == ord("R"):
            break
        report.append(byte)
    return parse_cursor_report(bytes(report))


def _os_window_size(out_fd: int) -> tuple[int, int] | None:
    try:
        size = os.get_terminal_size(out_fd)
    except OSError as exc:
        logger.debug("window size query failed: %s", exc)
        return None
    if size.columns == 0 or size.lines == 0:
        return None
    return size.lines, size.columns


def query_window_size(source: ByteSource, out_fd: int, strategy: str = GEOMETRY_IOCTL) -> tuple[int, int]:
    """Return ``(rows, cols)`` of the terminal attached to ``out_fd``."""
    if strategy == GEOMETRY_IOCTL:
        size = _os_window_size(out_fd)
        if size is not None:
            return size
    elif strategy != GEOMETRY_CURSOR_QUERY:
        raise ValueError(f"unknown geometry strategy: {strategy!r}")

    _write_exact(out_fd, ansi.CURSOR_FAR_CORNER)
    rows, cols = get_cursor_position(source, out_fd)
    if rows <= 0 or cols <= 0:
        raise GeometryError("getWindowSize", f"terminal reported {rows}x{cols}")
    logger.debug("window size from cursor report: %dx%d", rows, cols)
    return rows, cols
