"""Frame compositor for the editor viewport.

Builds one complete frame per refresh and hands it to the output boundary in
a single write. Rows are truncated to the screen width, never wrapped.
"""

from __future__ import annotations

from collections.abc import Sequence

from .. import ansi
from ..state import TextRow, ViewportState
from ..terminal import write_bytes

KILO_VERSION = "0.0.1"
EMPTY_ROW_MARKER = b"~"


def welcome_message() -> bytes:
    return f"Kilo editor -- version {KILO_VERSION}".encode("ascii")


def welcome_row(screen_cols: int, message: bytes | None = None) -> bytes:
    """Center ``message`` in ``screen_cols``, keeping a tilde in column 0."""
    text = (message if message is not None else welcome_message())[:screen_cols]
    padding = (screen_cols - len(text)) // 2
    out = bytearray()
    if padding:
        out += EMPTY_ROW_MARKER
        padding -= 1
    out += b" " * padding
    out += text
    return bytes(out)


def draw_rows(frame: bytearray, viewport: ViewportState, rows: Sequence[TextRow]) -> None:
    for y in range(viewport.screen_rows):
        if y < len(rows):
            frame += rows[y].content[: viewport.screen_cols]
        elif not rows and y == viewport.screen_rows // 3:
            frame += welcome_row(viewport.screen_cols)
        else:
            frame += EMPTY_ROW_MARKER
        frame += ansi.CLEAR_LINE
        if y < viewport.screen_rows - 1:
            frame += ansi.ROW_SEPARATOR


def render_frame(viewport: ViewportState, rows: Sequence[TextRow]) -> bytes:
    """Compose the full frame for ``viewport`` and ``rows``."""
    frame = bytearray()
    frame += ansi.HIDE_CURSOR
    frame += ansi.CURSOR_HOME
    draw_rows(frame, viewport, rows)
    frame += ansi.cursor_position(viewport.cursor_row + 1, viewport.cursor_col + 1)
    frame += ansi.SHOW_CURSOR
    return bytes(frame)


def refresh_screen(fd: int, viewport: ViewportState, rows: Sequence[TextRow]) -> bytes:
    frame = render_frame(viewport, rows)
    write_bytes(fd, frame)
    return frame


__all__ = [
    "KILO_VERSION",
    "welcome_message",
    "welcome_row",
    "draw_rows",
    "render_frame",
    "refresh_screen",
]
