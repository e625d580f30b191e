"""VT100 directives emitted by the editor.

Only the small subset the compositor and the terminal boundary need:
cursor visibility, absolute positioning, and line/screen clearing.
"""

from __future__ import annotations

ESC = 0x1B

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_SCREEN = b"\x1b[2J"
CLEAR_LINE = b"\x1b[K"
CURSOR_FAR_CORNER = b"\x1b[999C\x1b[999B"
CURSOR_POSITION_REQUEST = b"\x1b[6n"
ROW_SEPARATOR = b"\r\n"


def cursor_position(row: int, col: int) -> bytes:
    """Return an absolute move to 1-indexed ``row``/``col``."""
    return f"\x1b[{row};{col}H".encode("ascii")
