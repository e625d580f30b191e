"""Runtime composition layer for the editor.

Enters raw mode, resolves geometry, builds the initial state, and runs the
loop. Every terminal-control failure funnels through ``die``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..geometry import query_window_size
from ..input.reader import FdByteSource, KeyDecoder
from ..state import EditorState, TextRow, ViewportState
from ..terminal import RawModeController, TerminalError, clear_screen
from .config import EditorSettings
from .loop import run_main_loop

logger = logging.getLogger("kilo")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def init_editor(source: FdByteSource, stdout_fd: int, settings: EditorSettings, rows: Sequence[TextRow]) -> EditorState:
    screen_rows, screen_cols = query_window_size(source, stdout_fd, settings.geometry)
    logger.info("screen is %d rows x %d cols", screen_rows, screen_cols)
    return EditorState(
        viewport=ViewportState(screen_rows=screen_rows, screen_cols=screen_cols),
        rows=list(rows),
    )


def die(exc: TerminalError, controller: RawModeController, stdout_fd: int) -> int:
    """Leave the terminal clean, release raw mode, and report ``exc``."""
    try:
        clear_screen(stdout_fd)
    except TerminalError:
        pass
    try:
        controller.restore()
    except TerminalError as restore_exc:
        logger.error("terminal restore failed: %s", restore_exc)
    logger.error("fatal terminal error: %s", exc)
    print(f"kilo: {exc}", file=sys.stderr)
    return EXIT_FAILURE


def run_editor(
    rows: Sequence[TextRow],
    settings: EditorSettings,
    stdin_fd: int,
    stdout_fd: int,
) -> int:
    """Run the editor on the terminal and return the process exit status."""
    controller = RawModeController(stdin_fd)
    try:
        with controller.raw_mode():
            try:
                source = FdByteSource(stdin_fd, settings.escape_timeout_ms)
                state = init_editor(source, stdout_fd, settings, rows)
                run_main_loop(state, KeyDecoder(source), stdout_fd)
            except TerminalError as exc:
                return die(exc, controller, stdout_fd)
    except TerminalError as exc:
        # Raw mode could not be entered, or could not be left.
        return die(exc, controller, stdout_fd)
    return EXIT_SUCCESS
