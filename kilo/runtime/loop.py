"""Main interactive loop: refresh, read one key, dispatch, repeat."""

from __future__ import annotations

import logging

from ..input.reader import KeyDecoder
from ..navigation import handle_key
from ..render import refresh_screen
from ..state import EditorState
from ..terminal import clear_screen

logger = logging.getLogger("kilo")


def run_main_loop(state: EditorState, decoder: KeyDecoder, stdout_fd: int) -> None:
    """Run until a quit key is dispatched.

    A frame is written only when ``state.dirty`` is set. An idle read (no key
    within the bounded wait) skips dispatch and loops again.
    """
    while True:
        if state.dirty:
            refresh_screen(stdout_fd, state.viewport, state.rows)
            state.dirty = False

        key = decoder.read_key()
        if key is None:
            continue

        if handle_key(state, key):
            logger.info("quit requested")
            clear_screen(stdout_fd)
            return
