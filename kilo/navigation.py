"""Cursor movement and key dispatch.

All moves are clamped to the viewport; out-of-range requests are absorbed
silently. ``handle_key`` is the only writer of ``ViewportState``.
"""

from __future__ import annotations

from .input.keys import QUIT_BYTE, Character, KeyEvent, Navigation, NavKey
from .state import EditorState, ViewportState

_STEP_KEYS = {NavKey.UP, NavKey.DOWN, NavKey.LEFT, NavKey.RIGHT}


def move_cursor(viewport: ViewportState, key: NavKey) -> None:
    """Move one cell in the direction of ``key``; other keys are ignored."""
    if key is NavKey.LEFT:
        if viewport.cursor_col > 0:
            viewport.cursor_col -= 1
    elif key is NavKey.RIGHT:
        if viewport.cursor_col < viewport.screen_cols - 1:
            viewport.cursor_col += 1
    elif key is NavKey.UP:
        if viewport.cursor_row > 0:
            viewport.cursor_row -= 1
    elif key is NavKey.DOWN:
        if viewport.cursor_row < viewport.screen_rows - 1:
            viewport.cursor_row += 1


def apply_navigation(viewport: ViewportState, key: NavKey) -> None:
    if key in _STEP_KEYS:
        move_cursor(viewport, key)
    elif key is NavKey.HOME:
        viewport.cursor_col = 0
    elif key is NavKey.END:
        viewport.cursor_col = viewport.screen_cols - 1
    elif key in (NavKey.PAGE_UP, NavKey.PAGE_DOWN):
        step = NavKey.UP if key is NavKey.PAGE_UP else NavKey.DOWN
        # Repeated single steps, not a jump, so clamping applies at each step.
        for _ in range(viewport.screen_rows):
            move_cursor(viewport, step)


def handle_key(state: EditorState, event: KeyEvent) -> bool:
    """Apply ``event`` to ``state``; return True when the editor should quit."""
    if isinstance(event, Character):
        return event.byte == QUIT_BYTE
    if isinstance(event, Navigation):
        viewport = state.viewport
        before = (viewport.cursor_row, viewport.cursor_col)
        apply_navigation(viewport, event.key)
        if (viewport.cursor_row, viewport.cursor_col) != before:
            state.dirty = True
    return False
