"""Initial buffer content loaded from a file."""

from __future__ import annotations

from pathlib import Path

from .state import TextRow


def strip_line_ending(line: bytes) -> bytes:
    return line.rstrip(b"\r\n")


def load_initial_row(path: Path) -> TextRow | None:
    """Return the first line of ``path`` as a row, or None for an empty file.

    Raises ``OSError`` when the file cannot be opened.
    """
    with path.open("rb") as handle:
        line = handle.readline()
    if not line:
        return None
    return TextRow(strip_line_ending(line))
