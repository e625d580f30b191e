"""Terminal device control for the editor session.

Owns the raw-mode lifecycle: the original attributes are captured once and
restored exactly once, on every exit path. Also exposes the single-write
output boundary used by the compositor.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios

from . import ansi

logger = logging.getLogger("kilo")

# Indices into the list returned by termios.tcgetattr.
IFLAG, OFLAG, CFLAG, LFLAG, ISPEED, OSPEED, CC = range(7)

READ_TIMEOUT_DECISECONDS = 1


class TerminalError(RuntimeError):
    """Fatal failure of a terminal-control operation."""

    def __init__(self, operation: str, reason: object = None) -> None:
        self.operation = operation
        self.reason = reason
        message = operation if reason is None else f"{operation}: {reason}"
        super().__init__(message)


def make_raw_attributes(original: list) -> list:
    """Derive raw-mode attributes from a ``tcgetattr`` snapshot.

    The snapshot itself is left untouched so it can be restored later.
    """
    raw = list(original)
    raw[CC] = list(original[CC])
    raw[IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    raw[OFLAG] &= ~termios.OPOST
    raw[CFLAG] |= termios.CS8
    raw[LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    raw[CC][termios.VMIN] = 0
    raw[CC][termios.VTIME] = READ_TIMEOUT_DECISECONDS
    return raw


class RawModeController:
    """Switch a terminal into raw mode and guarantee it is put back."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._saved_attributes: list | None = None
        self._restored = False

    @property
    def active(self) -> bool:
        return self._saved_attributes is not None and not self._restored

    def enter(self) -> None:
        try:
            self._saved_attributes = termios.tcgetattr(self.fd)
        except termios.error as exc:
            raise TerminalError("tcgetattr", exc) from exc
        self._restored = False
        raw = make_raw_attributes(self._saved_attributes)
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        except termios.error as exc:
            # Nothing was applied, so there is nothing to put back.
            self._restored = True
            raise TerminalError("tcsetattr", exc) from exc
        logger.debug("raw mode enabled on fd %d", self.fd)

    def restore(self) -> None:
        """Reapply the captured attributes; later calls do nothing."""
        if self._saved_attributes is None or self._restored:
            return
        self._restored = True
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved_attributes)
        except termios.error as exc:
            raise TerminalError("tcsetattr", exc) from exc
        logger.debug("terminal attributes restored on fd %d", self.fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with ``enter``/``restore``."""
        self.enter()
        try:
            yield self
        finally:
            self.restore()


def write_bytes(fd: int, data: bytes) -> int:
    """Write ``data`` with a single ``write`` call and return the count."""
    try:
        return os.write(fd, data)
    except OSError as exc:
        raise TerminalError("write", exc) from exc


def clear_screen(fd: int) -> None:
    write_bytes(fd, ansi.CLEAR_SCREEN + ansi.CURSOR_HOME)
