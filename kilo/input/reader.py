"""Low-level terminal input decoding.

Reads raw bytes and turns them into ``KeyEvent`` values through an explicit
state machine. Unknown or truncated escape sequences decode to
``Unrecognized``; they are a normal condition, never an error.
"""

from __future__ import annotations

import errno
import logging
import os
import select
from enum import Enum
from typing import NamedTuple, Protocol

from ..logging_config import KEY_LOGGER
from ..terminal import TerminalError
from .keys import (
    CSI_LETTER_KEYS,
    CSI_TILDE_KEYS,
    SS3_LETTER_KEYS,
    UNRECOGNIZED,
    Character,
    KeyEvent,
    Navigation,
    describe_key,
)

ESC = 0x1B
CSI_INTRODUCER = ord("[")
SS3_INTRODUCER = ord("O")
TILDE = ord("~")
ESC_SEQUENCE_TIMEOUT_MS = 100


class ByteSource(Protocol):
    def read_byte(self) -> int | None:
        """Return the next byte, or ``None`` if none arrived in time."""


class FdByteSource:
    """Read single bytes from a file descriptor with a bounded wait."""

    def __init__(self, fd: int, timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> None:
        self.fd = fd
        self.timeout_ms = timeout_ms

    def read_byte(self) -> int | None:
        try:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, self.timeout_ms / 1000.0))
            if not ready:
                return None
            data = os.read(self.fd, 1)
        except OSError as exc:
            if exc.errno == errno.EAGAIN:
                return None
            raise TerminalError("read", exc) from exc
        if not data:
            return None
        return data[0]


class BufferByteSource:
    """In-memory byte source; reports "no byte" once exhausted."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)

    def read_byte(self) -> int | None:
        if not self._data:
            return None
        return self._data.pop(0)

    @property
    def remaining(self) -> bytes:
        return bytes(self._data)


class DecoderState(Enum):
    IDLE = "idle"
    ESCAPE1 = "escape1"
    ESCAPE2 = "escape2"
    ESCAPE3 = "escape3"


class Step(NamedTuple):
    state: DecoderState
    event: KeyEvent | None = None
    push_back: bool = False


def decode_step(state: DecoderState, sequence: bytes) -> Step:
    """Advance the decoder by the last byte of ``sequence``.

    ``sequence`` holds every byte consumed for the current key. A step either
    moves to the next state (``event`` is None) or resolves the key.
    ``push_back`` marks a byte that belongs to the following key.
    """
    byte = sequence[-1]
    if state is DecoderState.IDLE:
        if byte != ESC:
            return Step(DecoderState.IDLE, Character(byte))
        return Step(DecoderState.ESCAPE1)

    if state is DecoderState.ESCAPE1:
        if byte in (CSI_INTRODUCER, SS3_INTRODUCER):
            return Step(DecoderState.ESCAPE2)
        return Step(DecoderState.IDLE, UNRECOGNIZED, push_back=True)

    if state is DecoderState.ESCAPE2:
        if sequence[1] == SS3_INTRODUCER:
            key = SS3_LETTER_KEYS.get(byte)
        elif ord("0") <= byte <= ord("9"):
            return Step(DecoderState.ESCAPE3)
        else:
            key = CSI_LETTER_KEYS.get(byte)
        return Step(DecoderState.IDLE, Navigation(key) if key is not None else UNRECOGNIZED)

    key = CSI_TILDE_KEYS.get(sequence[2]) if byte == TILDE else None
    return Step(DecoderState.IDLE, Navigation(key) if key is not None else UNRECOGNIZED)


class KeyDecoder:
    """Turn a byte stream into key events, one event per call."""

    def __init__(self, source: ByteSource) -> None:
        self.source = source
        self._pending: list[int] = []

    def _next_byte(self) -> int | None:
        if self._pending:
            return self._pending.pop(0)
        return self.source.read_byte()

    def read_key(self) -> KeyEvent | None:
        """Decode one key, or return ``None`` when the terminal is idle."""
        byte = self._next_byte()
        if byte is None:
            return None

        sequence = bytearray()
        state = DecoderState.IDLE
        while True:
            sequence.append(byte)
            step = decode_step(state, bytes(sequence))
            if step.event is not None:
                if step.push_back:
                    self._pending.insert(0, sequence.pop())
                event = step.event
                break
            state = step.state
            byte = self._next_byte()
            if byte is None:
                # A lone ESC, or a sequence cut short by the bounded wait.
                event = UNRECOGNIZED
                break

        if event is UNRECOGNIZED and len(sequence) > 1:
            KEY_LOGGER.debug("unrecognized escape sequence %r", bytes(sequence))
        elif KEY_LOGGER.isEnabledFor(logging.DEBUG):
            KEY_LOGGER.debug("key %s", describe_key(event))
        return event
