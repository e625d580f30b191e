"""Input-layer public API: key events and the byte-stream decoder."""

from .keys import (
    QUIT_BYTE,
    Character,
    KeyEvent,
    Navigation,
    NavKey,
    Unrecognized,
    ctrl_key,
)
from .reader import (
    ESC_SEQUENCE_TIMEOUT_MS,
    BufferByteSource,
    ByteSource,
    DecoderState,
    FdByteSource,
    KeyDecoder,
    decode_step,
)

__all__ = [
    "Character",
    "Navigation",
    "NavKey",
    "Unrecognized",
    "KeyEvent",
    "QUIT_BYTE",
    "ctrl_key",
    "ByteSource",
    "FdByteSource",
    "BufferByteSource",
    "DecoderState",
    "KeyDecoder",
    "decode_step",
    "ESC_SEQUENCE_TIMEOUT_MS",
]
