"""Key events produced by the decoder.

A key is exactly one of ``Character``, ``Navigation`` or ``Unrecognized``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class NavKey(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    DELETE = "delete"


@dataclass(frozen=True)
class Character:
    byte: int


@dataclass(frozen=True)
class Navigation:
    key: NavKey


@dataclass(frozen=True)
class Unrecognized:
    pass


KeyEvent = Union[Character, Navigation, Unrecognized]

UNRECOGNIZED = Unrecognized()


def ctrl_key(char: str) -> int:
    """Return the byte a terminal sends for Ctrl+``char``."""
    return ord(char) & 0x1F


QUIT_BYTE = ctrl_key("q")

# ESC [ <letter>
CSI_LETTER_KEYS: dict[int, NavKey] = {
    ord("A"): NavKey.UP,
    ord("B"): NavKey.DOWN,
    ord("C"): NavKey.RIGHT,
    ord("D"): NavKey.LEFT,
    ord("H"): NavKey.HOME,
    ord("F"): NavKey.END,
}

# ESC O <letter>
SS3_LETTER_KEYS: dict[int, NavKey] = {
    ord("H"): NavKey.HOME,
    ord("F"): NavKey.END,
}

# ESC [ <digit> ~
CSI_TILDE_KEYS: dict[int, NavKey] = {
    ord("1"): NavKey.HOME,
    ord("3"): NavKey.DELETE,
    ord("4"): NavKey.END,
    ord("5"): NavKey.PAGE_UP,
    ord("6"): NavKey.PAGE_DOWN,
    ord("7"): NavKey.HOME,
    ord("8"): NavKey.END,
}


def describe_key(event: KeyEvent) -> str:
    """Short label for key traces."""
    if isinstance(event, Character):
        if 0x20 <= event.byte < 0x7F:
            return repr(chr(event.byte))
        return f"0x{event.byte:02x}"
    if isinstance(event, Navigation):
        return event.key.name
    return "UNRECOGNIZED"
