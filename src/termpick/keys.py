"""Keyboard input parsing for terminal pickers.

Raw bytes read from the terminal are first turned into a key identifier
such as ``"up"``, ``"enter"``, ``"ctrl+c"`` or ``"q"`` by :func:`parse_key`.
The key bindings then map identifiers onto the picker's two input families:
directional keys and action keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

KeyId = str

Direction = Literal["up", "down", "left", "right"]
Action = Literal["enter", "space", "quit", "backspace"]

DIRECTIONS: tuple[str, ...] = ("up", "down", "left", "right")
ACTIONS: tuple[str, ...] = ("enter", "space", "quit", "backspace")


@dataclass(frozen=True)
class DirectionKey:
    direction: Direction


@dataclass(frozen=True)
class ActionKey:
    action: Action


KeyEvent = DirectionKey | ActionKey


# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
}

LEGACY_SHIFT_SEQUENCES: dict[str, str] = {
    "\x1b[1;2A": "up",
    "\x1b[1;2B": "down",
    "\x1b[1;2C": "right",
    "\x1b[1;2D": "left",
    "\x1b[Z": "tab",
}

LEGACY_CTRL_SEQUENCES: dict[str, str] = {
    "\x1b[1;5A": "up",
    "\x1b[1;5B": "down",
    "\x1b[1;5C": "right",
    "\x1b[1;5D": "left",
}

LEGACY_ALT_SEQUENCES: dict[str, str] = {
    "\x1b[1;3A": "up",
    "\x1b[1;3B": "down",
    "\x1b[1;3C": "right",
    "\x1b[1;3D": "left",
}


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return the key identifier, or ``None``.

    >>> parse_key("\\x1b[A")
    'up'
    >>> parse_key("\\r")
    'enter'
    >>> parse_key("q")
    'q'
    """
    if not data:
        return None

    for seq_dict, mod_prefix in (
        (LEGACY_CTRL_SEQUENCES, "ctrl+"),
        (LEGACY_SHIFT_SEQUENCES, "shift+"),
        (LEGACY_ALT_SEQUENCES, "alt+"),
        (LEGACY_KEY_SEQUENCES, ""),
    ):
        if data in seq_dict:
            return mod_prefix + seq_dict[data]

    if data == "\x1b":
        return "escape"
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # Alt + key (ESC prefix)
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch in ("\r", "\n"):
            return "alt+enter"
        if ch in ("\x7f", "\x08"):
            return "alt+backspace"
        if ch.isprintable():
            return "alt+" + ch

    # Plain printable character, case preserved so "q" and "Q" stay distinct
    if len(data) == 1 and data.isprintable():
        return data

    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Check whether raw *data* is the key named *key_id*."""
    parsed = parse_key(data)
    return parsed is not None and parsed == key_id


def split_input(data: str) -> list[str]:
    """Split a chunk read from the terminal into individual key sequences.

    A single ``read`` may return several keypresses at once (key repeat,
    pasted text). Escape sequences are kept whole.
    """
    sequences: list[str] = []
    i = 0
    while i < len(data):
        if data[i] != "\x1b" or i + 1 >= len(data):
            sequences.append(data[i])
            i += 1
            continue

        nxt = data[i + 1]
        if nxt == "[":
            j = i + 2
            while j < len(data) and not (0x40 <= ord(data[j]) <= 0x7E):
                j += 1
            sequences.append(data[i : j + 1])
            i = j + 1
        elif nxt == "O" and i + 2 < len(data):
            sequences.append(data[i : i + 3])
            i += 3
        else:
            sequences.append(data[i : i + 2])
            i += 2
    return sequences
