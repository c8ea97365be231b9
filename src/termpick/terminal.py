"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages cbreak input, the alternate screen, cursor
visibility, absolute cursor positioning and screen clearing via ANSI escape
sequences.
"""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from typing import Protocol

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_LINE = "\x1b[2K"
_CLEAR_SCREEN = "\x1b[2J"
_CLEAR_BUFFER = "\x1b[3J"
_MOVE_HOME = "\x1b[H"
_MOVE_TO_FMT = "\x1b[{};{}H"
_MOVE_RIGHT_FMT = "\x1b[{}C"

_READ_CHUNK = 64


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def enter_alternate_screen(self) -> None: ...

    def exit_alternate_screen(self) -> None: ...

    def enable_raw_input(self) -> None: ...

    def restore_normal_input(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def move_to(self, row: int, col: int) -> None: ...

    def move_right(self, cols: int) -> None: ...

    def move_to_home(self) -> None: ...

    def clear_line(self) -> None: ...

    def clear_screen(self) -> None: ...

    def clear_buffer(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def key_pressed(self, timeout: float | None = 0.0) -> bool: ...

    def read_key(self) -> str: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Input is switched to cbreak mode rather than full raw mode so that the
    terminal still turns Ctrl-C into SIGINT, which the interrupt hook in
    :mod:`termpick.signals` relies on.
    """

    def __init__(self) -> None:
        self._original_termios: list | None = None
        self._write_log_path: str = os.environ.get("TERMPICK_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- screen / input modes ----------------------------------------------

    def enter_alternate_screen(self) -> None:
        self._raw_write(_ALT_SCREEN_ENABLE)

    def exit_alternate_screen(self) -> None:
        self._raw_write(_ALT_SCREEN_DISABLE)

    def enable_raw_input(self) -> None:
        """Disable line buffering and echo on stdin."""
        fd = sys.stdin.fileno()
        if self._original_termios is None:
            self._original_termios = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    def restore_normal_input(self) -> None:
        """Restore the terminal attributes saved by :meth:`enable_raw_input`."""
        if self._original_termios is None:
            return
        fd = sys.stdin.fileno()
        termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
        self._original_termios = None

    # -- input --------------------------------------------------------------

    def key_pressed(self, timeout: float | None = 0.0) -> bool:
        """Return True when stdin has input ready within *timeout* seconds.

        ``None`` waits indefinitely.
        """
        readable, _, _ = select.select([sys.stdin.fileno()], [], [], timeout)
        return bool(readable)

    def read_key(self) -> str:
        """Block until input arrives and return everything currently readable.

        A chunk may hold several keypresses; see :func:`termpick.keys.split_input`.
        """
        fd = sys.stdin.fileno()
        self.key_pressed(None)
        raw = os.read(fd, _READ_CHUNK)
        # An escape sequence can arrive split across reads
        while raw.endswith(b"\x1b") or (raw.startswith(b"\x1b") and len(raw) < 3):
            if not self.key_pressed(0.01):
                break
            raw += os.read(fd, _READ_CHUNK)
        return raw.decode("utf-8", errors="replace")

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        self._raw_write(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass

    # -- cursor / screen manipulation --------------------------------------

    def move_to(self, row: int, col: int) -> None:
        """Move the cursor to the 1-based (*row*, *col*) cell."""
        self._raw_write(_MOVE_TO_FMT.format(max(1, row), max(1, col)))

    def move_right(self, cols: int) -> None:
        if cols > 0:
            self._raw_write(_MOVE_RIGHT_FMT.format(cols))

    def move_to_home(self) -> None:
        self._raw_write(_MOVE_HOME)

    def hide_cursor(self) -> None:
        self._raw_write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._raw_write(_SHOW_CURSOR)

    def clear_line(self) -> None:
        self._raw_write(_CLEAR_LINE)

    def clear_screen(self) -> None:
        self._raw_write(_CLEAR_SCREEN)

    def clear_buffer(self) -> None:
        self._raw_write(_CLEAR_BUFFER)

    # -- private: raw write ------------------------------------------------

    def _raw_write(self, data: str) -> None:
        """Write directly to stdout, bypassing buffering."""
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError:
            pass
