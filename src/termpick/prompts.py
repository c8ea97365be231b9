"""Line-based prompts: free text answers and yes/no permission."""

from __future__ import annotations

import logging
import sys
from typing import Callable, Protocol

from termpick.style import green, red, yellow

logger = logging.getLogger(__name__)

MAX_RETRIES = 2


class TextInput(Protocol):
    def get_input(self, prompt: str) -> str: ...

    def get_permission(self, prompt: str) -> bool: ...


def _read_stdin_line() -> str | None:
    line = sys.stdin.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


class ConsoleTextInput:
    """Ask questions on stdout and read answers from stdin, one line each.

    An empty answer to :meth:`get_input` offers to ask again, at most twice.
    An empty answer to :meth:`get_permission` repeats the question; after
    the third empty answer it is taken as "no".
    """

    def __init__(
        self,
        read_line: Callable[[], str | None] | None = None,
        write: Callable[[str], None] | None = None,
    ) -> None:
        self._read_line = read_line or _read_stdin_line
        self._write = write or self._write_stdout

    def get_input(self, prompt: str) -> str:
        return self._get_input(prompt, 0)

    def get_permission(self, prompt: str) -> bool:
        return self._get_permission(prompt, 0)

    def _get_input(self, prompt: str, retry_count: int) -> str:
        self._write(f"{prompt}\n\n")
        answer = self._read_line()
        if answer:
            return answer

        if retry_count >= MAX_RETRIES:
            return ""

        if not self.get_permission("\nYou didn't type anything. Would you like to try again?"):
            return ""

        logger.debug("Asking again for %r (retry %d)", prompt, retry_count + 1)
        return self._get_input(prompt, retry_count + 1)

    def _get_permission(self, prompt: str, retry_count: int) -> bool:
        self._write(f"\n{prompt} ({green('y')}/{red('n')}) ")
        answer = self._read_line()
        if not answer:
            if retry_count >= MAX_RETRIES:
                self._write(red("Fine, I'll take that as a no!") + "\n")
                return False
            self._write(yellow("type 'y' or 'n'") + "\n\n")
            return self._get_permission(prompt, retry_count + 1)

        return answer in ("y", "Y")

    @staticmethod
    def _write_stdout(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()
