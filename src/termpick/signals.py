"""Process-wide interrupt hook that restores the terminal before exiting.

Signal handlers are process-global, so at most one installation may be
active. The engine installs the hook before touching the terminal and
uninstalls it when its run ends, whatever the reason.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Callable

logger = logging.getLogger(__name__)

HANDLED_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)

_cleanup: Callable[[], None] | None = None
_previous_handlers: dict[signal.Signals, Any] = {}


def exit_code_for(signum: int) -> int:
    """Conventional shell exit status for a process killed by *signum*."""
    return 128 + signum


def _handle_signal(signum: int, frame: object) -> None:
    logger.debug("Received signal %d, restoring terminal", signum)
    cleanup = _cleanup
    if cleanup is not None:
        cleanup()
    sys.exit(exit_code_for(signum))


def install(cleanup: Callable[[], None]) -> None:
    """Run *cleanup* and exit on SIGINT or SIGTERM.

    Raises :class:`RuntimeError` if a hook is already installed.
    """
    global _cleanup
    if _cleanup is not None:
        raise RuntimeError("an interrupt hook is already installed")

    _cleanup = cleanup
    for sig in HANDLED_SIGNALS:
        _previous_handlers[sig] = signal.getsignal(sig)
        signal.signal(sig, _handle_signal)
    logger.debug("Interrupt hook installed")


def uninstall() -> None:
    """Restore the handlers that were active before :func:`install`.

    Safe to call when nothing is installed.
    """
    global _cleanup
    for sig, previous in _previous_handlers.items():
        signal.signal(sig, previous if previous is not None else signal.SIG_DFL)
    _previous_handlers.clear()
    if _cleanup is not None:
        logger.debug("Interrupt hook uninstalled")
    _cleanup = None


def is_installed() -> bool:
    return _cleanup is not None
