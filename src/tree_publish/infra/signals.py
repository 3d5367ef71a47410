"""Translate termination signals into a controlled, cleanup-running abort.

Inside :func:`signal_guard`, SIGINT, SIGTERM and SIGQUIT raise
:class:`~tree_publish.exceptions.Interrupted` in the main thread instead
of terminating the process, so every ``with`` block and ``finally``
clause on the stack still runs.  Only the first signal raises; later
ones are logged and ignored while the stack unwinds.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType
from typing import Any

from tree_publish.exceptions import Interrupted

logger = logging.getLogger(__name__)

GUARDED_SIGNALS: tuple[str, ...] = ("SIGINT", "SIGTERM", "SIGQUIT")
"""Signal names guarded where the platform defines them (no SIGQUIT on Windows)."""


def _available_signals() -> list[signal.Signals]:
    return [getattr(signal, name) for name in GUARDED_SIGNALS if hasattr(signal, name)]


@contextmanager
def signal_guard() -> Iterator[None]:
    """Install abort handlers for the guarded signals for the ``with`` body.

    Previous handlers are restored on exit.  Outside the main thread
    Python cannot install handlers, so the guard is a no-op there.
    """
    if threading.current_thread() is not threading.main_thread():
        logger.debug("Not in the main thread; signal handlers left untouched")
        yield
        return

    fired: list[str] = []

    def _handler(signum: int, _frame: FrameType | None) -> None:
        name = signal.Signals(signum).name
        if fired:
            logger.debug("Ignoring %s; already aborting after %s", name, fired[0])
            return
        fired.append(name)
        raise Interrupted(name)

    previous: dict[signal.Signals, Any] = {}
    try:
        for sig in _available_signals():
            previous[sig] = signal.signal(sig, _handler)
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


@contextmanager
def deferred_signals() -> Iterator[None]:
    """Hold the guarded signals pending for the ``with`` body.

    A signal sent during the body is delivered as the block exits, when
    :func:`signal.pthread_sigmask` unblocks it, so the body's bookkeeping
    is never cut in half.  Where the platform has no
    ``pthread_sigmask`` the body runs unprotected.
    """
    if not hasattr(signal, "pthread_sigmask"):
        yield
        return

    previous = signal.pthread_sigmask(signal.SIG_BLOCK, _available_signals())
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)
