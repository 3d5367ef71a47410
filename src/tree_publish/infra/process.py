"""Helpers shared by the subprocess-backed adapters."""

from __future__ import annotations

import signal

from tree_publish.exceptions import ToolNotFoundError
from tree_publish.infra.tool_detector import detect_tool, install_hint


def exit_status(returncode: int) -> int:
    """Map a :class:`subprocess.Popen` return code to a shell exit status.

    A child killed by signal *N* reports ``-N``; a shell reports ``128 + N``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def killed_by_sigpipe(returncode: int | None) -> bool:
    sigpipe = getattr(signal, "SIGPIPE", None)
    return sigpipe is not None and returncode == -sigpipe


def missing_tool_error(name: str) -> ToolNotFoundError:
    """Build the error raised when *name* cannot be executed."""
    return ToolNotFoundError(
        f"{name} is not installed or not on PATH.",
        hint=install_hint(detect_tool(name)),
    )
