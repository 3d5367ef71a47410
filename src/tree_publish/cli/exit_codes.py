"""Exit-code constants used by the CLI layer.

Errors raised because an external command failed do not use these
constants: they exit with that command's own status, carried on the
exception as ``exit_code``.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit: the publish command succeeded."""

GENERAL_ERROR: int = 1
"""A known TreePublishError without a command status was caught."""

USAGE_ERROR: int = 1
"""Wrong number of positional arguments."""

INTERRUPTED: int = 1
"""SIGINT, SIGTERM or SIGQUIT arrived; the workspace was still removed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
