"""Custom exception hierarchy for tree-publish.

All exceptions that cross layer boundaries must inherit from
:class:`TreePublishError`.  Raw ``OSError`` and ``subprocess`` failures
must NEVER propagate beyond the infrastructure layer; they are caught
and re-raised as a typed subclass defined here.

Every error carries the process exit status the CLI boundary should
use.  Errors caused by an external command carry that command's status.

Hierarchy
---------
TreePublishError
├── InvalidPackagePathError
├── EnvironmentError
│   ├── WorkspaceError
│   └── ToolNotFoundError
├── CommandFailedError
│   ├── RepositoryError
│   ├── ExportError
│   ├── ExtractionError
│   └── PublishFailedError
├── PreconditionError
├── PackageNotFoundError
├── PublishAbortedError
└── Interrupted
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence


class TreePublishError(Exception):
    """Base exception for all tree-publish errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    and exit with a well-defined status.
    """

    exit_code: int = 1
    """Process exit status used when this error ends the run."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        exit_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""
        if exit_code is not None:
            self.exit_code = exit_code


# --- Arguments -------------------------------------------------------------

class InvalidPackagePathError(TreePublishError):
    """Raised when the package argument is absolute or escapes the tree."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(TreePublishError):
    """Raised when a required runtime dependency is not available."""


class WorkspaceError(EnvironmentError):
    """Raised when the temporary workspace cannot be created."""


class ToolNotFoundError(EnvironmentError):
    """Raised when an external executable cannot be located on PATH."""

    exit_code = 127


# --- External commands -----------------------------------------------------

class CommandFailedError(TreePublishError):
    """Raised when an external command exits with a nonzero status."""


class RepositoryError(CommandFailedError):
    """Raised when git cannot resolve the repository or the revision."""


class ExportError(CommandFailedError):
    """Raised when ``git archive`` fails to produce the tree snapshot."""


class ExtractionError(CommandFailedError):
    """Raised when ``tar`` fails to unpack the snapshot."""


class PublishFailedError(CommandFailedError):
    """Raised when the package manager's publish command fails."""


# --- Workflow preconditions ------------------------------------------------

class PreconditionError(TreePublishError):
    """Raised when the exported tree does not have the expected shape."""


class PackageNotFoundError(TreePublishError):
    """Raised when the package directory is absent from the exported tree."""


class PublishAbortedError(TreePublishError):
    """Raised when the user declines the publish confirmation."""


class Interrupted(TreePublishError):
    """Raised from a signal handler to unwind the run with cleanup."""

    def __init__(self, signal_name: str) -> None:
        super().__init__(f"Interrupted by {signal_name}.")
        self.signal_name: str = signal_name


def describe_command(argv: Sequence[str]) -> str:
    """Render *argv* as a shell-quoted string for messages and logs."""
    return shlex.join(argv)
