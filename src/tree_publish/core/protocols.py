"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path, PurePosixPath
from types import TracebackType
from typing import Protocol

from tree_publish.core.models import RevisionInfo


class SourceExporter(Protocol):
    """Contract for version-control export backends."""

    def resolve_root(self, start: Path) -> Path:
        """Return the top-level directory of the repository containing *start*.

        Raises
        ------
        RepositoryError
            When *start* is not inside a repository.
        """
        ...  # pragma: no cover

    def describe(self, root: Path, revision: str) -> RevisionInfo:
        """Resolve *revision* to a commit.

        Raises
        ------
        RepositoryError
            When the revision does not name a commit.
        """
        ...  # pragma: no cover

    def export(self, root: Path, revision: str, destination: Path) -> None:
        """Write the committed tree of *revision* into *destination*.

        Uncommitted changes in the working copy must not be included.

        Raises
        ------
        ExportError
            When the archive stream cannot be produced.
        ExtractionError
            When the archive cannot be unpacked.
        """
        ...  # pragma: no cover


class PackagePublisher(Protocol):
    """Contract for package-manager publish backends."""

    def publish(self, package_dir: Path) -> None:
        """Publish the package located in *package_dir*.

        Raises
        ------
        PublishFailedError
            When the publish command exits with a nonzero status.
        """
        ...  # pragma: no cover


class Workspace(Protocol):
    """A private scratch directory removed when the context exits."""

    @property
    def path(self) -> Path:
        ...  # pragma: no cover

    def remove_empty_directory(self, name: str) -> None:
        """Remove the empty directory *name* at the top of the workspace.

        Raises
        ------
        PreconditionError
            When the directory is missing or not empty.
        """
        ...  # pragma: no cover

    def locate(self, relative: PurePosixPath) -> Path:
        """Return the existing directory *relative* inside the workspace.

        Raises
        ------
        PackageNotFoundError
            When no such directory exists.
        """
        ...  # pragma: no cover

    def cleanup(self) -> None:
        """Delete the workspace.  Calls after the first are no-ops."""
        ...  # pragma: no cover

    def __enter__(self) -> Workspace:
        ...  # pragma: no cover

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        ...  # pragma: no cover


WorkspaceFactory = Callable[[Path, str], Workspace]
"""Build a workspace for a parent directory and name prefix; it is opened on ``with`` entry."""
