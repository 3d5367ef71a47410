"""Temporary workspace owned by a single publish run.

:class:`TemporaryWorkspace` is a context manager: the directory is
created on entry and deleted when the block exits, however it exits.
A guarded signal that arrives while the directory is being created is
held until the workspace has recorded its path, so an interrupted
creation removes the directory too.  :meth:`TemporaryWorkspace.cleanup`
is idempotent so a manual call followed by the context exit removes the
tree exactly once.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path, PurePosixPath
from types import TracebackType

from tree_publish.exceptions import (
    Interrupted,
    PackageNotFoundError,
    PreconditionError,
    WorkspaceError,
)
from tree_publish.infra.signals import deferred_signals

logger = logging.getLogger(__name__)


class TemporaryWorkspace:
    """A private directory created with :func:`tempfile.mkdtemp`.

    The class itself is the workspace factory handed to the publish
    service; nothing touches the filesystem until the ``with`` block is
    entered.

    Usage::

        with TemporaryWorkspace(Path("/var/tmp"), "tree-publish.") as ws:
            exporter.export(root, "HEAD", ws.path)
    """

    def __init__(self, root: Path, prefix: str) -> None:
        self._root: Path = root
        self._prefix: str = prefix
        self._path: Path | None = None
        self._removed: bool = False

    @classmethod
    def create(cls, root: Path, prefix: str) -> TemporaryWorkspace:
        """Return a workspace whose directory already exists."""
        workspace = cls(root, prefix)
        workspace.open()
        return workspace

    def open(self) -> Path:
        """Create the directory under the root (once).

        Raises
        ------
        WorkspaceError
            If the directory cannot be created.
        """
        if self._path is not None:
            return self._path

        created: str | None = None
        try:
            with deferred_signals():
                try:
                    created = tempfile.mkdtemp(prefix=self._prefix, dir=self._root)
                except OSError as exc:
                    raise WorkspaceError(
                        f"Cannot create a temporary directory in {self._root}: "
                        f"{exc.strerror or exc}",
                        hint="Check that the directory exists and is writable.",
                    ) from exc
                self._path = Path(created)
            logger.debug("Created workspace %s", created)
        except BaseException:
            if created is not None:
                shutil.rmtree(created, ignore_errors=True)
                self._removed = True
            raise
        return self._path

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> TemporaryWorkspace:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()

    # ------------------------------------------------------------------
    # Workspace API
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("workspace has not been opened")
        return self._path

    @property
    def removed(self) -> bool:
        return self._removed


    def remove_empty_directory(self, name: str) -> None:
        """``rmdir`` the top-level directory *name*.

        Fails when the directory is missing or still has content, which
        means the tree carries files under *name* that would be published.
        """
        target = self.path / name
        try:
            os.rmdir(target)
        except FileNotFoundError as exc:
            raise PreconditionError(
                f"Expected directory {name}/ is missing from the exported tree.",
            ) from exc
        except OSError as exc:
            raise PreconditionError(
                f"Cannot remove {name}/ from the exported tree: {exc.strerror or exc}",
                hint=f"Files under {name}/ must be excluded from the archive before publishing.",
            ) from exc
        logger.debug("Removed %s", target)

    def locate(self, relative: PurePosixPath) -> Path:
        """Return the directory *relative* inside the workspace."""
        target = self.path.joinpath(*relative.parts)
        if not target.is_dir():
            raise PackageNotFoundError(
                f"Package directory not found in the exported tree: {relative}",
                hint="Only committed files are published; commit the package first.",
            )
        return target

    def cleanup(self) -> None:
        """Delete the workspace tree (idempotent)."""
        if self._removed:
            return
        if self._path is None:
            self._removed = True
            return
        try:
            shutil.rmtree(self._path)
        except Interrupted:
            # Guarded signals fire once, so this second pass runs to completion.
            shutil.rmtree(self._path, ignore_errors=True)
            raise
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove workspace %s: %s", self._path, exc)
        finally:
            self._removed = True
        logger.debug("Removed workspace %s", self._path)
