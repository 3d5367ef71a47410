"""Core publish service: orchestrates the publish workflow.

The workflow is strictly linear and fail-fast::

    resolve root → describe revision → create workspace → export
    → remove excluded dir → locate package → (confirm) → publish

Every collaborator is injected at construction time (dependency
inversion), keeping the core free of subprocess and filesystem imports.

Guarantees
----------
* The workspace is held by a ``with`` block, so it is removed on every
  exit path: success, any raised error, and :class:`Interrupted`.
* Nothing is retried; the first failure aborts the run.
* Only :class:`~tree_publish.exceptions.TreePublishError` subclasses
  escape.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from tree_publish.core.models import (
    PublishConfig,
    PublishRequest,
    PublishResult,
    RevisionInfo,
)
from tree_publish.core.protocols import (
    PackagePublisher,
    SourceExporter,
    WorkspaceFactory,
)
from tree_publish.exceptions import (
    ExportError,
    PublishFailedError,
    RepositoryError,
    TreePublishError,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

ProgressCallback = Callable[[str], None]
ConfirmCallback = Callable[[Path, RevisionInfo, Path], None]
"""Called with (repository root, revision, package dir) before publishing."""


class PublishService:
    """Drives one publish run.

    Parameters
    ----------
    exporter:
        Any object satisfying the :class:`SourceExporter` protocol.
    publisher:
        Any object satisfying the :class:`PackagePublisher` protocol.
    workspace_factory:
        Callable building the temporary workspace; the directory exists
        only inside the ``with`` block.
    config:
        Fixed run parameters; defaults to :class:`PublishConfig`.
    """

    def __init__(
        self,
        exporter: SourceExporter,
        publisher: PackagePublisher,
        workspace_factory: WorkspaceFactory,
        config: PublishConfig | None = None,
    ) -> None:
        self._exporter: SourceExporter = exporter
        self._publisher: PackagePublisher = publisher
        self._workspace_factory: WorkspaceFactory = workspace_factory
        self._config: PublishConfig = config or PublishConfig()

    @property
    def config(self) -> PublishConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def publish(
        self,
        request: PublishRequest,
        *,
        progress_callback: ProgressCallback | None = None,
        confirm: ConfirmCallback | None = None,
    ) -> PublishResult:
        """Publish ``request.package`` from the committed tree.

        Raises
        ------
        RepositoryError
            If the start directory is not in a repository or the
            revision cannot be resolved.
        WorkspaceError
            If the temporary workspace cannot be created.
        ExportError, ExtractionError
            If the snapshot cannot be written into the workspace.
        PreconditionError
            If the excluded directory is missing or not empty.
        PackageNotFoundError
            If the package directory is absent from the snapshot.
        PublishAbortedError
            If *confirm* declines.
        PublishFailedError
            If the publish command fails.
        Interrupted
            If a guarded signal arrives mid-run.
        """
        config = self._config

        def step(name: str) -> None:
            logger.info("%s", name)
            if progress_callback is not None:
                progress_callback(name)

        step("Locating repository")
        root = self._guard(lambda: self._exporter.resolve_root(request.start_dir), RepositoryError)
        revision = self._guard(lambda: self._exporter.describe(root, config.revision), RepositoryError)
        logger.debug("Repository %s at %s (%s)", root, revision.revision, revision.commit)

        step("Creating workspace")
        with self._workspace_factory(config.temp_root, config.temp_prefix) as workspace:
            logger.debug("Workspace %s", workspace.path)

            step(f"Exporting {revision.revision} ({revision.short})")
            self._guard(
                lambda: self._exporter.export(root, config.revision, workspace.path),
                ExportError,
            )

            step(f"Removing {config.excluded_dir}/")
            workspace.remove_empty_directory(config.excluded_dir)

            package_dir = workspace.locate(request.package)

            if confirm is not None:
                confirm(root, revision, package_dir)

            step(f"Publishing {request.package}")
            self._guard(lambda: self._publisher.publish(package_dir), PublishFailedError)

            return PublishResult(
                package=request.package,
                revision=revision,
                workspace=workspace.path,
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _guard(call: Callable[[], _T], wrapper: type[TreePublishError]) -> _T:
        """Run *call* and ensure only our exceptions escape."""
        try:
            return call()
        except TreePublishError:
            # Already one of ours.
            raise
        except Exception as exc:
            raise wrapper(f"Unexpected error: {exc}") from exc
