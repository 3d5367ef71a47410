"""git-backed implementation of :class:`~tree_publish.core.protocols.SourceExporter`.

This module is the **only** place in the codebase that runs ``git`` and
``tar``.  Every failure is re-raised as a typed
:class:`~tree_publish.exceptions.TreePublishError` subclass carrying the
failing command's exit status.

The snapshot is produced by piping ``git archive`` straight into
``tar -x``; no intermediate archive file is written.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from tree_publish.core.models import RevisionInfo
from tree_publish.exceptions import (
    ExportError,
    ExtractionError,
    RepositoryError,
    describe_command,
)
from tree_publish.infra.process import exit_status, killed_by_sigpipe, missing_tool_error

logger = logging.getLogger(__name__)


class GitExporter:
    """Concrete :class:`SourceExporter` backed by the git and tar executables.

    This class satisfies the :class:`~tree_publish.core.protocols.SourceExporter`
    protocol structurally: no explicit inheritance required.
    """

    def __init__(self, git: str = "git", tar: str = "tar") -> None:
        self._git: str = git
        self._tar: str = tar

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def resolve_root(self, start: Path) -> Path:
        """Return the repository top-level directory for *start*."""
        output = self._capture(
            ["rev-parse", "--show-toplevel"],
            cwd=start,
            error=f"Not inside a git repository: {start}",
            hint="Run tree-publish from within the repository you want to publish.",
        )
        return Path(output)

    def describe(self, root: Path, revision: str) -> RevisionInfo:
        """Resolve *revision* to its full commit hash."""
        output = self._capture(
            ["rev-parse", "--verify", "--quiet", f"{revision}^{{commit}}"],
            cwd=root,
            error=f"Revision does not name a commit: {revision}",
            hint="A repository needs at least one commit before it can be published.",
        )
        return RevisionInfo(revision=revision, commit=output)

    def export(self, root: Path, revision: str, destination: Path) -> None:
        """Stream ``git archive`` of *revision* into ``tar -x -C destination``.

        The archive status is checked before the extraction status, so a
        failed export is reported as such even when tar also fails on the
        truncated stream.  An archiver killed by SIGPIPE only lost its
        reader, so the extraction failure is reported instead.
        """
        archive_cmd = [self._git, "archive", "--format=tar", revision]
        extract_cmd = [self._tar, "-x", "-f", "-", "-C", str(destination)]
        logger.debug("Running %s | %s", describe_command(archive_cmd), describe_command(extract_cmd))

        try:
            with subprocess.Popen(archive_cmd, cwd=root, stdout=subprocess.PIPE) as archive:
                try:
                    extract = subprocess.run(extract_cmd, stdin=archive.stdout, check=False)
                except BaseException:
                    archive.kill()
                    raise
        except FileNotFoundError as exc:
            raise missing_tool_error(exc.filename or self._git) from exc

        archive_failed = archive.returncode != 0
        if archive_failed and not (extract.returncode != 0 and killed_by_sigpipe(archive.returncode)):
            raise ExportError(
                f"{describe_command(archive_cmd)} failed with status {archive.returncode}.",
                exit_code=exit_status(archive.returncode),
            )
        if extract.returncode != 0:
            raise ExtractionError(
                f"{describe_command(extract_cmd)} failed with status {extract.returncode}.",
                exit_code=exit_status(extract.returncode),
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _capture(self, args: list[str], *, cwd: Path, error: str, hint: str) -> str:
        """Run ``git *args`` in *cwd* and return its stripped stdout."""
        cmd = [self._git, *args]
        logger.debug("Running %s in %s", describe_command(cmd), cwd)
        try:
            completed = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            if exc.filename == self._git:
                raise missing_tool_error(self._git) from exc
            raise RepositoryError(error, hint=hint) from exc
        except NotADirectoryError as exc:
            raise RepositoryError(error, hint=hint) from exc

        if completed.returncode != 0:
            detail = completed.stderr.strip()
            if detail:
                logger.debug("git: %s", detail)
            raise RepositoryError(error, hint=hint, exit_code=exit_status(completed.returncode))
        return completed.stdout.strip()
