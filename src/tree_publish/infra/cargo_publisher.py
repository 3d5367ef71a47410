"""Subprocess-backed implementation of :class:`~tree_publish.core.protocols.PackagePublisher`.

Runs the package manager's publish command (``cargo publish`` unless
configured otherwise) inside the package directory.  Standard streams
are inherited so registry prompts and progress stay visible.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from tree_publish.exceptions import PublishFailedError, describe_command
from tree_publish.infra.process import exit_status, missing_tool_error

logger = logging.getLogger(__name__)


class CargoPublisher:
    """Concrete :class:`PackagePublisher` running an external command.

    This class satisfies the :class:`~tree_publish.core.protocols.PackagePublisher`
    protocol structurally: no explicit inheritance required.
    """

    def __init__(self, command: Sequence[str] = ("cargo", "publish")) -> None:
        if not command:
            raise ValueError("publish command must not be empty")
        self._command: tuple[str, ...] = tuple(command)

    @property
    def command(self) -> tuple[str, ...]:
        return self._command

    def publish(self, package_dir: Path) -> None:
        """Run the publish command with *package_dir* as working directory.

        Raises
        ------
        ToolNotFoundError
            When the command's executable is not on PATH.
        PublishFailedError
            When the command exits with a nonzero status.
        """
        logger.debug("Running %s in %s", describe_command(self._command), package_dir)
        try:
            completed = subprocess.run(self._command, cwd=package_dir, check=False)
        except FileNotFoundError as exc:
            raise missing_tool_error(self._command[0]) from exc

        if completed.returncode != 0:
            raise PublishFailedError(
                f"{describe_command(self._command)} failed with status {completed.returncode}.",
                hint="The publish command's own output above explains the failure.",
                exit_code=exit_status(completed.returncode),
            )
