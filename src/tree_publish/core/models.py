"""Domain models for tree-publish.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependency on
external packages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PublishConfig:
    """Fixed parameters of a publish run."""

    temp_root: Path = Path("/var/tmp")
    """Parent directory of the per-run temporary workspace."""

    temp_prefix: str = "tree-publish."
    """Name prefix of the per-run temporary workspace."""

    revision: str = "HEAD"
    """Revision exported from the repository."""

    excluded_dir: str = "testdata"
    """Top-level directory removed from the exported tree before publishing."""

    publish_command: tuple[str, ...] = ("cargo", "publish")
    """Package-manager command run inside the package directory."""


# ---------------------------------------------------------------------------
# Request / result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PublishRequest:
    """What to publish, as parsed from the command line."""

    package: PurePosixPath = PurePosixPath(".")
    """Package directory relative to the repository root."""

    start_dir: Path = field(default_factory=Path.cwd)
    """Directory the repository root is discovered from."""

    @property
    def is_root_package(self) -> bool:
        return self.package == PurePosixPath(".")


@dataclass(frozen=True, slots=True)
class RevisionInfo:
    """A resolved revision of the source tree."""

    revision: str
    """Revision expression as requested (e.g. ``HEAD``)."""

    commit: str
    """Full commit hash the expression resolved to."""

    @property
    def short(self) -> str:
        return self.commit[:12]


@dataclass(frozen=True, slots=True)
class PublishResult:
    """Outcome of a successful publish run."""

    package: PurePosixPath
    revision: RevisionInfo
    workspace: Path
    """Temporary workspace the package was published from (already removed)."""
