"""Shared pytest fixtures and configuration for the tree-publish test suite.

Guidelines
----------
* No network access and no real registry in any test.
* git, tar and the publish command are faked at the infra boundary,
  except in tests explicitly marked as needing the real executables.
* Workspaces live under ``tmp_path``, never under ``/var/tmp``.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from tree_publish.core.models import PublishConfig, RevisionInfo
from tree_publish.exceptions import TreePublishError

COMMIT = "0123456789abcdef0123456789abcdef01234567"


class FakeExporter:
    """In-memory :class:`SourceExporter` writing a fixed file tree.

    *files* maps relative paths to contents; entries ending in ``/`` are
    created as empty directories.
    """

    def __init__(
        self,
        files: dict[str, str] | None = None,
        *,
        root: Path = Path("/repo"),
        fail_with: TreePublishError | Exception | None = None,
        on_export: Callable[[Path], None] | None = None,
    ) -> None:
        self.files = {"Cargo.toml": "[package]\n", "testdata/": ""} if files is None else files
        self.root = root
        self.fail_with = fail_with
        self.on_export = on_export
        self.exported_to: list[Path] = []

    def resolve_root(self, start: Path) -> Path:
        return self.root

    def describe(self, root: Path, revision: str) -> RevisionInfo:
        return RevisionInfo(revision=revision, commit=COMMIT)

    def export(self, root: Path, revision: str, destination: Path) -> None:
        self.exported_to.append(destination)
        if self.fail_with is not None:
            raise self.fail_with
        for relative, content in self.files.items():
            target = destination / relative
            if relative.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        if self.on_export is not None:
            self.on_export(destination)


class FakePublisher:
    """Records the directories it was asked to publish."""

    def __init__(self, fail_with: TreePublishError | Exception | None = None) -> None:
        self.fail_with = fail_with
        self.published: list[Path] = []
        self.seen_files: list[list[str]] = []

    def publish(self, package_dir: Path) -> None:
        self.published.append(package_dir)
        self.seen_files.append(
            sorted(p.relative_to(package_dir).as_posix() for p in package_dir.rglob("*"))
        )
        if self.fail_with is not None:
            raise self.fail_with


@pytest.fixture()
def temp_root(tmp_path: Path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture()
def config(temp_root: Path) -> PublishConfig:
    return PublishConfig(temp_root=temp_root)


def requires_executables(*names: str) -> pytest.MarkDecorator:
    missing = [name for name in names if shutil.which(name) is None]
    return pytest.mark.skipif(bool(missing), reason=f"missing executables: {missing}")
