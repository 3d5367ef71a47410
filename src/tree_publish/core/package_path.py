"""Pure normalisation of the package-directory argument.

The package argument names a directory *inside the exported tree*, so
it must be relative and must not climb out of the tree.  No filesystem
access happens here; existence is checked after export.
"""

from __future__ import annotations

from pathlib import PurePosixPath, PureWindowsPath

from tree_publish.exceptions import InvalidPackagePathError

ROOT_PACKAGE = PurePosixPath(".")


def normalize_package_path(raw: str | None) -> PurePosixPath:
    """Return *raw* as a clean relative path, or ``.`` for the tree root.

    Raises
    ------
    InvalidPackagePathError
        If *raw* is absolute or contains ``..`` components.
    """
    if raw is None:
        return ROOT_PACKAGE

    stripped = raw.strip()
    if not stripped:
        return ROOT_PACKAGE

    # Accept backslash separators from Windows shells.
    candidate = PurePosixPath(PureWindowsPath(stripped).as_posix())

    if candidate.is_absolute() or PureWindowsPath(stripped).drive:
        raise InvalidPackagePathError(
            f"Package path must be relative: {raw}",
            hint="Pass the package directory relative to the repository root.",
        )

    parts = [part for part in candidate.parts if part != "."]
    if ".." in parts:
        raise InvalidPackagePathError(
            f"Package path escapes the repository: {raw}",
            hint="The package must live inside the exported tree.",
        )

    if not parts:
        return ROOT_PACKAGE
    return PurePosixPath(*parts)
