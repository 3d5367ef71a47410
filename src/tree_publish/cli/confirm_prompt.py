"""Interactive publish confirmation for the CLI layer.

This module is responsible for:

* Rendering a Rich table summarising what is about to be published.
* Asking a yes/no question via questionary.
* Raising :class:`~tree_publish.exceptions.PublishAbortedError` unless
  the answer is yes.

All display-related logic lives here: no exporting, no publishing.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from typing import Any

from tree_publish.cli.console import console
from tree_publish.core.models import RevisionInfo
from tree_publish.exceptions import EnvironmentError, PublishAbortedError, describe_command


def _import_questionary() -> Any:
    """Import questionary lazily for interactive confirmation."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for summary rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms: no I/O themselves)
# ---------------------------------------------------------------------------

def _summary_rows(
    root: Path,
    revision: RevisionInfo,
    package_dir: Path,
    package: PurePosixPath,
    command: Sequence[str],
) -> list[tuple[str, str]]:
    """Return the (label, value) rows shown above the question."""
    return [
        ("Repository", str(root)),
        ("Revision", f"{revision.revision} ({revision.short})"),
        ("Package", "(root)" if package == PurePosixPath(".") else package.as_posix()),
        ("Exported to", str(package_dir)),
        ("Command", describe_command(command)),
    ]


def _question(rows: list[tuple[str, str]]) -> str:
    package = dict(rows)["Package"]
    return f"Publish {package} now?"


# ---------------------------------------------------------------------------
# Public prompt function
# ---------------------------------------------------------------------------

def confirm_publish(
    root: Path,
    revision: RevisionInfo,
    package_dir: Path,
    *,
    package: PurePosixPath,
    command: Sequence[str],
) -> None:
    """Show the publish summary and ask for confirmation.

    Raises
    ------
    PublishAbortedError
        If the user answers no or cancels the prompt (Esc / Ctrl+C
        inside questionary returns ``None``).
    """
    questionary = _import_questionary()
    table_class = _import_rich_table()

    rows = _summary_rows(root, revision, package_dir, package, command)

    table = table_class(show_header=False, border_style="dim")
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    for label, value in rows:
        table.add_row(label, value)

    console.print()
    console.print(table)
    console.print()

    answer: bool | None = questionary.confirm(_question(rows), default=False).ask()

    if not answer:
        raise PublishAbortedError(
            "Publish cancelled.",
            hint="Run again without --confirm to publish non-interactively.",
        )
