"""``tree-publish --doctor``: environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can run a publish: the interpreter,
``git``, ``tar``, the publish command's executable and the temporary
root directory.

This module lives in the CLI layer: it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import os
import platform
import sys

from tree_publish.cli import exit_codes
from tree_publish.cli.console import console
from tree_publish.core.models import PublishConfig
from tree_publish.infra.tool_detector import ToolStatus, detect_tool
from tree_publish.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _tool_check(status: ToolStatus) -> tuple[str, str, str]:
    """Return (label, value, status) for an external executable row."""
    if status.found:
        path_str = str(status.path) if status.path else "found"
        return status.name, path_str, "[green]OK[/green]"
    return status.name, "not found", "[red]FAIL[/red]"


def _temp_root_check(config: PublishConfig) -> tuple[str, str, str]:
    """Return (label, value, status) for the temporary root row."""
    root = config.temp_root
    if root.is_dir() and os.access(root, os.W_OK | os.X_OK):
        return "temp root", str(root), "[green]OK[/green]"
    return "temp root", f"{root} (not writable)", "[red]FAIL[/red]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _treepublish_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the tree-publish version row."""
    return "tree-publish", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ntree-publish doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        plain_status = _status_plain(status)
        print(f"{label:<14} {value:<36} {plain_status:<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config: PublishConfig | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all checks pass,
        :data:`exit_codes.GENERAL_ERROR` if any check fails.
    """
    config = config or PublishConfig()
    tools = [detect_tool(name) for name in ("git", "tar", config.publish_command[0])]

    checks = [
        _treepublish_version_check(),
        _python_version_check(),
        *(_tool_check(status) for status in tools),
        _temp_root_check(config),
        _os_check(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="tree-publish doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    # Show install guidance for every missing tool.
    for status in tools:
        if status.found or not status.install_commands:
            continue
        console.print(f"[yellow]{status.name} is not installed.[/yellow]")
        console.print("Install using one of the following commands:\n")
        for cmd in status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
