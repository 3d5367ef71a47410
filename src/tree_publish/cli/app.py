"""CLI application entry point and command routing for tree-publish.

This module is the **sole error boundary** for the entire application.
It catches :class:`~tree_publish.exceptions.TreePublishError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here: all work is delegated to the core/service
  and infrastructure layers.
* This module is the only place that translates between the domain world
  and the OS process exit code.  Errors caused by a failing external
  command exit with that command's status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path, PurePosixPath

from tree_publish.cli import exit_codes
from tree_publish.cli.console import console
from tree_publish.core.models import PublishConfig, RevisionInfo
from tree_publish.exceptions import Interrupted, TreePublishError
from tree_publish.utils.logging import configure_logging
from tree_publish.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``tree-publish``           : publish the package at the repository root
    * ``tree-publish <package>`` : publish the package in that subdirectory
    * ``tree-publish --doctor``  : environment diagnostics
    * ``tree-publish --version``

    The positional is declared with ``nargs="*"`` so that a second
    package argument is reported by :func:`main` with exit status 1
    rather than by argparse.
    """
    parser = argparse.ArgumentParser(
        prog="tree-publish",
        description=(
            "Publish a package from the committed HEAD of the current git "
            "repository, excluding uncommitted changes."
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Check that git, tar and the publish command are available.",
    )
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="Show what will be published and ask before running the publish command.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every external command.",
    )
    parser.add_argument(
        "package",
        nargs="*",
        metavar="package",
        help="Package directory relative to the repository root (default: the root).",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_publish(
    package: PurePosixPath,
    *,
    confirm: bool = False,
    config: PublishConfig | None = None,
) -> int:
    """Dispatch a publish run.

    Flow:
    1. Check that git, tar and the publish executable are on PATH.
    2. Wire infra adapters into the core service.
    3. Run the workflow under the signal guard with Rich step progress.
    """
    from tree_publish.cli.confirm_prompt import confirm_publish
    from tree_publish.cli.progress import StepProgress
    from tree_publish.core.models import PublishRequest
    from tree_publish.core.publish_service import PublishService
    from tree_publish.infra.cargo_publisher import CargoPublisher
    from tree_publish.infra.git_exporter import GitExporter
    from tree_publish.infra.signals import signal_guard
    from tree_publish.infra.tool_detector import require_tool
    from tree_publish.infra.workspace import TemporaryWorkspace

    config = config or PublishConfig()

    for tool in ("git", "tar", config.publish_command[0]):
        require_tool(tool)

    service = PublishService(
        GitExporter(),
        CargoPublisher(config.publish_command),
        TemporaryWorkspace,
        config,
    )
    request = PublishRequest(package=package)

    with signal_guard(), StepProgress() as progress:

        def _confirm(root: Path, revision: RevisionInfo, package_dir: Path) -> None:
            progress.stop()
            confirm_publish(
                root,
                revision,
                package_dir,
                package=package,
                command=config.publish_command,
            )

        result = service.publish(
            request,
            progress_callback=progress,
            confirm=_confirm if confirm else None,
        )

    label = "repository root" if request.is_root_package else package.as_posix()
    console.print(
        f"\n[bold green]Published[/bold green] {label} "
        f"from {result.revision.revision} ({result.revision.short})."
    )
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from tree_publish.cli.doctor import run_doctor

    return run_doctor()


def _usage_error(parser: argparse.ArgumentParser, message: str) -> int:
    """Print usage and *message* to stderr; return the usage exit code."""
    parser.print_usage(sys.stderr)
    print(f"{parser.prog}: error: {message}", file=sys.stderr)
    return exit_codes.USAGE_ERROR


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the tree-publish CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    from tree_publish.core.package_path import normalize_package_path

    parser = _build_parser()
    args = parser.parse_intermixed_args(argv)

    configure_logging(verbose=args.verbose)

    if args.doctor:
        return _handle_doctor()

    if len(args.package) > 1:
        return _usage_error(parser, "expected at most one package argument")

    package = normalize_package_path(args.package[0] if args.package else None)
    logger.debug("Publishing package %s", package)
    return _handle_publish(package, confirm=args.confirm)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except Interrupted as exc:
        console.print(f"\n[yellow]Aborted:[/yellow] {exc}")
        sys.exit(exit_codes.INTERRUPTED)
    except TreePublishError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.INTERRUPTED)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
