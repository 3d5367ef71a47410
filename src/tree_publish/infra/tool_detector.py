"""Infrastructure: external executable detection and platform guidance.

Locates the command-line tools the workflow shells out to (``git``,
``tar`` and the package manager) and provides platform-specific
installation guidance when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only: no subprocess.
* No automatic installation.
* No ``print()``: callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from tree_publish.exceptions import ToolNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of an executable detection probe.

    Attributes
    ----------
    name : str
        Executable name as looked up on PATH.
    found : bool
        Whether the executable was located.
    path : Path | None
        Absolute path to the executable, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool on the current
        platform.  Empty when the tool is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Probe PATH for *name*.

    Returns a :class:`ToolStatus` regardless of whether the tool is
    present: the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def require_tool(name: str) -> Path:
    """Locate *name* or raise :class:`ToolNotFoundError`."""
    status = detect_tool(name)
    if not status.found or status.path is None:
        raise ToolNotFoundError(
            f"{name} is not installed or not on PATH.",
            hint=install_hint(status),
        )
    return status.path


def install_hint(status: ToolStatus) -> str | None:
    """Format the install commands of *status* as a hint, if any."""
    if not status.install_commands:
        return None
    lines = [f"Install {status.name} using one of:"]
    lines.extend(f"  {cmd}" for cmd in status.install_commands)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_PACKAGES: dict[str, dict[str, tuple[str, ...]]] = {
    "git": {
        "windows": ("winget install Git.Git",),
        "linux": ("sudo apt install git", "sudo dnf install git", "sudo pacman -S git"),
        "darwin": ("xcode-select --install", "brew install git"),
    },
    "tar": {
        "windows": ("tar ships with Windows 10 1803 and later",),
        "linux": ("sudo apt install tar", "sudo dnf install tar", "sudo pacman -S tar"),
        "darwin": ("brew install gnu-tar",),
    },
    "cargo": {
        "windows": ("winget install Rustlang.Rustup",),
        "linux": ("curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh",),
        "darwin": ("brew install rustup",),
    },
}


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    system = platform.system().lower()
    commands = _PACKAGES.get(name, {}).get(system)
    if commands:
        return commands
    # Fallback.
    return (f"Install {name} with your system package manager.",)
