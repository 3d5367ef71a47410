"""Infrastructure layer: external system integration.

This layer wraps all interaction with git, tar, the package manager and
the operating system.  Every raw ``OSError`` or nonzero exit status must
be caught here and re-raised as a
:class:`~tree_publish.exceptions.TreePublishError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from tree_publish.infra.cargo_publisher import CargoPublisher
from tree_publish.infra.git_exporter import GitExporter
from tree_publish.infra.signals import signal_guard
from tree_publish.infra.tool_detector import ToolStatus, detect_tool, require_tool
from tree_publish.infra.workspace import TemporaryWorkspace

__all__: list[str] = [
    "CargoPublisher",
    "GitExporter",
    "TemporaryWorkspace",
    "ToolStatus",
    "detect_tool",
    "require_tool",
    "signal_guard",
]
