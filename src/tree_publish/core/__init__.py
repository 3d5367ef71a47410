"""Core / service layer: workflow orchestration and pure transforms.

Rules
-----
* No ``print()`` calls.
* No subprocess or filesystem access; that lives behind the protocols.
* No imports from ``cli`` or ``infra``.
"""

from tree_publish.core.models import PublishConfig, PublishRequest, PublishResult, RevisionInfo
from tree_publish.core.package_path import normalize_package_path
from tree_publish.core.protocols import PackagePublisher, SourceExporter, Workspace
from tree_publish.core.publish_service import PublishService

__all__: list[str] = [
    "PackagePublisher",
    "PublishConfig",
    "PublishRequest",
    "PublishResult",
    "PublishService",
    "RevisionInfo",
    "SourceExporter",
    "Workspace",
    "normalize_package_path",
]
