"""tree-publish: publish a package from the committed state of a git tree.

Exports HEAD into a private temporary directory and runs the package
manager's publish command there, so uncommitted changes never ship.
"""

from tree_publish.version import __version__

__all__: list[str] = ["__version__"]
