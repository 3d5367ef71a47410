"""Single source of truth for the tree-publish version string."""

__version__: str = "0.3.0"
