"""Allow ``python -m tree_publish`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m tree_publish`` behaves identically to the ``tree-publish``
console script.
"""

from __future__ import annotations

from tree_publish.cli.app import cli

if __name__ == "__main__":
    cli()
