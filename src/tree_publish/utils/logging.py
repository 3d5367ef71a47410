"""Logging setup for the ``tree_publish`` logger hierarchy.

Modules log through ``logging.getLogger(__name__)``; this module only
decides where records go.  Records are rendered by Rich on stderr when
it is installed, and by a plain :class:`logging.StreamHandler` otherwise,
so ``--verbose`` keeps working on a bare interpreter.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "tree_publish"

_PLAIN_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
        return handler

    return RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling this again replaces the handler rather than stacking a second
    one, so repeated CLI invocations in one process log each record once.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        if getattr(existing, "_tree_publish", False):
            logger.removeHandler(existing)

    handler = _build_handler()
    handler._tree_publish = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
