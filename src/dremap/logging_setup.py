"""Logging configuration for dremap.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
:func:`configure_logging` once per invocation so every ``dremap.*`` logger
shares one handler and format.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def configure_logging(level: int = logging.WARNING) -> None:
    """Send ``dremap`` log records at ``level`` and above to stderr.

    Calling it again replaces the previous handler, so output follows the
    current ``sys.stderr``.
    """
    global _handler

    root = logging.getLogger("dremap")
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    _handler.setLevel(level)
    root.addHandler(_handler)
    root.setLevel(level)
