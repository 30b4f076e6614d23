"""Root logger setup for the CLI."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

LOG_FORMAT = "%(name)s %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper())
    return root
