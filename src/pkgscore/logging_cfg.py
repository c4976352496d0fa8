"""Logging setup for the command-line interface."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging() -> None:
    """Configure the root logger from ``LOG_LEVEL`` and ``LOG_FILE``.

    ``LOG_LEVEL``: 0 = silent, 1 = INFO, 2 = DEBUG; unset shows warnings and
    errors. Records go to ``LOG_FILE`` when set, otherwise to stderr so
    stdout stays clean for NDJSON output.
    """
    level_map = {"0": logging.CRITICAL, "1": logging.INFO, "2": logging.DEBUG}
    level = level_map.get(os.getenv("LOG_LEVEL", ""), logging.WARNING)

    log_file = os.getenv("LOG_FILE")
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
