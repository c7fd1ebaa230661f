"""Logging setup.

The dashboard owns the terminal, so log records never go to stdout/stderr
while it runs; they are written to ``--log-file`` when one is given.
"""

from __future__ import annotations

import logging
from pathlib import Path

PACKAGE_LOGGER = "lazyrepos"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Attach a file handler to the package logger, or a ``NullHandler``."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.debug("logging to %s", log_file)
