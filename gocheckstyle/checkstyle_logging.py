"""Logging helpers for gocheckstyle.

Library modules only ever ask for a logger; handlers are installed by the
command line entry point through :func:`setup_logging`.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "gocheckstyle"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it.

    Args:
        name: Optional child name, e.g. ``"engine"``.

    Returns:
        Logger under the ``gocheckstyle`` namespace.
    """
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


def setup_logging(verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Configure the package logger for command line use.

    Args:
        verbose: Emit debug messages when True.
        stream: Destination stream (default: stderr).

    Returns:
        The configured package logger.
    """
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
