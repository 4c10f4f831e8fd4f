"""
Logging setup for VALID8.

Modules log through logging.getLogger(__name__); this only wires the
"valid8" logger to the console. Log output is diagnostic and never
drives control flow.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "valid8"


def setup_logging(debug: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        debug: DEBUG level when True, WARNING otherwise
        stream: Output stream (defaults to stderr)

    Returns:
        The configured "valid8" logger
    """
    level = logging.DEBUG if debug else logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
