"""Logging setup shared by the server and the CLI."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the ``linkless`` logger hierarchy.

    Logs go to stderr so command output on stdout stays clean.
    Modules log through ``logging.getLogger(__name__)``; calling this more
    than once (e.g. under ``uvicorn --reload``) does not add handlers twice.
    """
    logger = logging.getLogger("linkless")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    logger.propagate = False
    return logger
