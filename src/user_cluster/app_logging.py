"""Logging configuration helpers."""

import logging

# Primary and workers share one terminal, so every line names its process.
_FORMAT = "%(levelname)s: %(name)s[%(process)d]: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the package logger once per process with a stream handler."""
    logger = logging.getLogger("user_cluster")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
