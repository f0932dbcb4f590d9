"""Tests for logging configuration."""

import logging

from user_cluster.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("user_cluster")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.propagate is False


def test_configure_logging_applies_level_and_process_id() -> None:
    logger = logging.getLogger("user_cluster")
    logger.handlers.clear()

    configure_logging("debug")

    assert logger.level == logging.DEBUG
    record = logger.makeRecord("user_cluster.x", logging.INFO, "", 0, "hi", (), None)
    assert f"[{record.process}]" in logger.handlers[0].format(record)
    configure_logging()
