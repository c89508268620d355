"""Test the shared logger."""
import logging

from integer_calculator.common.logger import LOG_FORMAT, get_logger, logger


def test_package_logger_configured() -> None:
    assert logger.name == "integer_calculator"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_get_logger_does_not_stack_handlers() -> None:
    first = get_logger("integer_calculator.test")
    second = get_logger("integer_calculator.test")
    assert first is second
    assert len(second.handlers) == 1
