"""Shared logger for the batch runner and command line."""
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = "integer_calculator", level: int = logging.INFO) -> logging.Logger:
    """
    Return the package logger, attaching a stderr handler the first time.

    :param str name: Logger name
    :param int level: Minimum level emitted by the logger

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(level)
    return log


logger = get_logger()
