"""Logging setup: terse console output on stderr, detailed records in the session log file."""

from __future__ import annotations

import logging
import sys

from .config import AppConfig
from .constants import LOGGER_NAME

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
FILE_FORMAT = (
    "%(asctime)s | %(levelname)s | %(threadName)s | %(module)s:%(lineno)d | "
    "%(funcName)s | %(message)s"
)


def _detach_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _route_warnings(file_handler: logging.Handler) -> None:
    logging.captureWarnings(True)
    warnings_logger = logging.getLogger("py.warnings")
    warnings_logger.setLevel(logging.DEBUG)
    warnings_logger.propagate = False
    for handler in list(warnings_logger.handlers):
        warnings_logger.removeHandler(handler)
    warnings_logger.addHandler(file_handler)


def setup_logging(config: AppConfig) -> logging.Logger:
    """Configure the ``speedread`` logger; calling it again replaces the handlers.

    The console handler writes to stderr so terminal playback on stdout stays clean.
    Loader threads are named ``track-load-N`` and show up in the file format.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    _detach_handlers(logger)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
    file_handler.setLevel(config.file_log_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)
    _route_warnings(file_handler)
    logger.debug("Logging to %s (console=%s file=%s)", config.log_file, config.log_level, config.file_log_level)
    return logger
