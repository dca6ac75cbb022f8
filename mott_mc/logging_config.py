"""
Centralized logging configuration for mott_mc.

Library modules only create loggers with logging.getLogger(__name__);
applications and example scripts call get_logger() (or configure_logging())
to attach a console handler.

The level is taken from, in order:
    1. environment variable MOTT_MC_LOG_LEVEL
    2. 'logging.level' in the configuration (defaults.yaml)
    3. INFO

File output can be enabled:
    enable_file_logging("mott_run.log")
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Optional

from mott_mc.config import get_default

_DEFAULT_FORMAT = "%(asctime)s | %(name)-32s | %(levelname)-8s | %(message)s"
_DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_PACKAGE_LOGGER = "mott_mc"

_handlers_configured = False
_console_handler: Optional[logging.StreamHandler] = None
_file_handler: Optional[logging.FileHandler] = None


def _resolve_level(level=None) -> int:
    if level is None:
        level = os.environ.get("MOTT_MC_LOG_LEVEL") or get_default("logging.level", "INFO")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return int(level)


def configure_logging(level=None) -> None:
    """
    Attach a console handler to the package logger (once).

    Parameters:
        level: Logging level or level name; resolved from environment and
               configuration when None
    """
    global _handlers_configured, _console_handler

    resolved = _resolve_level(level)
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if _file_handler is not None:
        package_logger.setLevel(min(resolved, _file_handler.level))
    else:
        package_logger.setLevel(resolved)

    if not _handlers_configured:
        _console_handler = logging.StreamHandler(sys.stdout)
        _console_handler.setFormatter(
            logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATE_FORMAT))
        package_logger.addHandler(_console_handler)
        _handlers_configured = True

    _console_handler.setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the given module name with console output configured.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Sampling started")
    """
    if not _handlers_configured:
        configure_logging()
    return logging.getLogger(name)


def set_log_level(level) -> None:
    """
    Set the level of the package logger and the console handler.

    A file handler keeps the level given to enable_file_logging(), so the
    logger level is kept low enough to feed it.
    """
    resolved = _resolve_level(level)
    package_logger = logging.getLogger(_PACKAGE_LOGGER)

    if _console_handler is not None:
        _console_handler.setLevel(resolved)

    if _file_handler is not None:
        resolved = min(resolved, _file_handler.level)
    package_logger.setLevel(resolved)


def enable_file_logging(filename: Optional[str] = None, level: int = logging.DEBUG) -> str:
    """
    Log to a file in addition to the console.

    Parameters:
        filename: Log file path (timestamped name when None)
        level: Level for the file handler

    Returns:
        Path of the log file
    """
    global _file_handler

    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"mott_mc_{timestamp}.log"

    disable_file_logging()

    _file_handler = logging.FileHandler(filename, encoding="utf-8")
    _file_handler.setLevel(level)
    _file_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATE_FORMAT))

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.addHandler(_file_handler)
    if package_logger.level == logging.NOTSET or package_logger.level > level:
        package_logger.setLevel(level)

    return filename


def disable_file_logging() -> None:
    """Remove the file handler added by enable_file_logging()."""
    global _file_handler

    if _file_handler is not None:
        logging.getLogger(_PACKAGE_LOGGER).removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
