"""
Explicit logging setup for applications using PyAlgebra.

The kernel only ever writes to module loggers under the 'pyalgebra'
namespace, and the package logger carries a NullHandler, so nothing is
emitted unless the application opts in. configure_logging() is that opt-in:
call it once at process start. It never runs implicitly.

Three files are written to the log directory:
    errors.log    ERROR and above (hard errors, logged just before raising)
    warnings.log  WARNING only (singular / ill-conditioned results)
    events.log    everything at or above the configured level
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

PACKAGE_LOGGER = 'pyalgebra'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
ERROR_FILE = 'errors.log'
WARNING_FILE = 'warnings.log'
EVENT_FILE = 'events.log'

# Marker attribute so a second call can find and replace our handlers
_HANDLER_TAG = '_pyalgebra_handler'


class _ExactLevelFilter(logging.Filter):
    """Pass records of exactly one level."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno == self.level


def default_log_dir() -> Path:
    """Directory used when configure_logging() is not given one."""
    return Path(tempfile.gettempdir()) / 'pyalgebra'


def configure_logging(
    log_dir: str | Path | None = None,
    level: int = logging.INFO,
    clear: bool = False,
    capture_warnings: bool = False,
) -> Path:
    """
    Attach file handlers to the 'pyalgebra' logger.

    Args:
        log_dir: Directory for the log files. Created if missing.
            Defaults to <tempdir>/pyalgebra.
        level: Threshold for events.log and for the package logger.
        clear: Truncate existing log files instead of appending.
        capture_warnings: Also route warnings.warn() calls from any library
            through logging into warnings.log. The kernel already logs its
            own warnings, so this is only needed for third-party warnings.

    Returns:
        The resolved log directory.
    """
    directory = Path(log_dir) if log_dir is not None else default_log_dir()
    directory.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            logger.removeHandler(handler)
            handler.close()

    mode = 'w' if clear else 'a'
    formatter = logging.Formatter(LOG_FORMAT)

    error_handler = logging.FileHandler(directory / ERROR_FILE, mode=mode)
    error_handler.setLevel(logging.ERROR)

    warning_handler = logging.FileHandler(directory / WARNING_FILE, mode=mode)
    warning_handler.setLevel(logging.WARNING)
    warning_handler.addFilter(_ExactLevelFilter(logging.WARNING))

    event_handler = logging.FileHandler(directory / EVENT_FILE, mode=mode)
    event_handler.setLevel(level)

    for handler in (error_handler, warning_handler, event_handler):
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
        logger.addHandler(handler)

    logger.setLevel(min(level, logging.WARNING))

    if capture_warnings:
        logging.captureWarnings(True)
        py_warnings = logging.getLogger('py.warnings')
        for handler in list(py_warnings.handlers):
            if getattr(handler, _HANDLER_TAG, False):
                py_warnings.removeHandler(handler)
        py_warnings.addHandler(warning_handler)

    return directory
