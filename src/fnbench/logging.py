"""Logging configuration for fnbench.

All fnbench modules log under the ``fnbench`` logger.  The CLI calls
:func:`setup_logging` once per command: progress and run summaries go to
stderr, and ``--log-file`` captures every DEBUG measurement line.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "fnbench"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(levelname)-8s %(message)s"


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure and return the ``fnbench`` logger.

    Args:
        verbose: Show per-measurement DEBUG lines on the console.
        quiet: Only show warnings and errors.  *verbose* wins if both are set.
        log_file: Also write everything, at DEBUG, to this file.

    Calling this again replaces (and closes) the handlers installed by
    the previous call.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    console = logging.StreamHandler()
    console.setLevel(_console_level(verbose, quiet))
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``fnbench.<name>`` child logger."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")
