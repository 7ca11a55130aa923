"""Logging utilities for panpack commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "panpack"
_CONSOLE_FORMAT = "[panpack] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a stage-scoped logger under the panpack hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure console output and, when ``log_file`` is given, a full DEBUG transcript.

    The console honours ``verbose``; the file always records DEBUG and above.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        transcript = logging.FileHandler(log_file, encoding="utf-8")
        transcript.setLevel(logging.DEBUG)
        transcript.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(transcript)

    return logger


__all__ = ["configure_logging", "get_logger"]
