"""Tests for logger configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from panpack.logging import configure_logging, get_logger


def test_get_logger_nests_under_panpack() -> None:
    assert get_logger("build").name == "panpack.build"
    assert get_logger().name == "panpack"


def test_configure_logging_without_file_uses_console_level() -> None:
    logger = configure_logging(verbose=False)

    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1


def test_configure_logging_is_idempotent() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_log_file_records_debug_even_when_console_is_quiet(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "panpack.log"
    logger = configure_logging(verbose=False, log_file=log_file)

    get_logger("build").debug("Running: cargo ndk build")
    get_logger("placement").warning("library missing")

    console = next(h for h in logger.handlers if not isinstance(h, logging.FileHandler))
    assert console.level == logging.INFO
    transcript = log_file.read_text(encoding="utf-8")
    assert "DEBUG panpack.build: Running: cargo ndk build" in transcript
    assert "WARNING panpack.placement: library missing" in transcript
