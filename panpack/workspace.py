"""Filesystem helpers for pipeline-owned generated projects."""

from __future__ import annotations

import os
import shutil
from pathlib import Path, PurePath
from typing import Optional

from .logging import get_logger

ENGINE_DIR_NAME = "panpan"

_logger = get_logger("workspace")


def recreate_directory(path: Path) -> Path:
    """Delete ``path`` if it exists and create it empty."""
    if path.exists():
        _logger.debug("Removing previous generated project at %s", path)
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def relative_posix(target: Path, start: Path) -> str:
    """Relative path from ``start`` to ``target`` with forward slashes, as Cargo expects."""
    try:
        relative = os.path.relpath(target, start)
    except ValueError:
        # Different drives on Windows; Cargo accepts absolute paths too.
        relative = str(target)
    return PurePath(relative).as_posix()


def find_engine(module_root: Path, override: Optional[Path] = None) -> Optional[Path]:
    """Locate the shared engine crate next to the module's container directory."""
    candidate = override if override is not None else module_root.parent / ENGINE_DIR_NAME
    if (candidate / "Cargo.toml").is_file():
        return candidate
    return None


__all__ = ["ENGINE_DIR_NAME", "find_engine", "recreate_directory", "relative_posix"]
