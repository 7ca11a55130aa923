"""Jinja environment shared by the bridge and desktop runner generators."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined


def create_environment(directories: Iterable[Path]) -> Environment:
    """Return an environment that renders source code verbatim.

    Earlier directories take precedence, so a project can shadow individual
    packaged templates.
    """
    seen: set[str] = set()
    ordered: list[str] = []
    for directory in directories:
        key = str(directory)
        if key not in seen:
            ordered.append(key)
            seen.add(key)
    return Environment(
        loader=FileSystemLoader(ordered),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


__all__ = ["create_environment"]
