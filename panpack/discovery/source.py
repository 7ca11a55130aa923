"""Locate and read the game crate that the pipeline packages."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Tuple

from ..errors import DiscoveryError
from ..models import SourceModule

MANIFEST_NAME = "Cargo.toml"
ENTRY_CANDIDATES: Tuple[str, ...] = ("src/lib.rs", "src/main.rs")


def detect_module_name(root: Path) -> str:
    """Return ``[package].name`` from the crate manifest."""
    manifest = root / MANIFEST_NAME
    try:
        text = manifest.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DiscoveryError(f"No {MANIFEST_NAME} found in {root}") from exc
    except OSError as exc:
        raise DiscoveryError(f"Could not read {manifest}: {exc}") from exc

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise DiscoveryError(f"Could not parse {manifest}: {exc}") from exc

    package = data.get("package")
    name = package.get("name") if isinstance(package, dict) else None
    if not isinstance(name, str) or not name.strip():
        raise DiscoveryError(f"Could not detect crate name in {manifest}")
    return name.strip()


def find_entry_file(root: Path) -> Path:
    for candidate in ENTRY_CANDIDATES:
        path = root / candidate
        if path.is_file():
            return path
    expected = " or ".join(ENTRY_CANDIDATES)
    raise DiscoveryError(f"Could not find {expected} in {root}")


def load_source_module(root: Path | str) -> SourceModule:
    """Read the crate manifest and its entry file into a :class:`SourceModule`."""
    module_root = Path(root).expanduser()
    if not module_root.is_dir():
        raise DiscoveryError(f"Game path {module_root} is not a directory")
    module_root = module_root.resolve()

    name = detect_module_name(module_root)
    entry_file = find_entry_file(module_root)
    try:
        source = entry_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DiscoveryError(f"Could not read {entry_file}: {exc}") from exc
    return SourceModule(name=name, root=module_root, entry_file=entry_file, source=source)


__all__ = ["ENTRY_CANDIDATES", "MANIFEST_NAME", "detect_module_name", "find_entry_file", "load_source_module"]
