"""Entry-point scanners and selection utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, Tuple

from ..errors import ConfigError
from ..models import SourceModule
from .base import EntryPointScanner
from .lexical import LexicalScanner
from .source import load_source_module
from .tree_sitter import TREE_SITTER_AVAILABLE, TreeSitterScanner

_ENTRY_POINT_GROUP = "panpack.scanners"

_BUILTIN_FACTORIES: Dict[str, Callable[[], EntryPointScanner]] = {
    "lexical": LexicalScanner,
    "syntax": TreeSitterScanner,
}


def get_scanner(strategy: str = "lexical") -> EntryPointScanner:
    """Return the scanner registered under ``strategy``.

    Built-in scanners win over plugins of the same name registered in the
    ``panpack.scanners`` entry-point group.
    """
    key = strategy.lower()
    factory = _BUILTIN_FACTORIES.get(key)
    if factory is None:
        for entry in _iter_entry_points():
            if entry.name.lower() == key:
                factory = _coerce_factory(entry)
                break
    if factory is None:
        raise ConfigError(f"Unknown discovery strategy: {strategy}")

    try:
        instance = factory()
    except RuntimeError as exc:
        raise ConfigError(str(exc)) from exc
    if not isinstance(instance, EntryPointScanner):
        raise ConfigError(f"Scanner factory for '{strategy}' did not return an EntryPointScanner")
    return instance


def discover_entry_points(module: SourceModule, scanner: EntryPointScanner | None = None) -> Tuple[str, ...]:
    """Scan the module's entry file and return its exported function names."""
    active = scanner or LexicalScanner()
    return tuple(active.scan(module.source))


def _coerce_factory(entry: metadata.EntryPoint) -> Callable[[], EntryPointScanner]:
    try:
        loaded = entry.load()
    except Exception as exc:  # pragma: no cover - plugin import failures vary
        raise ConfigError(f"Failed to load scanner entry point '{entry.name}': {exc}") from exc
    if isinstance(loaded, EntryPointScanner):
        return lambda: loaded
    if callable(loaded):
        return loaded
    raise ConfigError("Scanner entry point must be an EntryPointScanner subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "EntryPointScanner",
    "LexicalScanner",
    "TREE_SITTER_AVAILABLE",
    "TreeSitterScanner",
    "discover_entry_points",
    "get_scanner",
    "load_source_module",
]
