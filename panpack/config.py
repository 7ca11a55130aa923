"""Configuration loading for panpack (.panpack.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .models import DEFAULT_NATIVE_CLASS, DEFAULT_TARGETS, TargetProfile

CONFIG_FILENAME = ".panpack.yml"


@dataclass
class AndroidConfig:
    """Android packaging settings."""

    template: str = "android"
    api_level: int = 21
    native_class: str = DEFAULT_NATIVE_CLASS
    library_name: str = "libpanpan.so"
    targets: List[TargetProfile] = field(default_factory=lambda: list(DEFAULT_TARGETS))


@dataclass
class DiscoveryConfig:
    """Entry-point discovery settings."""

    strategy: str = "lexical"


@dataclass
class PanpackConfig:
    """Represents the settings defined in .panpack.yml."""

    root: Path
    android: AndroidConfig = field(default_factory=AndroidConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    engine_path: Optional[Path] = None

    def template_dir(self, override: str | None = None) -> Path:
        """Resolve the Android application template relative to the module root."""
        raw = Path(override or self.android.template).expanduser()
        return raw if raw.is_absolute() else (self.root / raw)


def load_config(config_path: Path) -> PanpackConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PanpackConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    android = AndroidConfig()
    android_data = _as_dict(data.get("android"))
    if android_data:
        template = _as_str(android_data.get("template"))
        if template:
            android.template = template
        if android_data.get("api_level") is not None:
            api_level = _as_int(android_data.get("api_level"))
            if api_level is None or api_level <= 0:
                raise ConfigError("android.api_level must be a positive integer")
            android.api_level = api_level
        native_class = _as_str(android_data.get("native_class"))
        if native_class:
            android.native_class = native_class
        library_name = _as_str(android_data.get("library_name"))
        if library_name:
            android.library_name = library_name
        if "targets" in android_data:
            android.targets = _parse_targets(android_data.get("targets"))

    discovery = DiscoveryConfig()
    discovery_data = _as_dict(data.get("discovery"))
    if discovery_data:
        strategy = _as_str(discovery_data.get("strategy"))
        if strategy:
            # Resolved against the built-in and plugin scanners when the pipeline runs.
            discovery.strategy = strategy.strip().lower()

    engine_path = None
    engine_str = _as_str(data.get("engine_path"))
    if engine_str:
        engine_path = (root / engine_str).resolve()

    return PanpackConfig(
        root=root,
        android=android,
        discovery=discovery,
        engine_path=engine_path,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_targets(value: Any) -> List[TargetProfile]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigError("android.targets must be a list of {abi, triple} mappings")
    targets: List[TargetProfile] = []
    seen: set[str] = set()
    for item in value:
        entry = _as_dict(item)
        abi = _as_str(entry.get("abi"))
        triple = _as_str(entry.get("triple"))
        if not abi or not triple:
            raise ConfigError("each android.targets entry needs both 'abi' and 'triple'")
        if abi in seen:
            raise ConfigError(f"duplicate ABI in android.targets: {abi}")
        seen.add(abi)
        targets.append(TargetProfile(abi=abi, triple=triple))
    if not targets:
        raise ConfigError("android.targets must list at least one target")
    return targets


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "AndroidConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "DiscoveryConfig",
    "PanpackConfig",
    "load_config",
]
