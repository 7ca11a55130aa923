"""Synthesizes the JNI bridge crate that wraps a game crate for Android."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..errors import GenerationError
from ..logging import get_logger
from ..models import BridgeSpec, SourceModule
from ..templating import create_environment
from ..workspace import recreate_directory, relative_posix
from .atlas import DEFAULT_ATLAS, GlyphAtlasLayout
from .jni import native_symbol

BRIDGE_CRATE_NAME = "panpan_jni"
BRIDGE_LIBRARY_FILENAME = f"lib{BRIDGE_CRATE_NAME}.so"
WRAPPER_PREFIX = "panpan_user_"

# (parameters, call arguments) per lifecycle function.
_SIGNATURES: Dict[str, Tuple[List[Tuple[str, str]], str]] = {
    "init": ([], ""),
    "resize": ([("width", "i32"), ("height", "i32")], "width, height"),
    "render": ([], ""),
}

_NATIVE_METHODS = {
    "init": "nativeInit",
    "resize": "nativeResize",
    "render": "nativeRender",
}


@dataclass(frozen=True)
class Wrapper:
    """One ``extern "C"`` wrapper around a lifecycle function of the game crate."""

    name: str
    symbol: str
    params: str
    args: str
    present: bool


class BridgeGenerator:
    """Renders the bridge sources from a :class:`BridgeSpec`.

    ``generate`` and ``render_manifest`` are pure; only ``write_project``
    touches the filesystem.
    """

    LIB_TEMPLATE = "lib.rs.j2"
    MANIFEST_TEMPLATE = "Cargo.toml.j2"

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        atlas: GlyphAtlasLayout = DEFAULT_ATLAS,
    ) -> None:
        default_dir = Path(__file__).with_name("templates")
        directories = [templates_dir, default_dir] if templates_dir else [default_dir]
        self.atlas = atlas
        self._env = create_environment(directories)
        self.logger = get_logger("bridge")

    def wrappers(self, spec: BridgeSpec) -> List[Wrapper]:
        wrappers: List[Wrapper] = []
        for name in spec.contract:
            params, args = _SIGNATURES[name]
            present = spec.has(name)
            if present:
                rendered = ", ".join(f"{param}: {kind}" for param, kind in params)
            else:
                rendered = ", ".join(f"_{param}: {kind}" for param, kind in params)
            wrappers.append(
                Wrapper(
                    name=name,
                    symbol=f"{WRAPPER_PREFIX}{name}",
                    params=rendered,
                    args=args,
                    present=present,
                )
            )
        return wrappers

    def generate(self, spec: BridgeSpec) -> str:
        """Return the bridge ``lib.rs`` source for ``spec``."""
        wrappers = self.wrappers(spec)
        template = self._env.get_template(self.LIB_TEMPLATE)
        return template.render(
            module_name=spec.module_name,
            module_ident=spec.module_ident,
            native_class=spec.native_class,
            engine=spec.engine,
            atlas=self.atlas,
            wrappers=wrappers,
            wrappers_by_name={wrapper.name: wrapper for wrapper in wrappers},
            jni={
                name: native_symbol(spec.native_class, method)
                for name, method in _NATIVE_METHODS.items()
            },
        )

    def render_manifest(
        self,
        spec: BridgeSpec,
        *,
        module_path: str,
        engine_path: Optional[str] = None,
    ) -> str:
        """Return the bridge ``Cargo.toml`` with path dependencies relative to the bridge dir."""
        template = self._env.get_template(self.MANIFEST_TEMPLATE)
        return template.render(
            crate_name=BRIDGE_CRATE_NAME,
            module_name=spec.module_name,
            module_path=module_path,
            engine_path=engine_path,
        )

    def write_project(
        self,
        module: SourceModule,
        spec: BridgeSpec,
        bridge_dir: Path,
        *,
        engine_dir: Optional[Path] = None,
    ) -> Path:
        """Recreate ``bridge_dir`` and write the generated crate into it."""
        if spec.engine and engine_dir is None:
            raise GenerationError(
                f"Bridge for {spec.module_name} forwards to the panpan engine but no engine crate was given"
            )
        source = self.generate(spec)
        engine_path = relative_posix(engine_dir, bridge_dir) if engine_dir else None
        if engine_dir is None:
            self.logger.warning("panpan engine crate not found next to %s; some features may not work", module.root)
        manifest = self.render_manifest(
            spec,
            module_path=relative_posix(module.root, bridge_dir),
            engine_path=engine_path,
        )

        try:
            recreate_directory(bridge_dir)
            (bridge_dir / "src").mkdir()
            (bridge_dir / "src" / "lib.rs").write_text(source, encoding="utf-8")
            (bridge_dir / "Cargo.toml").write_text(manifest, encoding="utf-8")
        except OSError as exc:
            raise GenerationError(f"Could not write bridge project to {bridge_dir}: {exc}") from exc

        present = ", ".join(spec.present) or "none"
        self.logger.info("Generated bridge crate at %s (forwarding: %s)", bridge_dir, present)
        for name in spec.missing:
            self.logger.debug("No %s() in %s; emitted a no-op stub", name, spec.module_name)
        return bridge_dir


__all__ = [
    "BRIDGE_CRATE_NAME",
    "BRIDGE_LIBRARY_FILENAME",
    "BridgeGenerator",
    "WRAPPER_PREFIX",
    "Wrapper",
]
