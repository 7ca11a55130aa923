"""Pipeline orchestration for the build and run commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .bridge import BridgeGenerator
from .config import PanpackConfig, load_config
from .desktop import DesktopRunner
from .discovery import EntryPointScanner, discover_entry_points, get_scanner, load_source_module
from .errors import DiscoveryError, PackagingError
from .logging import get_logger
from .models import (
    BridgeSpec,
    PackagingRequest,
    PipelineResult,
    SourceModule,
    build_profile_name,
)
from .packaging import ArtifactPlacer, PackagingDriver
from .toolchain import BuildOrchestrator, CommandRunner
from .workspace import find_engine

BRIDGE_DIR = Path("target") / "panpan_jni"
RUNNER_DIR = Path("target") / "panpan_desktop_runner"
PLATFORMS = ("desktop", "android")


@dataclass
class PipelineContext:
    """Per-run state handed from stage to stage."""

    module: SourceModule
    config: PanpackConfig
    release: bool = False
    install: bool = False
    template_override: Optional[str] = None

    @property
    def build_profile(self) -> str:
        return build_profile_name(self.release)

    @property
    def bridge_dir(self) -> Path:
        return self.module.root / BRIDGE_DIR

    @property
    def runner_dir(self) -> Path:
        return self.module.root / RUNNER_DIR

    @property
    def template_dir(self) -> Path:
        return self.config.template_dir(self.template_override)

    @property
    def engine_dir(self) -> Optional[Path]:
        return find_engine(self.module.root, self.config.engine_path)


class Orchestrator:
    """Coordinates discovery, generation, compilation and packaging.

    Stages run strictly in sequence and only talk to each other through the
    filesystem and exit codes. Concurrent runs against the same module root
    are not supported.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        scanner: EntryPointScanner | None = None,
        generator: BridgeGenerator | None = None,
        builder: BuildOrchestrator | None = None,
        placer: ArtifactPlacer | None = None,
        packager: PackagingDriver | None = None,
        desktop: DesktopRunner | None = None,
    ) -> None:
        self.runner = runner or CommandRunner()
        self._scanner = scanner
        self.generator = generator or BridgeGenerator()
        self._builder = builder
        self._placer = placer
        self.packager = packager or PackagingDriver(self.runner)
        self.desktop = desktop or DesktopRunner(self.runner)
        self.logger = get_logger("orchestrator")

    # ------------------------------------------------------------------
    # Entry points

    def run_build(
        self,
        path: str,
        platform: str,
        *,
        release: bool = False,
        install: bool = False,
        android_template: str | None = None,
    ) -> PipelineResult:
        """Run the full pipeline for ``platform``."""
        if platform not in PLATFORMS:
            raise ValueError(f"Unknown platform: {platform}. Use 'desktop' or 'android'")
        context = self.prepare(
            path,
            release=release,
            install=install,
            android_template=android_template,
        )
        if platform == "android":
            return self.build_android(context)
        if install:
            self.logger.warning("--install only applies to Android builds; ignoring")
        return self.build_desktop(context)

    def run_game(self, path: str) -> int:
        """Build the desktop runner in debug mode and launch it, returning its exit code."""
        context = self.prepare(path)
        binary = self._compile_desktop(context, self.discover(context))
        return self.desktop.launch(binary, cwd=context.module.root)

    # ------------------------------------------------------------------
    # Stages

    def prepare(
        self,
        path: str,
        *,
        release: bool = False,
        install: bool = False,
        android_template: str | None = None,
    ) -> PipelineContext:
        root = Path(path).expanduser()
        if not root.is_dir():
            raise DiscoveryError(f"Game path {root} is not a directory")
        config = load_config(root)
        module = load_source_module(root)
        self.logger.info("Packaging crate %s from %s", module.name, module.root)
        self.logger.debug("Entry file: %s", module.entry_file)
        return PipelineContext(
            module=module,
            config=config,
            release=release,
            install=install,
            template_override=android_template,
        )

    def discover(self, context: PipelineContext) -> BridgeSpec:
        scanner = self._scanner or get_scanner(context.config.discovery.strategy)
        entry_points = discover_entry_points(context.module, scanner)
        self.logger.info(
            "Found %d exportable functions: %s",
            len(entry_points),
            ", ".join(entry_points) or "(none)",
        )
        return BridgeSpec(
            module_name=context.module.name,
            entry_points=entry_points,
            native_class=context.config.android.native_class,
            engine=context.engine_dir is not None,
        )

    def build_android(self, context: PipelineContext) -> PipelineResult:
        template_dir = context.template_dir
        if not template_dir.is_dir():
            raise PackagingError(f"Android template directory {template_dir} does not exist")
        spec = self.discover(context)
        self.generator.write_project(
            context.module,
            spec,
            context.bridge_dir,
            engine_dir=context.engine_dir,
        )

        builder = self._builder or BuildOrchestrator(
            self.runner, api_level=context.config.android.api_level
        )
        artifacts = builder.build_all(
            context.bridge_dir,
            context.config.android.targets,
            release=context.release,
        )

        placer = self._placer or ArtifactPlacer(context.config.android.library_name)
        placement = placer.place(artifacts, template_dir)

        request = PackagingRequest(
            template_dir=template_dir,
            build_profile=context.build_profile,
            install=context.install,
        )
        bundle = self.packager.package(request)

        installed = False
        if request.install:
            installed = self.packager.deploy(bundle)
        else:
            self.logger.info("To install, run: adb install -r %s", bundle)

        return PipelineResult(
            platform="android",
            build_profile=context.build_profile,
            entry_points=spec.entry_points,
            placement=placement,
            bundle=bundle,
            installed=installed,
        )

    def build_desktop(self, context: PipelineContext) -> PipelineResult:
        spec = self.discover(context)
        binary = self._compile_desktop(context, spec)
        return PipelineResult(
            platform="desktop",
            build_profile=context.build_profile,
            entry_points=spec.entry_points,
            binary=binary,
        )

    def _compile_desktop(self, context: PipelineContext, spec: BridgeSpec) -> Path:
        engine_dir = context.engine_dir
        if engine_dir is None:
            self.logger.warning("panpan engine crate not found next to %s; building without it", context.module.root)
        self.desktop.write_project(context.module, spec, context.runner_dir, engine_dir=engine_dir)
        binary = self.desktop.build(context.runner_dir, release=context.release)
        self.logger.info("Binary: %s", binary)
        return binary


__all__ = ["BRIDGE_DIR", "Orchestrator", "PLATFORMS", "PipelineContext", "RUNNER_DIR"]
