"""Generate, build and launch the desktop runner for a game crate."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..errors import GenerationError, ToolchainError
from ..logging import get_logger
from ..models import BridgeSpec, SourceModule, build_profile_name
from ..templating import create_environment
from ..toolchain.runner import CommandRunner
from ..workspace import recreate_directory, relative_posix

RUNNER_CRATE_NAME = "panpan_desktop_runner"


class DesktopRunner:
    """Wraps the game crate in a windowed executable and drives ``cargo build``."""

    MAIN_TEMPLATE = "main.rs.j2"
    MANIFEST_TEMPLATE = "Cargo.toml.j2"

    def __init__(self, runner: CommandRunner | None = None, templates_dir: Path | None = None) -> None:
        default_dir = Path(__file__).with_name("templates")
        directories = [templates_dir, default_dir] if templates_dir else [default_dir]
        self._env = create_environment(directories)
        self.runner = runner or CommandRunner()
        self.logger = get_logger("desktop")

    def generate_main(self, spec: BridgeSpec, *, engine: bool) -> str:
        template = self._env.get_template(self.MAIN_TEMPLATE)
        return template.render(
            module_name=spec.module_name,
            module_ident=spec.module_ident,
            title=spec.module_name,
            engine=engine,
            has={name: spec.has(name) for name in spec.contract},
        )

    def render_manifest(self, spec: BridgeSpec, *, module_path: str, engine_path: Optional[str]) -> str:
        template = self._env.get_template(self.MANIFEST_TEMPLATE)
        return template.render(
            crate_name=RUNNER_CRATE_NAME,
            module_name=spec.module_name,
            module_path=module_path,
            engine_path=engine_path,
        )

    def write_project(
        self,
        module: SourceModule,
        spec: BridgeSpec,
        runner_dir: Path,
        *,
        engine_dir: Optional[Path] = None,
    ) -> Path:
        main_rs = self.generate_main(spec, engine=engine_dir is not None)
        manifest = self.render_manifest(
            spec,
            module_path=relative_posix(module.root, runner_dir),
            engine_path=relative_posix(engine_dir, runner_dir) if engine_dir else None,
        )
        try:
            recreate_directory(runner_dir)
            (runner_dir / "src").mkdir()
            (runner_dir / "src" / "main.rs").write_text(main_rs, encoding="utf-8")
            (runner_dir / "Cargo.toml").write_text(manifest, encoding="utf-8")
        except OSError as exc:
            raise GenerationError(f"Could not write desktop runner to {runner_dir}: {exc}") from exc
        self.logger.info("Generated desktop runner at %s", runner_dir)
        return runner_dir

    @staticmethod
    def binary_path(runner_dir: Path, build_profile: str) -> Path:
        exe = f"{RUNNER_CRATE_NAME}.exe" if os.name == "nt" else RUNNER_CRATE_NAME
        return runner_dir / "target" / build_profile / exe

    def build(self, runner_dir: Path, *, release: bool = False) -> Path:
        """Compile the runner and return the produced executable."""
        build_profile = build_profile_name(release)
        command = ["cargo", "build"]
        if release:
            command.append("--release")
        self.logger.info("Building desktop runner (%s)", build_profile)
        try:
            result = self.runner.run(command, cwd=runner_dir)
        except FileNotFoundError as exc:
            raise ToolchainError("Failed to run cargo. Is the Rust toolchain installed?", command=command) from exc
        if not result.ok:
            raise ToolchainError(
                "Desktop build failed",
                command=command,
                returncode=result.returncode,
                output=result.output,
            )

        binary = self.binary_path(runner_dir, build_profile)
        if not binary.is_file():
            raise ToolchainError(f"Built binary not found at {binary}", command=command, returncode=result.returncode)
        return binary

    def launch(self, binary: Path, *, cwd: Path) -> int:
        """Run the game in the foreground and return its exit code."""
        self.logger.info("Running %s", binary)
        try:
            result = self.runner.run([str(binary)], cwd=cwd, capture=False)
        except OSError as exc:
            raise ToolchainError(f"Failed to launch {binary}: {exc}", command=[str(binary)]) from exc
        return result.returncode


__all__ = ["DesktopRunner", "RUNNER_CRATE_NAME"]
