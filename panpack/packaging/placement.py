"""Copy built libraries into the Android application template."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Sequence

from ..errors import PackagingError
from ..logging import get_logger
from ..models import BuildArtifact, PlacementReport

JNI_LIBS_DIR = Path("app") / "src" / "main" / "jniLibs"


class ArtifactPlacer:
    """Places each artifact at ``jniLibs/<abi>/<library_name>``, last write wins."""

    def __init__(self, library_name: str = "libpanpan.so") -> None:
        self.library_name = library_name
        self.logger = get_logger("placement")

    def destination(self, template_dir: Path, abi: str) -> Path:
        return template_dir / JNI_LIBS_DIR / abi / self.library_name

    def place(self, artifacts: Sequence[BuildArtifact], template_dir: Path) -> PlacementReport:
        """Copy every artifact that exists; warn about the ones that do not.

        A missing artifact is the only recoverable condition in the pipeline:
        packaging continues with the libraries that did land. Filesystem
        failures while copying raise :class:`PackagingError`.
        """
        report = PlacementReport()
        for artifact in artifacts:
            dest = self.destination(template_dir, artifact.profile.abi)
            if not artifact.path.is_file():
                self.logger.warning(
                    "Expected built library at %s not found; %s will be missing from the bundle",
                    artifact.path,
                    artifact.profile.abi,
                )
                if dest.is_file():
                    try:
                        dest.unlink()
                    except OSError as exc:
                        raise PackagingError(f"Could not remove stale library {dest}: {exc}") from exc
                    self.logger.debug("Removed stale %s", dest)
                report.missing.append(artifact)
                continue

            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(artifact.path, dest)
            except OSError as exc:
                raise PackagingError(
                    f"Could not place {artifact.profile.abi} library at {dest}: {exc}"
                ) from exc
            self.logger.info("Copied %s -> %s", artifact.path, dest)
            report.placed.append(dest)
        return report


__all__ = ["ArtifactPlacer", "JNI_LIBS_DIR"]
