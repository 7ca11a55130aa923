"""Core data models shared across panpack pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

DEBUG = "debug"
RELEASE = "release"

CONTRACT_NAMES: Tuple[str, ...] = ("init", "resize", "render")
DEFAULT_NATIVE_CLASS = "com.lucidum.panpan.MainActivity"


def build_profile_name(release: bool) -> str:
    """Return the cargo/gradle profile name for the release flag."""
    return RELEASE if release else DEBUG


@dataclass(frozen=True)
class SourceModule:
    """A game crate as read from disk: its name, root and entry file text."""

    name: str
    root: Path
    entry_file: Path
    source: str

    @property
    def ident(self) -> str:
        """Crate name as it appears in Rust paths."""
        return self.name.replace("-", "_")


@dataclass(frozen=True)
class BridgeSpec:
    """Everything the bridge generator needs; output is a pure function of it."""

    module_name: str
    entry_points: Tuple[str, ...]
    native_class: str = DEFAULT_NATIVE_CLASS
    contract: Tuple[str, ...] = CONTRACT_NAMES
    # Whether the shared panpan engine crate is linked and should track the screen size.
    engine: bool = False

    @property
    def module_ident(self) -> str:
        return self.module_name.replace("-", "_")

    def has(self, name: str) -> bool:
        return name in self.entry_points

    @property
    def present(self) -> Tuple[str, ...]:
        return tuple(name for name in self.contract if name in self.entry_points)

    @property
    def missing(self) -> Tuple[str, ...]:
        return tuple(name for name in self.contract if name not in self.entry_points)


@dataclass(frozen=True)
class TargetProfile:
    """One Android ABI and the Rust target triple that produces it."""

    abi: str
    triple: str


DEFAULT_TARGETS: Tuple[TargetProfile, ...] = (
    TargetProfile(abi="arm64-v8a", triple="aarch64-linux-android"),
    TargetProfile(abi="armeabi-v7a", triple="armv7-linux-androideabi"),
)


@dataclass(frozen=True)
class BuildArtifact:
    """Shared library expected from one successful cross compilation."""

    profile: TargetProfile
    path: Path
    build_profile: str


@dataclass(frozen=True)
class PackagingRequest:
    """Inputs for the Gradle packaging step."""

    template_dir: Path
    build_profile: str
    install: bool = False


@dataclass
class PlacementReport:
    """Outcome of copying artifacts into the application template."""

    placed: List[Path] = field(default_factory=list)
    missing: List[BuildArtifact] = field(default_factory=list)


@dataclass
class PipelineResult:
    """Summary returned to the CLI after a successful build."""

    platform: str
    build_profile: str
    entry_points: Tuple[str, ...]
    placement: Optional[PlacementReport] = None
    bundle: Optional[Path] = None
    binary: Optional[Path] = None
    installed: bool = False
