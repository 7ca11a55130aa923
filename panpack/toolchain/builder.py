"""Per-architecture cross compilation of the bridge crate."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from ..bridge.generator import BRIDGE_LIBRARY_FILENAME
from ..errors import ToolchainError
from ..logging import get_logger
from ..models import BuildArtifact, TargetProfile, build_profile_name
from .runner import CommandRunner


class BuildState(str, Enum):
    IDLE = "idle"
    BUILDING = "building"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class BuildEvent:
    """One state transition recorded by the orchestrator."""

    state: BuildState
    profile: Optional[TargetProfile] = None


class BuildOrchestrator:
    """Runs ``cargo ndk`` once per target profile, in order, stopping at the first failure.

    There is no partial success: if any target fails the run is aborted and the
    remaining targets are never attempted.
    """

    def __init__(self, runner: CommandRunner | None = None, *, api_level: int = 21) -> None:
        self.runner = runner or CommandRunner()
        self.api_level = api_level
        self.logger = get_logger("build")
        self.history: List[BuildEvent] = []
        self.state = BuildState.IDLE

    def command_for(self, profile: TargetProfile, *, release: bool) -> List[str]:
        command = [
            "cargo",
            "ndk",
            "--target",
            profile.triple,
            "--platform",
            str(self.api_level),
            "build",
        ]
        if release:
            command.append("--release")
        return command

    @staticmethod
    def artifact_path(bridge_dir: Path, profile: TargetProfile, build_profile: str) -> Path:
        """Where cargo leaves the shared library for ``profile``."""
        return bridge_dir / "target" / profile.triple / build_profile / BRIDGE_LIBRARY_FILENAME

    def build_all(
        self,
        bridge_dir: Path,
        profiles: Sequence[TargetProfile],
        *,
        release: bool = False,
    ) -> List[BuildArtifact]:
        """Compile every profile and return the artifacts they are expected to produce."""
        self.history = []
        self.state = BuildState.IDLE
        build_profile = build_profile_name(release)
        artifacts: List[BuildArtifact] = []

        for index, profile in enumerate(profiles, start=1):
            self._transition(BuildState.BUILDING, profile)
            command = self.command_for(profile, release=release)
            self.logger.info(
                "[%d/%d] Building %s (%s, %s)",
                index,
                len(profiles),
                profile.abi,
                profile.triple,
                build_profile,
            )
            self.logger.debug("Running: %s", " ".join(command))
            try:
                result = self.runner.run(command, cwd=bridge_dir)
            except FileNotFoundError as exc:
                self._abort(profile)
                raise ToolchainError(
                    "Failed to run cargo-ndk. Install with: cargo install cargo-ndk",
                    profile=profile,
                    command=command,
                ) from exc

            if not result.ok:
                self._abort(profile)
                raise ToolchainError(
                    f"cargo ndk failed for {profile.abi} ({profile.triple})",
                    profile=profile,
                    command=command,
                    returncode=result.returncode,
                    output=result.output,
                )

            self._transition(BuildState.SUCCEEDED, profile)
            artifacts.append(
                BuildArtifact(
                    profile=profile,
                    path=self.artifact_path(bridge_dir, profile, build_profile),
                    build_profile=build_profile,
                )
            )
        return artifacts

    def _abort(self, profile: TargetProfile) -> None:
        self._transition(BuildState.FAILED, profile)
        self._transition(BuildState.ABORTED, None)

    def _transition(self, state: BuildState, profile: Optional[TargetProfile]) -> None:
        self.state = state
        self.history.append(BuildEvent(state=state, profile=profile))
        self.logger.debug("Build state -> %s%s", state.value, f" ({profile.abi})" if profile else "")


__all__ = ["BuildEvent", "BuildOrchestrator", "BuildState"]
