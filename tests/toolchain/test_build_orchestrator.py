"""Tests for the per-architecture build loop."""

from __future__ import annotations

from pathlib import Path

import pytest

from panpack.errors import ToolchainError
from panpack.models import DEFAULT_TARGETS
from panpack.toolchain import BuildOrchestrator, BuildState, CommandRunner
from tests._fixtures.fake_toolchain import FakeToolchain

ARM64, ARMV7 = DEFAULT_TARGETS


def test_command_for_targets_api_level_and_profile() -> None:
    builder = BuildOrchestrator(api_level=24)

    assert builder.command_for(ARM64, release=False) == [
        "cargo",
        "ndk",
        "--target",
        "aarch64-linux-android",
        "--platform",
        "24",
        "build",
    ]
    assert builder.command_for(ARMV7, release=True)[-1] == "--release"


def test_build_all_runs_targets_in_order(
    tmp_path: Path, toolchain: FakeToolchain, command_runner: CommandRunner
) -> None:
    builder = BuildOrchestrator(command_runner)

    artifacts = builder.build_all(tmp_path, DEFAULT_TARGETS, release=True)

    assert toolchain.ndk_triples() == ["aarch64-linux-android", "armv7-linux-androideabi"]
    assert all(cwd == tmp_path for _, cwd in toolchain.calls)
    assert [artifact.profile for artifact in artifacts] == list(DEFAULT_TARGETS)
    assert artifacts[0].path == tmp_path / "target" / "aarch64-linux-android" / "release" / "libpanpan_jni.so"
    assert all(artifact.build_profile == "release" for artifact in artifacts)
    assert builder.state is BuildState.SUCCEEDED
    assert [event.state for event in builder.history] == [
        BuildState.BUILDING,
        BuildState.SUCCEEDED,
        BuildState.BUILDING,
        BuildState.SUCCEEDED,
    ]


def test_build_all_aborts_after_first_failure(
    tmp_path: Path, toolchain: FakeToolchain, command_runner: CommandRunner
) -> None:
    toolchain.fail_triples.add("aarch64-linux-android")
    builder = BuildOrchestrator(command_runner)

    with pytest.raises(ToolchainError) as excinfo:
        builder.build_all(tmp_path, DEFAULT_TARGETS)

    assert toolchain.ndk_triples() == ["aarch64-linux-android"]
    error = excinfo.value
    assert error.stage == "build"
    assert error.profile == ARM64
    assert error.returncode == 101
    assert "could not compile" in error.describe()
    assert builder.state is BuildState.ABORTED
    assert [event.state for event in builder.history] == [
        BuildState.BUILDING,
        BuildState.FAILED,
        BuildState.ABORTED,
    ]


def test_build_all_reports_missing_cargo_ndk(
    tmp_path: Path, toolchain: FakeToolchain, command_runner: CommandRunner
) -> None:
    toolchain.missing_tools.add("cargo")
    builder = BuildOrchestrator(command_runner)

    with pytest.raises(ToolchainError, match="cargo install cargo-ndk"):
        builder.build_all(tmp_path, DEFAULT_TARGETS)

    assert builder.state is BuildState.ABORTED


def test_build_all_returns_expected_paths_even_without_files(
    tmp_path: Path, toolchain: FakeToolchain, command_runner: CommandRunner
) -> None:
    toolchain.skip_artifacts.add("armv7-linux-androideabi")

    artifacts = BuildOrchestrator(command_runner).build_all(tmp_path, DEFAULT_TARGETS)

    assert [artifact.path.is_file() for artifact in artifacts] == [True, False]
