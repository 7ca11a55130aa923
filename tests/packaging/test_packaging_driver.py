"""Tests for the Gradle and adb driver."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from panpack.errors import PackagingError
from panpack.models import PackagingRequest
from panpack.packaging import PackagingDriver
from panpack.toolchain import CommandRunner
from tests._fixtures.fake_toolchain import FakeToolchain
from tests._fixtures.module_builder import ModuleBuilder

GRADLEW = "gradlew.bat" if os.name == "nt" else "gradlew"


def test_gradle_task_and_bundle_path_follow_profile(tmp_path: Path) -> None:
    assert PackagingDriver.gradle_task("debug") == "assembleDebug"
    assert PackagingDriver.gradle_task("release") == "assembleRelease"
    assert PackagingDriver.bundle_path(tmp_path, "release") == (
        tmp_path / "app" / "build" / "outputs" / "apk" / "release" / "app-release-unsigned.apk"
    )


def test_gradle_command_prefers_wrapper(module_builder: ModuleBuilder, tmp_path: Path) -> None:
    template = module_builder.android_template()

    assert PackagingDriver.gradle_command(template, "debug") == [str(template / GRADLEW), "assembleDebug"]
    assert PackagingDriver.gradle_command(tmp_path, "release") == ["gradle", "assembleRelease"]


def test_package_returns_bundle(
    module_builder: ModuleBuilder, toolchain: FakeToolchain, command_runner: CommandRunner
) -> None:
    template = module_builder.android_template()

    bundle = PackagingDriver(command_runner).package(PackagingRequest(template, "debug"))

    assert bundle == template / "app" / "build" / "outputs" / "apk" / "debug" / "app-debug.apk"
    assert bundle.is_file()
    assert toolchain.calls[-1][1] == template


def test_package_gradle_failure_is_fatal(
    module_builder: ModuleBuilder, toolchain: FakeToolchain, command_runner: CommandRunner
) -> None:
    template = module_builder.android_template()
    toolchain.gradle_returncode = 1

    with pytest.raises(PackagingError, match="Gradle build failed") as excinfo:
        PackagingDriver(command_runner).package(PackagingRequest(template, "debug"))

    assert excinfo.value.stage == "packaging"
    assert "FAILURE" in excinfo.value.describe()


def test_package_missing_bundle_is_fatal(
    module_builder: ModuleBuilder, toolchain: FakeToolchain, command_runner: CommandRunner
) -> None:
    template = module_builder.android_template()
    toolchain.gradle_writes_bundle = False

    with pytest.raises(PackagingError, match="no APK was found"):
        PackagingDriver(command_runner).package(PackagingRequest(template, "release"))


def test_package_missing_template_is_fatal(tmp_path: Path, command_runner: CommandRunner) -> None:
    with pytest.raises(PackagingError, match="does not exist"):
        PackagingDriver(command_runner).package(PackagingRequest(tmp_path / "android", "debug"))


def test_package_missing_gradle_is_fatal(
    tmp_path: Path, toolchain: FakeToolchain, command_runner: CommandRunner
) -> None:
    toolchain.missing_tools.add("gradle")

    with pytest.raises(PackagingError, match="Failed to run gradle"):
        PackagingDriver(command_runner).package(PackagingRequest(tmp_path, "debug"))


def test_deploy_installs_bundle(tmp_path: Path, toolchain: FakeToolchain, command_runner: CommandRunner) -> None:
    bundle = tmp_path / "app-debug.apk"

    assert PackagingDriver(command_runner).deploy(bundle) is True
    assert toolchain.commands("adb") == [["adb", "install", "-r", str(bundle)]]


@pytest.mark.parametrize("missing_adb", [False, True])
def test_deploy_failure_is_reported_not_raised(
    tmp_path: Path,
    toolchain: FakeToolchain,
    command_runner: CommandRunner,
    caplog: pytest.LogCaptureFixture,
    missing_adb: bool,
) -> None:
    if missing_adb:
        toolchain.missing_tools.add("adb")
    else:
        toolchain.adb_returncode = 1

    with caplog.at_level("WARNING", logger="panpack"):
        installed = PackagingDriver(command_runner).deploy(tmp_path / "app-debug.apk")

    assert installed is False
    assert any(record.levelname == "WARNING" for record in caplog.records)
