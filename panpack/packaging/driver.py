"""Drive Gradle to assemble the APK and adb to install it."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from ..errors import PackagingError
from ..logging import get_logger
from ..models import RELEASE, PackagingRequest
from ..toolchain.runner import CommandRunner

APK_OUTPUT_DIR = Path("app") / "build" / "outputs" / "apk"


class PackagingDriver:
    """Runs the template's Gradle build and optionally deploys the result."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner or CommandRunner()
        self.logger = get_logger("packaging")

    @staticmethod
    def gradle_task(build_profile: str) -> str:
        return "assembleRelease" if build_profile == RELEASE else "assembleDebug"

    @staticmethod
    def bundle_path(template_dir: Path, build_profile: str) -> Path:
        name = "app-release-unsigned.apk" if build_profile == RELEASE else "app-debug.apk"
        return template_dir / APK_OUTPUT_DIR / build_profile / name

    @staticmethod
    def gradle_command(template_dir: Path, build_profile: str) -> List[str]:
        wrapper = template_dir / ("gradlew.bat" if os.name == "nt" else "gradlew")
        launcher = str(wrapper) if wrapper.is_file() else "gradle"
        return [launcher, PackagingDriver.gradle_task(build_profile)]

    def package(self, request: PackagingRequest) -> Path:
        """Assemble the bundle and return its path; any failure is fatal."""
        template_dir = request.template_dir
        if not template_dir.is_dir():
            raise PackagingError(f"Android template directory {template_dir} does not exist")

        command = self.gradle_command(template_dir, request.build_profile)
        self.logger.info("Building APK with Gradle (%s)", command[-1])
        try:
            result = self.runner.run(command, cwd=template_dir)
        except (FileNotFoundError, PermissionError) as exc:
            raise PackagingError(
                f"Failed to run {command[0]}. Is the Android SDK installed?",
                command=command,
            ) from exc
        if not result.ok:
            raise PackagingError(
                "Gradle build failed",
                command=command,
                returncode=result.returncode,
                output=result.output,
            )

        bundle = self.bundle_path(template_dir, request.build_profile)
        if not bundle.is_file():
            raise PackagingError(
                f"Gradle reported success but no APK was found at {bundle}",
                command=command,
                returncode=result.returncode,
                output=result.output,
            )
        self.logger.info("APK built at %s", bundle)
        return bundle

    def deploy(self, bundle: Path) -> bool:
        """Install ``bundle`` on the attached device; failures are reported, not raised."""
        command = ["adb", "install", "-r", str(bundle)]
        self.logger.info("Installing %s on device", bundle.name)
        try:
            result = self.runner.run(command, cwd=bundle.parent)
        except FileNotFoundError:
            self.logger.warning("Failed to run adb. Is it in your PATH?")
            return False
        if not result.ok:
            self.logger.warning(
                "Install failed (exit status %d). Is a device connected? Check with: adb devices",
                result.returncode,
            )
            return False
        self.logger.info("Installed successfully")
        return True


__all__ = ["APK_OUTPUT_DIR", "PackagingDriver"]
