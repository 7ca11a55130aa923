"""Stage-tagged errors raised by the packaging pipeline."""

from __future__ import annotations

from typing import Optional, Sequence


class PipelineError(RuntimeError):
    """Base class for fatal pipeline failures.

    ``stage`` names the pipeline stage that failed so the CLI can report it.
    Subprocess failures additionally carry the command, its exit status and
    the last lines it printed.
    """

    stage = "pipeline"

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command) if command is not None else None
        self.returncode = returncode
        self.output = output

    def describe(self) -> str:
        """Return a multi-line diagnostic including subprocess details."""
        lines = [str(self)]
        if self.command:
            lines.append(f"  command: {' '.join(self.command)}")
        if self.returncode is not None:
            lines.append(f"  exit status: {self.returncode}")
        if self.output.strip():
            lines.append("  last output:")
            lines.extend(f"    {line}" for line in self.output.rstrip().splitlines())
        return "\n".join(lines)


class ConfigError(PipelineError):
    """Raised when .panpack.yml cannot be parsed or holds invalid values."""

    stage = "config"


class DiscoveryError(PipelineError):
    """Raised when the game module or its entry file cannot be located."""

    stage = "discovery"


class GenerationError(PipelineError):
    """Raised when generated sources cannot be written."""

    stage = "generation"


class ToolchainError(PipelineError):
    """Raised when a compiler invocation fails for any target."""

    stage = "build"

    def __init__(self, message: str, *, profile: object | None = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(message, **kwargs)
        self.profile = profile


class PackagingError(PipelineError):
    """Raised when the platform packaging system fails."""

    stage = "packaging"


__all__ = [
    "ConfigError",
    "DiscoveryError",
    "GenerationError",
    "PackagingError",
    "PipelineError",
    "ToolchainError",
]
