"""External toolchain invocation."""

from .builder import BuildEvent, BuildOrchestrator, BuildState
from .runner import CommandResult, CommandRunner

__all__ = ["BuildEvent", "BuildOrchestrator", "BuildState", "CommandResult", "CommandRunner"]
