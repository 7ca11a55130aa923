"""Desktop runner generation and launch."""

from .runner import RUNNER_CRATE_NAME, DesktopRunner

__all__ = ["DesktopRunner", "RUNNER_CRATE_NAME"]
