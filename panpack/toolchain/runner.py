"""Blocking subprocess execution for external toolchains."""

from __future__ import annotations

import subprocess
import sys
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Sequence

TAIL_LINES = 40


@dataclass
class CommandResult:
    """Exit status of one toolchain invocation plus the tail of its output."""

    args: List[str]
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Runs toolchain commands to completion, echoing their output.

    The callable behind the runner is injectable so tests can stand in for
    cargo, gradle and adb. It receives ``(args, cwd=..., capture=...)`` and
    returns a :class:`CommandResult`; a missing executable surfaces as
    :class:`FileNotFoundError`.
    """

    def __init__(self, runner: Callable[..., CommandResult] | None = None) -> None:
        self._runner = runner or self._default_runner

    def run(self, args: Sequence[str], *, cwd: Path, capture: bool = True) -> CommandResult:
        """Run ``args`` in ``cwd``.

        With ``capture`` the output is streamed line by line to stdout and the
        last lines are kept for diagnostics; without it the child inherits the
        terminal, which interactive programs need.
        """
        return self._runner(list(args), cwd=cwd, capture=capture)

    @staticmethod
    def _default_runner(args: List[str], *, cwd: Path, capture: bool = True) -> CommandResult:
        if not capture:
            completed = subprocess.run(args, cwd=str(cwd), check=False)
            return CommandResult(args=args, returncode=completed.returncode)

        tail: deque[str] = deque(maxlen=TAIL_LINES)
        with subprocess.Popen(
            args,
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            bufsize=1,
        ) as process:
            assert process.stdout is not None
            for line in process.stdout:
                sys.stdout.write(line)
                sys.stdout.flush()
                tail.append(line.rstrip("\n"))
            returncode = process.wait()
        return CommandResult(args=args, returncode=returncode, output="\n".join(tail))


__all__ = ["CommandResult", "CommandRunner", "TAIL_LINES"]
