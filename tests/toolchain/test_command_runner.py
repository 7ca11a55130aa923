"""Tests for the subprocess wrapper."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from panpack.toolchain.runner import TAIL_LINES, CommandResult, CommandRunner


def test_default_runner_streams_and_keeps_tail(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    script = f"import sys\nfor i in range({TAIL_LINES + 5}):\n    print(i)\nsys.exit(3)\n"

    result = CommandRunner().run([sys.executable, "-c", script], cwd=tmp_path)

    assert result.returncode == 3
    assert not result.ok
    lines = result.output.splitlines()
    assert len(lines) == TAIL_LINES
    assert lines[0] == "5"
    assert lines[-1] == str(TAIL_LINES + 4)
    assert "0\n1\n" in capsys.readouterr().out


def test_default_runner_runs_in_cwd(tmp_path: Path) -> None:
    (tmp_path / "marker.txt").write_text("here", encoding="utf-8")
    script = "import pathlib, sys; sys.exit(0 if pathlib.Path('marker.txt').exists() else 1)"

    result = CommandRunner().run([sys.executable, "-c", script], cwd=tmp_path, capture=False)

    assert result.ok
    assert result.output == ""


def test_default_runner_missing_executable_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        CommandRunner().run(["panpack-no-such-tool"], cwd=tmp_path)


def test_injected_runner_receives_arguments(tmp_path: Path) -> None:
    calls = []

    def fake(args, *, cwd, capture=True):  # type: ignore[no-untyped-def]
        calls.append((args, cwd, capture))
        return CommandResult(args=args, returncode=0)

    result = CommandRunner(runner=fake).run(("echo", "hi"), cwd=tmp_path, capture=False)

    assert result.ok
    assert calls == [(["echo", "hi"], tmp_path, False)]
