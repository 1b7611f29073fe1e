"""Shared fixtures: a stub Claude CLI executable and settings pointing at it."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from triage_wizard.core.config.models import Settings

_STUB_SCRIPT = """#!/bin/sh
DIR="$(dirname "$0")"
printf '%s\\n' "$@" > "$DIR/args.txt"
{sleep}
{read_stdin}
cat "$DIR/stdout.txt"
cat "$DIR/stderr.txt" >&2
exit {exit_code}
"""


class StubAgent:
    """Executable standing in for the ``claude`` CLI.

    Records its argv and stdin next to itself and replays canned stdout/stderr.
    """

    def __init__(self, directory: Path, stdout: str = "", stderr: str = "", exit_code: int = 0,
                 sleep: float | None = None, read_stdin: bool = True):
        directory.mkdir(parents=True)
        self.directory = directory
        self.path = directory / "claude"
        (directory / "stdout.txt").write_text(stdout, encoding="utf-8")
        (directory / "stderr.txt").write_text(stderr, encoding="utf-8")
        sleep_line = f"exec sleep {sleep}" if sleep else ""
        stdin_line = 'cat > "$DIR/stdin.txt"' if read_stdin else ""
        script = _STUB_SCRIPT.format(sleep=sleep_line, read_stdin=stdin_line, exit_code=exit_code)
        self.path.write_text(script, encoding="utf-8")
        self.path.chmod(self.path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    @property
    def args(self) -> list[str]:
        return (self.directory / "args.txt").read_text(encoding="utf-8").splitlines()

    @property
    def stdin(self) -> str:
        return (self.directory / "stdin.txt").read_text(encoding="utf-8")

    @property
    def was_called(self) -> bool:
        return (self.directory / "args.txt").exists()


@pytest.fixture
def make_stub(tmp_path):
    """Factory: ``make_stub(stdout=..., stderr=..., exit_code=..., sleep=..., read_stdin=...)``."""
    counter = iter(range(1000))

    def _make(**kwargs) -> StubAgent:
        return StubAgent(tmp_path / f"agent{next(counter)}", **kwargs)

    return _make


@pytest.fixture
def sample_bug():
    return {
        "id": 1900001,
        "summary": "Crash in nsTextFrame::Reflow when resizing window",
        "description": "Steps to reproduce:\n1. Open attached testcase.html\n2. Resize the window\n\nAddressSanitizer: heap-use-after-free",
        "comments": [{"text": "Found with grizzly."}],
    }


@pytest.fixture
def settings_for():
    """Build Settings whose agent binary is the given stub."""

    def _settings(stub: StubAgent | None = None, **overrides) -> Settings:
        if stub is not None:
            overrides.setdefault("agent_binary", str(stub.path))
        return Settings(**overrides)

    return _settings
