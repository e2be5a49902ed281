from __future__ import annotations

import sys
import textwrap
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest

from mdspec.documents import Document
from mdspec.runner.toolchain import RunOutcome


@pytest.fixture
def make_document():
    def _make(text: str, file_name: str = "guide.md") -> Document:
        return Document.from_text(file_name, textwrap.dedent(text).lstrip("\n"))

    return _make


@pytest.fixture
def outcome():
    def _make(
        exit_code: int = 0, stdout: str = "", stderr: str = ""
    ) -> RunOutcome:
        return RunOutcome(
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            combined=stdout + stderr,
        )

    return _make


@pytest.fixture
def fake_run_fragment():
    """Record toolchain invocations and answer with canned outcomes."""

    class _FakeRun:
        def __init__(self) -> None:
            self.calls: list[tuple[str, Path, str]] = []
            self.outcomes: dict[str, RunOutcome] = {}
            self.default = RunOutcome(exit_code=0, stdout="", stderr="", combined="")

        def __call__(self, fragment, directory: Path, *, toolchain: str) -> RunOutcome:
            self.calls.append((fragment.stable_name, directory, toolchain))
            return self.outcomes.get(fragment.stable_name, self.default)

    return _FakeRun()
