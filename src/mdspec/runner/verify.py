from __future__ import annotations

from dataclasses import dataclass

from mdspec.runner.strategy import ExpectFailure, ExpectSuccess, Strategy
from mdspec.runner.toolchain import RunOutcome

# Prefixes the toolchain adds to reported names and diagnostics.
NOISE = ("snippet.this.", "snippet.", "[error] ")


@dataclass(frozen=True)
class Verdict:
    passed: bool
    exit_code_ok: bool
    unmatched: tuple[str, ...]
    sanitized: str


def sanitize(text: str) -> str:
    for noise in NOISE:
        text = text.replace(noise, "")
    return text


def _unmatched(expected: tuple[str, ...], sanitized: str) -> tuple[str, ...]:
    return tuple(item for item in expected if item.strip() not in sanitized)


def verify(strategy: Strategy, outcome: RunOutcome) -> Verdict:
    if isinstance(strategy, ExpectSuccess):
        sanitized = sanitize(outcome.stdout)
        exit_code_ok = outcome.exit_code == 0
        unmatched = _unmatched(strategy.outputs, sanitized)
    elif isinstance(strategy, ExpectFailure):
        sanitized = sanitize(outcome.stderr)
        exit_code_ok = outcome.exit_code != 0
        unmatched = _unmatched(strategy.errors, sanitized)
    else:
        raise ValueError(f"skipped fragments are not verified: {strategy!r}")
    return Verdict(
        passed=exit_code_ok and not unmatched,
        exit_code_ok=exit_code_ok,
        unmatched=unmatched,
        sanitized=sanitized,
    )
