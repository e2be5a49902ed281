"""Fragment classification, execution and verification."""

from mdspec.runner.hooks import DEFAULT_HOOKS, RunnerHooks
from mdspec.runner.strategy import (
    ExpectFailure,
    ExpectSuccess,
    Skip,
    Strategy,
    classify,
    extract_errors,
    extract_outputs,
)
from mdspec.runner.toolchain import RunOutcome, run_command, run_fragment
from mdspec.runner.verify import Verdict, sanitize, verify

__all__ = [
    "DEFAULT_HOOKS",
    "ExpectFailure",
    "ExpectSuccess",
    "RunOutcome",
    "RunnerHooks",
    "Skip",
    "Strategy",
    "Verdict",
    "classify",
    "extract_errors",
    "extract_outputs",
    "run_command",
    "run_fragment",
    "sanitize",
    "verify",
]
