from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeAlias

from mdspec.snippets.grouping import multi_file_header
from mdspec.snippets.model import Fragment, file_map

USING_DIRECTIVE = "//> using"
SBT_DEPENDENCY_MARKER = "libraryDependencies"
EXPECTED_ERROR_MARKER = "// expected error:"

_OUTPUT_START_RE = re.compile(r"\s*// expected output:\s*")
_ERROR_START_RE = re.compile(r"\s*// expected error:\s*")
_COMMENT_RE = re.compile(r"\s*// (.+)")


@dataclass(frozen=True)
class Skip:
    reason: str


@dataclass(frozen=True)
class ExpectFailure:
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExpectSuccess:
    outputs: tuple[str, ...] = ()


Strategy: TypeAlias = Skip | ExpectFailure | ExpectSuccess


def _extract_messages(text: str, start_re: re.Pattern[str]) -> list[str]:
    messages: list[str] = []
    collecting: list[str] | None = None
    for line in text.split("\n"):
        if collecting is not None:
            comment = _COMMENT_RE.fullmatch(line)
            if comment:
                collecting.append(comment.group(1))
            else:
                messages.append("\n".join(collecting))
                collecting = None
        elif start_re.fullmatch(line):
            collecting = []
    if collecting is not None:
        messages.append("\n".join(collecting))
    return messages


def extract_outputs(text: str) -> list[str]:
    """Return the comment blocks following each ``// expected output:`` line."""
    return _extract_messages(text, _OUTPUT_START_RE)


def extract_errors(text: str) -> list[str]:
    """Return the comment blocks following each ``// expected error:`` line."""
    return _extract_messages(text, _ERROR_START_RE)


def classify_text(text: str) -> Strategy:
    # Runnable examples carry at least one using directive or are a part of
    # a multi-file example; everything else is treated as pseudocode.
    if USING_DIRECTIVE not in text and multi_file_header(text) is None:
        return Skip("pseudocode")
    if SBT_DEPENDENCY_MARKER in text:
        return Skip("sbt example")
    if EXPECTED_ERROR_MARKER in text:
        return ExpectFailure(tuple(extract_errors(text)))
    return ExpectSuccess(tuple(extract_outputs(text)))


def reduce_strategies(left: Strategy, right: Strategy) -> Strategy:
    if isinstance(left, Skip):
        return left
    if isinstance(right, Skip):
        return right
    if isinstance(left, ExpectFailure) and isinstance(right, ExpectFailure):
        return ExpectFailure(left.errors + right.errors)
    if isinstance(left, ExpectFailure):
        return left
    if isinstance(right, ExpectFailure):
        return right
    return ExpectSuccess(left.outputs + right.outputs)


def classify(fragment: Fragment) -> Strategy:
    """Decide whether a fragment is skipped, expected to fail or to succeed.

    Every file of the fragment is classified on its own. The first skip wins,
    otherwise any expected failure wins and collects the errors of all files,
    otherwise the expected outputs of all files are concatenated. A multi-file
    fragment without files is skipped.
    """
    strategies = [classify_text(body.text) for body in file_map(fragment.content).values()]
    if not strategies:
        return Skip("empty example")
    strategy = strategies[0]
    for other in strategies[1:]:
        strategy = reduce_strategies(strategy, other)
    return strategy
