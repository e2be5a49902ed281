"""Turn markdown documents into suites of fragments and run them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Sequence

import typer

from mdspec import reporting
from mdspec.config import RunConfig
from mdspec.documents import Document, read_documents
from mdspec.runner.hooks import DEFAULT_HOOKS, RunnerHooks
from mdspec.runner.strategy import ExpectFailure, ExpectSuccess, Skip
from mdspec.runner.toolchain import DEFAULT_TOOLCHAIN, RunOutcome, run_fragment
from mdspec.runner.verify import verify
from mdspec.snippets.extract import extract_fragments
from mdspec.snippets.model import Fragment
from mdspec.storage import save_fragment

EchoFn = Callable[[str], None]
RunFragmentFn = Callable[..., RunOutcome]
SaveFragmentFn = Callable[[Fragment, Path], Path]


class NameFilter:
    """Glob over stable names where ``*`` matches any run of characters."""

    def __init__(self, pattern: str | None = None):
        self.pattern = pattern
        self._regex = (
            re.compile(".*".join(re.escape(part) for part in pattern.split("*")), re.DOTALL)
            if pattern is not None
            else None
        )

    def matches(self, stable_name: str) -> bool:
        if self._regex is None:
            return True
        return self._regex.fullmatch(stable_name) is not None


@dataclass(frozen=True)
class Suite:
    name: str
    fragments: tuple[Fragment, ...]


@dataclass(frozen=True)
class SuiteResult:
    name: str
    passed: tuple[Fragment, ...] = ()
    failed: tuple[Fragment, ...] = ()
    skipped: tuple[Fragment, ...] = ()

    @property
    def succeeded(self) -> bool:
        return not self.failed


def build_suite(document: Document, hooks: RunnerHooks = DEFAULT_HOOKS) -> Suite:
    fragments = [hooks.adjust_fragment(fragment) for fragment in extract_fragments(document)]
    return Suite(
        name=document.name.simple_name,
        fragments=tuple(hooks.adjust_fragments(fragments)),
    )


def _verify_fragment(
    fragment: Fragment,
    strategy: ExpectSuccess | ExpectFailure,
    *,
    tmp_dir: Path,
    toolchain: str,
    run_fragment_fn: RunFragmentFn,
    save_fragment_fn: SaveFragmentFn,
    echo_fn: EchoFn,
) -> bool:
    directory = save_fragment_fn(fragment, tmp_dir)
    reporting.fragment_testing(fragment, directory, echo_fn=echo_fn)
    outcome = run_fragment_fn(fragment, directory, toolchain=toolchain)
    verdict = verify(strategy, outcome)
    if isinstance(strategy, ExpectSuccess):
        if not verdict.exit_code_ok:
            reporting.fragment_failed(fragment, echo_fn=echo_fn)
        elif verdict.unmatched:
            reporting.fragment_missing_outputs(fragment, verdict.unmatched, echo_fn=echo_fn)
        else:
            reporting.fragment_succeeded(fragment, echo_fn=echo_fn)
    else:
        if not verdict.exit_code_ok:
            reporting.fragment_succeeded_unexpectedly(fragment, echo_fn=echo_fn)
        elif verdict.unmatched:
            reporting.fragment_missing_errors(
                fragment, verdict.unmatched, verdict.sanitized, echo_fn=echo_fn
            )
        else:
            reporting.fragment_failed_as_expected(fragment, echo_fn=echo_fn)
    return verdict.passed


def run_suite(
    suite: Suite,
    *,
    tmp_dir: Path,
    hooks: RunnerHooks = DEFAULT_HOOKS,
    name_filter: NameFilter | None = None,
    toolchain: str = DEFAULT_TOOLCHAIN,
    run_fragment_fn: RunFragmentFn = run_fragment,
    save_fragment_fn: SaveFragmentFn = save_fragment,
    echo_fn: EchoFn = typer.echo,
) -> SuiteResult:
    """Run the fragments of ``suite`` selected by ``name_filter``, one by one.

    A failing fragment never stops the remaining ones. A suite without any
    selected fragment produces an empty result and prints nothing.
    """
    name_filter = name_filter or NameFilter()
    selected = [f for f in suite.fragments if name_filter.matches(f.stable_name)]
    if not selected:
        return SuiteResult(name=suite.name)
    reporting.suite_started(suite.name, echo_fn=echo_fn)
    passed: list[Fragment] = []
    failed: list[Fragment] = []
    skipped: list[Fragment] = []
    for fragment in selected:
        strategy = hooks.how_to_run(fragment)
        if isinstance(strategy, Skip):
            reporting.fragment_ignored(fragment, strategy.reason, echo_fn=echo_fn)
            skipped.append(fragment)
            continue
        ok = _verify_fragment(
            fragment,
            strategy,
            tmp_dir=tmp_dir,
            toolchain=toolchain,
            run_fragment_fn=run_fragment_fn,
            save_fragment_fn=save_fragment_fn,
            echo_fn=echo_fn,
        )
        (passed if ok else failed).append(fragment)
    reporting.suite_finished(passed, skipped, failed, echo_fn=echo_fn)
    return SuiteResult(
        name=suite.name,
        passed=tuple(passed),
        failed=tuple(failed),
        skipped=tuple(skipped),
    )


def build_suites(
    documents: Iterable[Document], hooks: RunnerHooks = DEFAULT_HOOKS
) -> list[Suite]:
    return [build_suite(document, hooks) for document in documents]


def run_all(
    config: RunConfig,
    hooks: RunnerHooks = DEFAULT_HOOKS,
    *,
    read_documents_fn: Callable[[Path], list[Document]] = read_documents,
    run_fragment_fn: RunFragmentFn = run_fragment,
    save_fragment_fn: SaveFragmentFn = save_fragment,
    echo_fn: EchoFn = typer.echo,
) -> list[SuiteResult]:
    reporting.run_started(config.docs_dir, config.tmp_dir, echo_fn=echo_fn)
    documents = read_documents_fn(config.docs_dir)
    reporting.documents_read([d.name.file_name for d in documents], echo_fn=echo_fn)
    name_filter = NameFilter(config.filter)
    results = [
        run_suite(
            suite,
            tmp_dir=config.tmp_dir,
            hooks=hooks,
            name_filter=name_filter,
            toolchain=config.toolchain,
            run_fragment_fn=run_fragment_fn,
            save_fragment_fn=save_fragment_fn,
            echo_fn=echo_fn,
        )
        for suite in build_suites(documents, hooks)
    ]
    reporting.run_finished(failed_suite_names(results), echo_fn=echo_fn)
    return results


def failed_suite_names(results: Sequence[SuiteResult]) -> list[str]:
    return [result.name for result in results if not result.succeeded]


def exit_code_for(results: Sequence[SuiteResult]) -> int:
    return 1 if failed_suite_names(results) else 0
