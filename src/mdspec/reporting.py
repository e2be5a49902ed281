"""Console messages printed while suites run."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import typer

from mdspec.snippets.model import Fragment

EchoFn = Callable[[str], None]


def hl(text: str) -> str:
    return typer.style(text, fg=typer.colors.MAGENTA)


def red(text: str) -> str:
    return typer.style(text, fg=typer.colors.RED)


def green(text: str) -> str:
    return typer.style(text, fg=typer.colors.GREEN)


def yellow(text: str) -> str:
    return typer.style(text, fg=typer.colors.YELLOW)


def _label(fragment: Fragment) -> str:
    return f"Snippet {fragment.stable_name} ({fragment.hint})"


def run_started(docs_dir: Path, tmp_dir: Path, *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn(hl(f"Testing with docs in {docs_dir}, snippets extracted to: tmp={tmp_dir}"))
    echo_fn(hl(f"Started reading from {docs_dir.absolute()}"))
    echo_fn("")


def documents_read(file_names: Sequence[str], *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn(hl(f"Read files: {', '.join(file_names)}"))
    echo_fn("")


def suite_started(name: str, *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn(hl(name) + ":")


def fragment_testing(fragment: Fragment, directory: Path, *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn("")
    echo_fn(hl(f"{_label(fragment)} saved in {directory}, testing") + ":\n" + fragment.preview())


def fragment_ignored(fragment: Fragment, reason: str, *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn("")
    echo_fn(yellow(f"{_label(fragment)} was ignored ({reason})"))


def fragment_failed(fragment: Fragment, *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn(red(f"{_label(fragment)} failed"))


def fragment_missing_outputs(
    fragment: Fragment, unmatched: Sequence[str], *, echo_fn: EchoFn = typer.echo
) -> None:
    echo_fn(red(f"{_label(fragment)} should have produced outputs") + ":\n" + "\n".join(unmatched))


def fragment_succeeded_unexpectedly(fragment: Fragment, *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn(red(f"{_label(fragment)} should have produced error(s)"))


def fragment_missing_errors(
    fragment: Fragment,
    unmatched: Sequence[str],
    got: str,
    *,
    echo_fn: EchoFn = typer.echo,
) -> None:
    echo_fn(red(f"{_label(fragment)} should have produced errors") + ":\n" + "\n".join(unmatched))
    echo_fn(red("got") + ":\n" + got)


def fragment_succeeded(fragment: Fragment, *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn(green(f"{_label(fragment)} succeeded"))


def fragment_failed_as_expected(fragment: Fragment, *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn(green(f"{_label(fragment)} failed as expected"))


def suite_finished(
    passed: Sequence[Fragment],
    skipped: Sequence[Fragment],
    failed: Sequence[Fragment],
    *,
    echo_fn: EchoFn = typer.echo,
) -> None:
    counts = f"{len(passed)} succeed, {len(skipped)} ignored"
    if failed:
        echo_fn(red(f"Results: {counts}, {len(failed)} failed - some snippets failed:"))
        for fragment in failed:
            echo_fn(red(f"  {fragment.stable_name} ({fragment.hint})"))
    else:
        echo_fn(green(f"Results: {counts}, all snippets succeeded"))
    echo_fn("")


def run_finished(failed_suites: Sequence[str], *, echo_fn: EchoFn = typer.echo) -> None:
    echo_fn("")
    if failed_suites:
        echo_fn(red("Failed suites:"))
        for name in failed_suites:
            echo_fn(red(f"  {name}"))
        echo_fn(red("Fix them or add to ignored list"))
    else:
        echo_fn(green("All snippets run successfully!"))
