from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

import typer

from mdspec.config import RunConfig, resolve_config, runner_defaults
from mdspec.exceptions import ConfigError
from mdspec.runner.hooks import DEFAULT_HOOKS, RunnerHooks
from mdspec.runner.toolchain import run_fragment
from mdspec.storage import save_fragment
from mdspec.suite import exit_code_for, run_all

PROG_NAME = "mdspec"

HooksFactory = Callable[[RunConfig], RunnerHooks]

app = typer.Typer(
    add_completion=False,
    help="Turn Scala snippets in Markdown files into test suites.",
)


def default_hooks(_config: RunConfig) -> RunnerHooks:
    return DEFAULT_HOOKS


def _context_value(ctx: typer.Context, key: str, default: Callable) -> Callable:
    obj = ctx.obj
    if isinstance(obj, Mapping):
        candidate = obj.get(key)
        if callable(candidate):
            return candidate
    return default


@app.command()
def test(
    ctx: typer.Context,
    docs: Path = typer.Argument(..., metavar="DOCS", help="Directory with markdown files."),
    tmp: Optional[Path] = typer.Argument(
        None, metavar="[TMP]", help="Directory where snippets are written."
    ),
    test_only: Optional[str] = typer.Option(
        None, "--test-only", "-f", help="Run only tests matching filter."
    ),
    extra: list[str] = typer.Option(
        [], "--extra", metavar="<key>=<value>", help="Values passed to custom runner hooks."
    ),
    toolchain: Optional[str] = typer.Option(
        None, "--toolchain", help="Executable used to run snippets (default: scala-cli)."
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to mdspec.toml."),
) -> None:
    """Run every snippet found in DOCS and compare it with its documented result."""
    try:
        run_config = resolve_config(
            docs_dir=docs,
            tmp_dir=tmp,
            filter=test_only,
            extras=extra,
            toolchain=toolchain,
            defaults=runner_defaults(config_path=config),
        )
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint=exc.option) from exc
    hooks_factory = _context_value(ctx, "hooks_factory", default_hooks)
    results = run_all(
        run_config,
        hooks_factory(run_config),
        run_fragment_fn=_context_value(ctx, "run_fragment", run_fragment),
        save_fragment_fn=_context_value(ctx, "save_fragment", save_fragment),
    )
    raise typer.Exit(code=exit_code_for(results))


def test_snippets(
    argv: Sequence[str] | None = None, hooks_factory: HooksFactory = default_hooks
) -> None:
    """Parse ``argv`` and run the suites with hooks built by ``hooks_factory``."""
    app(
        args=list(argv) if argv is not None else None,
        prog_name=PROG_NAME,
        obj={"hooks_factory": hooks_factory},
    )


def main() -> None:
    app(prog_name=PROG_NAME)
