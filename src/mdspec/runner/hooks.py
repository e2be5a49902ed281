from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from mdspec.runner.strategy import Strategy, classify
from mdspec.snippets.grouping import group_multi_file
from mdspec.snippets.model import Fragment


def keep_fragment(fragment: Fragment) -> Fragment:
    return fragment


@dataclass(frozen=True)
class RunnerHooks:
    """Customization points applied to every document.

    ``adjust_fragment`` runs on each extracted fragment (e.g. to interpolate
    templates or add directives), ``adjust_fragments`` on the list of one
    document (e.g. to group multi-file examples) and ``how_to_run`` picks the
    verification strategy of each resulting fragment.
    """

    adjust_fragment: Callable[[Fragment], Fragment] = keep_fragment
    adjust_fragments: Callable[[list[Fragment]], list[Fragment]] = group_multi_file
    how_to_run: Callable[[Fragment], Strategy] = classify


DEFAULT_HOOKS = RunnerHooks()
