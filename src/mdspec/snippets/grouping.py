"""Reassemble multi-file examples split across several fenced blocks.

A block joins an example when its body carries a header such as::

    // file: model.scala - part of Shapes

Every block naming the same example becomes one file of a single merged
fragment. The merged fragment takes the place of the earliest contributor
and the remaining contributors are dropped.
"""

from __future__ import annotations

import re
from typing import Iterable

from mdspec.snippets.model import Fragment, Location, Multiple, Single, location_key

MULTI_FILE_HEADER_RE = re.compile(r"\s*// file: (.+) - part of (.+)")


def multi_file_header(text: str) -> tuple[str, str] | None:
    match = MULTI_FILE_HEADER_RE.search(text)
    if match is None:
        return None
    return match.group(1), match.group(2)


def _as_example_file(file_name: str, fragment: Fragment, body: str) -> Fragment:
    # Each file starts with a comment pointing back at the markdown line.
    return Fragment(
        locations=fragment.locations,
        content=Multiple({file_name: Single(f"// {fragment.hint}\n{body}")}),
    )


def _merge_group(contributors: list[Fragment]) -> Fragment:
    merged = contributors[0]
    for contributor in contributors[1:]:
        merged = merged.combine(contributor)
    return merged


def group_multi_file(fragments: Iterable[Fragment]) -> list[Fragment]:
    fragments = list(fragments)
    groups: dict[str, list[Fragment]] = {}
    for fragment in fragments:
        if not isinstance(fragment.content, Single):
            continue
        header = multi_file_header(fragment.content.text)
        if header is None:
            continue
        file_name, example_name = header
        groups.setdefault(example_name, []).append(
            _as_example_file(file_name, fragment, fragment.content.text)
        )

    merged_by_location: dict[Location, Fragment] = {}
    for contributors in groups.values():
        contributors.sort(key=lambda contributor: location_key(contributor.location))
        merged = _merge_group(contributors)
        for location in merged.locations:
            merged_by_location[location] = merged

    result: list[Fragment] = []
    for fragment in fragments:
        merged = merged_by_location.get(fragment.location)
        if merged is None:
            result.append(fragment)
        elif merged.location == fragment.location:
            result.append(merged)
    result.sort(key=lambda fragment: location_key(fragment.location))
    return result
