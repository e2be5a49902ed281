from __future__ import annotations

import pytest

from mdspec.documents import DocumentName
from mdspec.snippets.model import (
    Fragment,
    Location,
    Multiple,
    Single,
    combine_content,
    file_map,
)

_DOC = DocumentName(simple_name="guide", file_name="guide.md")


def _location(line_no: int) -> Location:
    return Location(document=_DOC, line_no=line_no, section="", ordinal=1)


def test_single_plus_single_is_concatenated() -> None:
    assert combine_content(Single("a"), Single("b")) == Single("a\n\nb")


def test_bare_single_is_lifted_to_default_file() -> None:
    combined = combine_content(Single("a"), Multiple({"b.scala": Single("b")}))
    assert isinstance(combined, Multiple)
    assert list(combined.files) == ["snippet.sc", "b.scala"]
    assert file_map(Single("x")) == {"snippet.sc": Single("x")}


def test_shared_file_names_are_merged_left_first() -> None:
    left = Multiple({"a.scala": Single("a1"), "b.scala": Single("b1")})
    right = Multiple({"c.scala": Single("c2"), "a.scala": Single("a2")})
    combined = combine_content(left, right)
    assert isinstance(combined, Multiple)
    assert list(combined.files) == ["a.scala", "b.scala", "c.scala"]
    assert combined.files["a.scala"] == Single("a1\n\na2")
    assert combined.files["b.scala"] == Single("b1")
    assert combined.files["c.scala"] == Single("c2")


def test_fold_order_keeps_file_set_and_orders_bodies() -> None:
    left = Multiple({"a.scala": Single("1"), "b.scala": Single("2")})
    right = Multiple({"b.scala": Single("3")})
    forward = combine_content(left, right)
    backward = combine_content(right, left)
    assert isinstance(forward, Multiple) and isinstance(backward, Multiple)
    assert set(forward.files) == set(backward.files) == {"a.scala", "b.scala"}
    assert forward.files["b.scala"] == Single("2\n\n3")
    assert backward.files["b.scala"] == Single("3\n\n2")


def test_fragment_combine_concatenates_locations() -> None:
    first = Fragment.at(_location(3), Single("a"))
    second = Fragment.at(_location(9), Single("b"))
    combined = first.combine(second)
    assert combined.locations == (_location(3), _location(9))
    assert combined.location == _location(3)
    assert combined.content == Single("a\n\nb")


def test_fragment_requires_a_location() -> None:
    with pytest.raises(ValueError):
        Fragment(locations=(), content=Single("a"))


def test_preview_joins_files() -> None:
    fragment = Fragment.at(
        _location(1), Multiple({"a.scala": Single("a"), "b.scala": Single("b")})
    )
    assert fragment.preview() == "a\nb"
