from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Mapping, TypeAlias

from mdspec.documents import DocumentName

DEFAULT_FILE_NAME = "snippet.sc"

_SPACES_RE = re.compile(r" +")
_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]+")


@dataclass(frozen=True)
class Location:
    """Where a piece of code started in a markdown document.

    ``line_no`` is the 1-based line of the opening fence, ``section`` the
    title of the enclosing header (empty before the first header) and
    ``ordinal`` counts the fences opened in that section so far.
    """

    document: DocumentName
    line_no: int
    section: str
    ordinal: int

    @property
    def slug(self) -> str:
        simple_name = self.document.simple_name
        if self.section:
            raw = f"{simple_name}_{self.section}_{self.ordinal}"
        else:
            raw = f"{simple_name}_{self.ordinal}"
        return _UNSAFE_RE.sub("", _SPACES_RE.sub("-", raw))

    @property
    def stable_name(self) -> str:
        file_name = self.document.file_name
        if self.section:
            return f"{file_name}#{self.section}[{self.ordinal}]"
        return f"{file_name}[{self.ordinal}]"

    @property
    def hint(self) -> str:
        return f"{self.document.file_name}:{self.line_no}"

    def next(self, line_no: int) -> "Location":
        return replace(self, line_no=line_no, ordinal=self.ordinal + 1)


def location_key(location: Location) -> tuple[str, int]:
    return (location.document.file_name, location.line_no)


@dataclass(frozen=True)
class Single:
    text: str


@dataclass(frozen=True)
class Multiple:
    # Insertion order is the order in which file names were first seen.
    files: Mapping[str, Single]


Content: TypeAlias = Single | Multiple


def file_map(content: Content) -> dict[str, Single]:
    if isinstance(content, Single):
        return {DEFAULT_FILE_NAME: content}
    return dict(content.files)


def combine_content(left: Content, right: Content) -> Content:
    if isinstance(left, Single) and isinstance(right, Single):
        return Single(f"{left.text}\n\n{right.text}")
    left_files = file_map(left)
    right_files = file_map(right)
    files: dict[str, Single] = {}
    for file_name in [*left_files, *(name for name in right_files if name not in left_files)]:
        left_body = left_files.get(file_name)
        right_body = right_files.get(file_name)
        if left_body is not None and right_body is not None:
            files[file_name] = Single(f"{left_body.text}\n\n{right_body.text}")
        elif left_body is not None:
            files[file_name] = left_body
        elif right_body is not None:
            files[file_name] = right_body
    return Multiple(files)


@dataclass(frozen=True)
class Fragment:
    locations: tuple[Location, ...]
    content: Content

    def __post_init__(self) -> None:
        if not self.locations:
            raise ValueError("a fragment needs at least one location")

    @classmethod
    def at(cls, location: Location, content: Content) -> "Fragment":
        return cls(locations=(location,), content=content)

    @property
    def location(self) -> Location:
        return self.locations[0]

    @property
    def slug(self) -> str:
        return self.location.slug

    @property
    def stable_name(self) -> str:
        return self.location.stable_name

    @property
    def hint(self) -> str:
        return self.location.hint

    def combine(self, other: "Fragment") -> "Fragment":
        return Fragment(
            locations=self.locations + other.locations,
            content=combine_content(self.content, other.content),
        )

    def preview(self) -> str:
        if isinstance(self.content, Single):
            return self.content.text
        return "\n".join(body.text for body in self.content.files.values())
