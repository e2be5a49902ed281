from __future__ import annotations

import re
from dataclasses import dataclass, field

from mdspec.documents import Document
from mdspec.snippets.model import Fragment, Location, Single

_FENCE_OPEN_RE = re.compile(r"(\s*)```(scala|java)(.*)")
_FENCE_CLOSE_RE = re.compile(r"(\s*)```\s*")
_SECTION_RE = re.compile(r"#+(.+)")


@dataclass
class _Reading:
    indent: int
    lines: list[str] = field(default_factory=list)


def _dedent(line: str, indent: int) -> str:
    return line[indent:] if len(line) > indent else line


def extract_fragments(document: Document) -> list[Fragment]:
    """Collect the ``scala``/``java`` fenced blocks of a document in order.

    A block left open at the end of the document is dropped. Text after the
    language tag of an opening fence is ignored.
    """
    location = Location(document=document.name, line_no=1, section="", ordinal=0)
    reading: _Reading | None = None
    fragments: list[Fragment] = []
    for line_no, line in enumerate(document.lines, start=1):
        if reading is not None:
            if _FENCE_CLOSE_RE.fullmatch(line):
                fragments.append(Fragment.at(location, Single("\n".join(reading.lines))))
                reading = None
            else:
                reading.lines.append(_dedent(line, reading.indent))
            continue
        opening = _FENCE_OPEN_RE.fullmatch(line)
        if opening:
            location = location.next(line_no)
            reading = _Reading(indent=len(opening.group(1)))
            continue
        section = _SECTION_RE.fullmatch(line)
        if section:
            location = Location(
                document=document.name,
                line_no=line_no,
                section=section.group(1).strip(),
                ordinal=0,
            )
    return fragments
