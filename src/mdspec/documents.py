"""Markdown documents read from the docs directory."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_MD_SUFFIX = ".md"
_MARKDOWN_SUFFIX = ".markdown"


@dataclass(frozen=True)
class DocumentName:
    simple_name: str
    file_name: str


@dataclass(frozen=True)
class Document:
    name: DocumentName
    lines: tuple[str, ...]

    @classmethod
    def from_text(cls, file_name: str, text: str) -> "Document":
        return cls(name=document_name(file_name), lines=tuple(split_lines(text)))


def split_lines(text: str) -> list[str]:
    # Only CR, LF and CRLF end a line; form feeds and U+2028 stay in the text.
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def is_markdown(file_name: str) -> bool:
    return file_name.lower().endswith(_MD_SUFFIX) or file_name.endswith(_MARKDOWN_SUFFIX)


def document_name(file_name: str) -> DocumentName:
    if file_name.lower().endswith(_MD_SUFFIX):
        simple_name = file_name[: -len(_MD_SUFFIX)]
    elif file_name.endswith(_MARKDOWN_SUFFIX):
        simple_name = file_name[: -len(_MARKDOWN_SUFFIX)]
    else:
        simple_name = file_name
    return DocumentName(simple_name=simple_name, file_name=file_name)


def read_document(path: Path) -> Document | None:
    if not is_markdown(path.name):
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return Document.from_text(path.name, text)


def read_documents(directory: Path) -> list[Document]:
    """Return every markdown document under ``directory``.

    Entries are visited in file-name order at each level, descending into
    subdirectories as they are met. Unreadable files are skipped.
    """
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError:
        return []
    documents: list[Document] = []
    for entry in entries:
        if entry.is_dir():
            documents.extend(read_documents(entry))
            continue
        document = read_document(entry)
        if document is not None:
            documents.append(document)
    return documents
