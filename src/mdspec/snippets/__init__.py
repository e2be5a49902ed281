"""Snippet extraction subpackage for mdspec."""

from mdspec.snippets.extract import extract_fragments
from mdspec.snippets.grouping import group_multi_file, multi_file_header
from mdspec.snippets.model import (
    DEFAULT_FILE_NAME,
    Content,
    Fragment,
    Location,
    Multiple,
    Single,
    combine_content,
    file_map,
    location_key,
)

__all__ = [
    "Content",
    "DEFAULT_FILE_NAME",
    "Fragment",
    "Location",
    "Multiple",
    "Single",
    "combine_content",
    "extract_fragments",
    "file_map",
    "group_multi_file",
    "location_key",
    "multi_file_header",
]
