from __future__ import annotations

from pathlib import Path

from mdspec.snippets.model import Fragment, file_map


def fragment_dir(fragment: Fragment, tmp_dir: Path) -> Path:
    return tmp_dir / fragment.slug


def save_fragment(fragment: Fragment, tmp_dir: Path) -> Path:
    """Write every file of ``fragment`` below its own directory in ``tmp_dir``.

    File names may contain directories (``pkg/model.scala``); they are created
    as needed. Returns the fragment directory.
    """
    directory = fragment_dir(fragment, tmp_dir)
    directory.mkdir(parents=True, exist_ok=True)
    for file_name, body in file_map(fragment.content).items():
        path = directory / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body.text, encoding="utf-8")
    return directory
