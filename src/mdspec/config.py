from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Iterable, Mapping, TypeAlias
import tomllib

from mdspec.exceptions import ConfigError
from mdspec.runner.toolchain import DEFAULT_TOOLCHAIN

DEFAULT_CONFIG_NAME = "mdspec.toml"
TMP_DIR_PREFIX = "docs-snippets"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


@dataclass(frozen=True)
class RunConfig:
    """Resolved configuration of one mdspec run.

    ``extra`` holds the free-form ``--extra key=value`` pairs; mdspec itself
    ignores them, they are there for custom runner hooks.
    """

    docs_dir: Path
    tmp_dir: Path
    filter: str | None = None
    extra: Mapping[str, str] = field(default_factory=dict)
    toolchain: str = DEFAULT_TOOLCHAIN


def _load_toml(path: Path, *, required: bool = False) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        if required:
            raise ConfigError(f"Config file not found: {path}", option="--config")
        return {}
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}", option="--config") from exc
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}", option="--config") from exc
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    """Read the mdspec TOML file.

    The implicit `mdspec.toml` may be absent; an explicit `config_path` must
    exist. A file that exists but does not parse is always an error.
    """
    if config_path is None:
        base = root if root is not None else Path.cwd()
        return _load_toml(base / DEFAULT_CONFIG_NAME)
    return _load_toml(config_path, required=True)


def runner_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("runner", {})
    return section if isinstance(section, dict) else {}


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def parse_extra(entry: str) -> tuple[str, str]:
    parts = entry.split("=")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ConfigError(f"Expected pair, got: {entry}", option="--extra")
    return parts[0], parts[1]


def parse_extras(entries: Iterable[str]) -> dict[str, str]:
    extras: dict[str, str] = {}
    for entry in entries:
        key, value = parse_extra(entry)
        extras[key] = value
    return extras


def _extra_table(value: TomlValue) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("[runner].extra must be a table", option="extra")
    return {str(key): str(item) for key, item in value.items()}


def _optional_str(value: TomlValue, key: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"[runner].{key} must be a string", option=key)
    return value


def resolve_config(
    *,
    docs_dir: Path,
    tmp_dir: Path | None = None,
    filter: str | None = None,
    extras: Iterable[str] = (),
    toolchain: str | None = None,
    defaults: TomlTable | None = None,
) -> RunConfig:
    """Combine explicit options with file defaults into a ``RunConfig``.

    Explicit options win. Without a configured scratch directory a fresh
    temporary one is created.
    """
    merged = merge_payload(
        {
            "tmp_dir": str(tmp_dir) if tmp_dir is not None else None,
            "test_only": filter,
            "toolchain": toolchain,
        },
        defaults or {},
    )
    extra = _extra_table(merged.get("extra"))
    extra.update(parse_extras(extras))
    resolved_filter = _optional_str(merged.get("test_only"), "test_only")
    resolved_toolchain = _optional_str(merged.get("toolchain"), "toolchain")
    resolved_tmp = _optional_str(merged.get("tmp_dir"), "tmp_dir")
    return RunConfig(
        docs_dir=docs_dir,
        tmp_dir=(
            Path(resolved_tmp)
            if resolved_tmp is not None
            else Path(tempfile.mkdtemp(prefix=TMP_DIR_PREFIX))
        ),
        filter=resolved_filter,
        extra=extra,
        toolchain=resolved_toolchain or DEFAULT_TOOLCHAIN,
    )
