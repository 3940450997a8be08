"""
TOML-based config file loading for clgview.

Searches for `.clgview.toml`, `clgview.toml`, or `pyproject.toml [tool.clgview]`
walking up from the current directory. Explicit CLI flags take precedence over
config file values. Built-in defaults are used only when no config file exists
at all; a config file is never partially filled from them.

Example `clgview.toml`:

    space = "&nbsp;&nbsp;"
    subtitles-as-labels = true

    [item-ids]
    title = "title-"
    ...

    [item-classes]
    title = "outline-title"
    ...
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from clgview.options import NESTED_OPTIONS, REQUIRED_ITEM_KEYS, REQUIRED_OPTIONS

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


class ConfigFileError(ValueError):
    """Raised when a config file cannot be parsed."""


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".clgview.toml", "clgview.toml", "pyproject.toml"]


def _snake(key: str) -> str:
    return key.replace("-", "_")


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.clgview.toml` >
    `clgview.toml` > `pyproject.toml` (only if it has `[tool.clgview]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_clgview_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_clgview_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.clgview] section."""
    try:
        data = tomllib.loads(path.read_text())
        return "clgview" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> dict[str, Any]:
    """
    Load raw (not yet validated) options from a TOML file. Supports both
    standalone `clgview.toml` / `.clgview.toml` and `pyproject.toml` (extracts
    `[tool.clgview]`). TOML kebab-case keys are mapped to Python snake_case.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(f"Invalid config file {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("clgview", {})

    return _parse_config_data(data)


def _parse_config_data(data: Mapping[str, Any]) -> dict[str, Any]:
    """Map kebab-case keys to snake_case and drop keys we don't know about."""
    parsed: dict[str, Any] = {}
    for key, value in data.items():
        snake_key = _snake(key)
        if snake_key not in REQUIRED_OPTIONS:
            continue
        if snake_key in NESTED_OPTIONS and isinstance(value, dict):
            nested = cast(dict[str, Any], value)
            value = {
                _snake(sub_key): sub_value
                for sub_key, sub_value in nested.items()
                if _snake(sub_key) in REQUIRED_ITEM_KEYS
            }
        parsed[snake_key] = value
    return parsed


def merge_cli_with_config(
    config: Mapping[str, Any],
    overrides: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Return a copy of `config` with explicitly supplied CLI values applied.
    `None` in `overrides` means the flag was not given.
    """
    merged = dict(config)
    for key, value in overrides.items():
        if value is None:
            continue
        merged[key] = value
    return merged
