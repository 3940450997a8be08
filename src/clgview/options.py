"""
Render options and their validation.

Options are a plain mapping:

    {
        "space": "&nbsp;",
        "subtitles_as_labels": True,
        "item_ids": {"title": ..., "subtitle": ..., "marker": ...,
                     "list_container": ..., "list_item": ...},
        "item_classes": {... same five keys ...},
    }

Validation is all-or-nothing: every missing path is collected and reported in
one `ConfigurationError`. A valid mapping is returned unchanged. Nothing is
ever filled in from `DEFAULT_OPTIONS`.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, cast

REQUIRED_OPTIONS = ("space", "subtitles_as_labels", "item_ids", "item_classes")

REQUIRED_ITEM_KEYS = ("title", "subtitle", "marker", "list_container", "list_item")

# Option keys holding a per-element mapping of the `REQUIRED_ITEM_KEYS`
NESTED_OPTIONS = ("item_ids", "item_classes")

DEFAULT_OPTIONS: Mapping[str, Any] = MappingProxyType(
    {
        "space": "",
        "subtitles_as_labels": True,
        "item_ids": MappingProxyType(
            {
                "title": "title_id",
                "subtitle": "subtitle_id",
                "marker": "marker_id",
                "list_container": "container_id",
                "list_item": "item_id",
            }
        ),
        "item_classes": MappingProxyType(
            {
                "title": "title_class",
                "subtitle": "subtitle_class",
                "marker": "marker_class",
                "list_container": "container_class",
                "list_item": "item_class",
            }
        ),
    }
)


class ConfigurationError(ValueError):
    """Raised when required render options are missing."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__("Missing required options: " + ", ".join(self.missing))


def _is_set(options: Mapping[str, Any], key: str) -> bool:
    return options.get(key) is not None


def _missing_nested(options: Mapping[str, Any], key: str) -> list[str]:
    """Missing sub-keys of `options[key]`, as `key[sub]` paths. Empty if `key` is absent."""
    if not _is_set(options, key):
        return []
    nested = options[key]
    if not isinstance(nested, Mapping):
        return [f"{key}[{sub}]" for sub in REQUIRED_ITEM_KEYS]
    nested = cast(Mapping[str, Any], nested)
    return [f"{key}[{sub}]" for sub in REQUIRED_ITEM_KEYS if not _is_set(nested, sub)]


def find_missing_options(options: Mapping[str, Any]) -> list[str]:
    """
    List every missing option path, top-level keys first, then nested keys of
    `item_ids` and `item_classes` in that order.
    """
    missing = [key for key in REQUIRED_OPTIONS if not _is_set(options, key)]
    for key in NESTED_OPTIONS:
        missing.extend(_missing_nested(options, key))
    return missing


def validate_options(options: Mapping[str, Any]) -> Mapping[str, Any]:
    """
    Check that `options` has every required field. Returns the same object,
    or raises `ConfigurationError` listing all missing paths.
    """
    missing = find_missing_options(options)
    if missing:
        raise ConfigurationError(missing)
    return options
