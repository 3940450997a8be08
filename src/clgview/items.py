"""
Outline items consumed by the renderer.

Items are produced by an upstream parser and arrive here either as `Item`
values or as plain JSON-style mappings:

    {"type": "header", "level": 1, "text": "Intro"}
    {"type": "list", "level": 0, "text": "a", "marker": "•"}

Shape checks happen only at this loading boundary. Once converted, items are
trusted by the renderer.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, cast


class ItemError(ValueError):
    """Raised when item data cannot be converted into `Item` values."""


class ItemType(str, Enum):
    """Kind of outline node."""

    header = "header"
    list = "list"
    other = "other"

    @classmethod
    def from_value(cls, value: object) -> ItemType:
        """Map a raw type value to an `ItemType`, treating anything unknown as `other`."""
        if isinstance(value, ItemType):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.other


@dataclass(frozen=True)
class Item:
    """
    One parsed outline node.

    `level` is the heading depth for headers (1 = top, 2 = sub) and the
    indentation depth for list entries. `marker` only matters for list
    entries at level 0.
    """

    type: ItemType
    level: int
    text: str
    marker: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int | None = None) -> Item:
        where = f"item {index}" if index is not None else "item"
        if "text" not in data or data["text"] is None:
            raise ItemError(f"{where} is missing 'text'")

        level = data.get("level", 0)
        # bool is an int subclass but never a meaningful depth
        if isinstance(level, bool) or not isinstance(level, int) or level < 0:
            raise ItemError(f"{where} has invalid level: {level!r}")

        marker = data.get("marker")
        return cls(
            type=ItemType.from_value(data.get("type")),
            level=level,
            text=str(data["text"]),
            marker=None if marker is None else str(marker),
        )


def load_items(data: Sequence[Item | Mapping[str, Any]]) -> list[Item]:
    """Convert a sequence of mappings (or `Item`s, passed through) into `Item`s."""
    items: list[Item] = []
    for i, entry in enumerate(data):
        if isinstance(entry, Item):
            items.append(entry)
        elif isinstance(entry, Mapping):
            items.append(Item.from_dict(cast(Mapping[str, Any], entry), index=i))
        else:
            raise ItemError(f"item {i} is not an object: {entry!r}")
    return items


def parse_items_json(text: str) -> list[Item]:
    """
    Parse items from JSON text. Accepts a top-level array of item objects or
    an object with an `items` array.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ItemError(f"Invalid item JSON: {e}") from e

    if isinstance(data, dict):
        data = cast(dict[str, Any], data).get("items")
    if not isinstance(data, list):
        raise ItemError("Item JSON must be an array or an object with an 'items' array")

    return load_items(cast(list[Any], data))


def read_items(path: Path) -> list[Item]:
    """Read items from a JSON file."""
    return parse_items_json(path.read_text(encoding="utf-8"))
