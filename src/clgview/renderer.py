"""
Single-pass HTML rendering of outline items.

The walk is a two-state machine (outside / inside a list run):

- A `list` item outside a run opens a container, then renders its row.
- A `list` item inside a run just renders its row.
- A `header` or `other` item inside a run closes the container first.
- End of stream inside a run closes the container.

Headings at level 1 are always emitted. Headings at level 2 are emitted only
when `subtitles_as_labels` is off, otherwise their role is taken over by the
markers shown on top-level list rows. Both levels share one title counter;
all list rows share one list counter that is never reset between runs.
Headings at any other level produce nothing.

Usage:
    from clgview.renderer import Renderer

    renderer = Renderer(items, options)  # raises ConfigurationError if invalid
    renderer.render(sys.stdout)
"""

from __future__ import annotations

import io
import sys
from collections.abc import Iterable, Mapping, Sequence
from functools import cache
from typing import Any, Protocol

from jinja2 import Environment, StrictUndefined, Template

from clgview.items import Item, ItemType, load_items
from clgview.options import validate_options
from clgview.render_state import RenderState


class OutputSink(Protocol):
    """Append-only text sink. Fragments are written in emission order."""

    def write(self, s: str, /) -> Any: ...


# Ids, classes, text and markers are escaped; `indent` is trusted option markup.
_TEMPLATES = {
    "title": '<h2 id="{{ id }}" class="{{ cls }}">{{ text }}</h2>',
    "subtitle": '<h3 id="{{ id }}" class="{{ cls }}">{{ text }}</h3>',
    "container_open": '<div id="{{ id }}" class="{{ cls }}">',
    "container_close": "</div>",
    "row_open": '<div style="display:flex">',
    "row_close": "</div>",
    "marker": '<div style="flex: 0.15" id="{{ id }}" class="{{ cls }}">{{ marker }}</div>',
    "list_item": (
        '<div style="flex: 2" id="{{ id }}" class="{{ cls }}">{{ indent|safe }}{{ text }}</div>'
    ),
}


@cache
def _environment() -> Environment:
    return Environment(autoescape=True, undefined=StrictUndefined)


@cache
def _template(name: str) -> Template:
    return _environment().from_string(_TEMPLATES[name])


def _emit(sink: OutputSink, name: str, **context: Any) -> None:
    sink.write(_template(name).render(**context))


def _element_attrs(options: Mapping[str, Any], key: str, n: int) -> dict[str, str]:
    """Identifier (prefix + counter) and class for the element kind `key`."""
    return {
        "id": f"{options['item_ids'][key]}{n}",
        "cls": str(options["item_classes"][key]),
    }


def _end_list(state: RenderState, sink: OutputSink) -> None:
    if state.leave_list():
        _emit(sink, "container_close")


def _handle_title(
    item: Item, options: Mapping[str, Any], state: RenderState, sink: OutputSink
) -> None:
    if item.level == 1:
        template = "title"
    elif item.level == 2 and not options["subtitles_as_labels"]:
        template = "subtitle"
    else:
        return

    # Subheadings keep the title id and class, and share its counter.
    _emit(sink, template, text=item.text, **_element_attrs(options, "title", state.next_title_id()))


def _handle_list_item(
    item: Item, options: Mapping[str, Any], state: RenderState, sink: OutputSink
) -> None:
    if state.enter_list():
        _emit(sink, "container_open", **_element_attrs(options, "list_container", state.list_count))

    n = state.next_list_id()
    _emit(sink, "row_open")
    if options["subtitles_as_labels"]:
        marker = item.marker if item.level == 0 and item.marker is not None else ""
        _emit(sink, "marker", marker=marker, **_element_attrs(options, "marker", n))
    _emit(
        sink,
        "list_item",
        indent=str(options["space"]) * item.level,
        text=item.text,
        **_element_attrs(options, "list_item", n),
    )
    _emit(sink, "row_close")


def render_items(
    items: Iterable[Item],
    options: Mapping[str, Any],
    sink: OutputSink,
    state: RenderState | None = None,
) -> RenderState:
    """
    Walk `items` once, writing fragments to `sink`. `options` must already be
    validated. Returns the final state.
    """
    if state is None:
        state = RenderState()

    for item in items:
        if item.type == ItemType.list:
            _handle_list_item(item, options, state, sink)
        else:
            _end_list(state, sink)
            if item.type == ItemType.header:
                _handle_title(item, options, state, sink)

    _end_list(state, sink)
    return state


class Renderer:
    """
    Renders a sequence of items with a validated set of options.

    Construction validates `options` and raises `ConfigurationError` listing
    every missing field. Each `render()` call starts from a fresh
    `RenderState`, so repeated calls produce identical output.
    """

    def __init__(self, items: Sequence[Item | Mapping[str, Any]], options: Mapping[str, Any]):
        self.options = validate_options(options)
        self.items = load_items(items)

    def render(self, sink: OutputSink | None = None) -> None:
        """Write all fragments to `sink` (default: stdout)."""
        render_items(self.items, self.options, sink if sink is not None else sys.stdout)

    def render_to_string(self) -> str:
        buffer = io.StringIO()
        self.render(buffer)
        return buffer.getvalue()
