from clgview.items import Item, ItemError, ItemType, load_items, read_items
from clgview.options import DEFAULT_OPTIONS, ConfigurationError, validate_options
from clgview.render_state import RenderState
from clgview.renderer import OutputSink, Renderer, render_items

__all__ = [
    "DEFAULT_OPTIONS",
    "ConfigurationError",
    "Item",
    "ItemError",
    "ItemType",
    "OutputSink",
    "RenderState",
    "Renderer",
    "load_items",
    "read_items",
    "render_items",
    "validate_options",
]
