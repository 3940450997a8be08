#!/usr/bin/env python3
"""
clgview: Render parsed outline items as HTML fragments

Common usage:
  clgview items.json
  clgview items.json -o outline.html
  clgview items.json --config site/clgview.toml --no-subtitles-as-labels
  some-parser notes.txt | clgview -

Items are JSON: an array of objects like
  {"type": "header", "level": 1, "text": "Intro"}
  {"type": "list", "level": 0, "text": "First point", "marker": "A"}

Options come from `--config`, else the nearest `.clgview.toml`, `clgview.toml`
or `pyproject.toml [tool.clgview]`, else the built-in defaults.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from strif import atomic_output_file

from clgview.config import find_config_file, load_config, merge_cli_with_config
from clgview.items import Item, parse_items_json, read_items
from clgview.options import DEFAULT_OPTIONS
from clgview.renderer import Renderer


@dataclass
class Options:
    """Command-line options for the clgview tool."""

    items: str | None
    output: str
    config: str | None
    space: str | None
    subtitles_as_labels: bool | None
    version: bool


def _parse_args(args: list[str] | None = None) -> Options:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "items",
        nargs="?",
        type=str,
        default=None,
        help="JSON file of parsed items (use '-' for stdin)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="-",
        help="Output file (use '-' for stdout)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="TOML config file (default: nearest .clgview.toml, clgview.toml or pyproject.toml)",
    )
    parser.add_argument(
        "--space",
        type=str,
        default=None,
        help="Indentation unit repeated once per list level (overrides config)",
    )
    parser.add_argument(
        "--subtitles-as-labels",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="subtitles_as_labels",
        help="Show level-2 headings as list markers instead of headings (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    return Options(
        items=opts.items,
        output=opts.output,
        config=opts.config,
        space=opts.space,
        subtitles_as_labels=opts.subtitles_as_labels,
        version=opts.version,
    )


def _resolve_render_options(options: Options) -> Mapping[str, Any]:
    """
    Pick the config source and apply explicit flags. Built-in defaults are
    used only when there is no config file at all.
    """
    if options.config:
        base: Mapping[str, Any] = load_config(Path(options.config))
    else:
        config_path = find_config_file(Path.cwd())
        base = load_config(config_path) if config_path else DEFAULT_OPTIONS

    overrides = {"space": options.space, "subtitles_as_labels": options.subtitles_as_labels}
    if all(value is None for value in overrides.values()):
        return base
    return merge_cli_with_config(base, overrides)


def _read_input_items(path: str) -> list[Item]:
    if path == "-":
        return parse_items_json(sys.stdin.read())
    return read_items(Path(path))


def _write_output(output: str, content: str) -> None:
    if output == "-":
        sys.stdout.write(content)
        sys.stdout.flush()
        return
    with atomic_output_file(Path(output), make_parents=True) as temp_path:
        Path(temp_path).write_text(content, encoding="utf-8")


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the clgview CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("clgview")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not options.items:
        print(
            "Error: No input specified. Provide a JSON item file, or '-' for stdin."
            " Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    try:
        render_options = _resolve_render_options(options)
        items = _read_input_items(options.items)
        renderer = Renderer(items, render_options)
        _write_output(options.output, renderer.render_to_string())
    except ValueError as e:
        # Missing options, unparseable config, or malformed items.
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
