"""Tests for config file loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from clgview.config import ConfigFileError, find_config_file, load_config, merge_cli_with_config
from clgview.options import ConfigurationError, validate_options

_FULL_TOML = """\
space = "&nbsp;"
subtitles-as-labels = false

[item-ids]
title = "t-"
subtitle = "s-"
marker = "m-"
list-container = "lc-"
list-item = "li-"

[item-classes]
title = "title"
subtitle = "subtitle"
marker = "marker"
list-container = "list"
list-item = "item"
"""


def test_find_config_clgview_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "clgview.toml"
    config_file.write_text('space = ""\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_dot_clgview_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "clgview.toml").write_text('space = ""\n')
    dot_config = tmp_path / ".clgview.toml"
    dot_config.write_text('space = " "\n')
    assert find_config_file(tmp_path) == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.clgview]\nspace = ""\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "clgview.toml"
    config_file.write_text('space = ""\n')
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file


def test_find_config_none_when_missing(tmp_path: Path) -> None:
    assert find_config_file(tmp_path) is None


def test_load_config_maps_kebab_case(tmp_path: Path) -> None:
    config_file = tmp_path / "clgview.toml"
    config_file.write_text(_FULL_TOML)
    config = load_config(config_file)
    assert config["space"] == "&nbsp;"
    assert config["subtitles_as_labels"] is False
    assert config["item_ids"]["list_container"] == "lc-"
    assert config["item_classes"]["list_item"] == "item"
    assert validate_options(config) is config


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text(
        '[project]\nname = "x"\n\n[tool.clgview]\nspace = "  "\nsubtitles-as-labels = true\n'
    )
    assert load_config(config_file) == {"space": "  ", "subtitles_as_labels": True}


def test_load_config_drops_unknown_keys(tmp_path: Path) -> None:
    config_file = tmp_path / "clgview.toml"
    config_file.write_text('space = ""\ntheme = "dark"\n\n[item-ids]\ntitle = "t"\nicon = "i"\n')
    assert load_config(config_file) == {"space": "", "item_ids": {"title": "t"}}


def test_load_config_partial_is_rejected_by_validation(tmp_path: Path) -> None:
    config_file = tmp_path / "clgview.toml"
    config_file.write_text('space = ""\n\n[item-ids]\ntitle = "t"\n')
    with pytest.raises(ConfigurationError) as exc:
        validate_options(load_config(config_file))
    assert exc.value.missing == [
        "subtitles_as_labels",
        "item_classes",
        "item_ids[subtitle]",
        "item_ids[marker]",
        "item_ids[list_container]",
        "item_ids[list_item]",
    ]


def test_load_config_invalid_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "clgview.toml"
    config_file.write_text("space = \n")
    with pytest.raises(ConfigFileError, match="Invalid config file"):
        load_config(config_file)


def test_merge_explicit_flags_win() -> None:
    config = {"space": "&nbsp;", "subtitles_as_labels": True}
    merged = merge_cli_with_config(config, {"space": "-", "subtitles_as_labels": False})
    assert merged == {"space": "-", "subtitles_as_labels": False}
    # The original config is untouched
    assert config == {"space": "&nbsp;", "subtitles_as_labels": True}


def test_merge_skips_unset_flags() -> None:
    config = {"space": "&nbsp;", "subtitles_as_labels": True}
    merged = merge_cli_with_config(config, {"space": None, "subtitles_as_labels": None})
    assert merged == config
