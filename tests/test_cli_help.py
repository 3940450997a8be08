"""Tests for CLI help text."""

from __future__ import annotations

import pytest

from clgview.cli import main


def _render_help(capsys: pytest.CaptureFixture[str]) -> str:
    """Run `clgview --help` via CLI entrypoint and return captured stdout."""
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    return capsys.readouterr().out


def test_help_includes_tagline(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "clgview: Render parsed outline items as HTML fragments" in out


def test_help_includes_common_usage(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "Common usage:" in out
    assert "clgview items.json -o outline.html" in out


def test_help_lists_override_flags(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "--space" in out
    assert "--subtitles-as-labels" in out
    assert "--no-subtitles-as-labels" in out
