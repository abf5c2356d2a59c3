from __future__ import annotations

import json

import pytest

from devconsole.ui.console_ui import _markup
from devconsole.ui.theme import Theme


def test_theme_from_json_normalizes_int_colors(tmp_path) -> None:
    p = tmp_path / "theme.json"
    p.write_text(json.dumps({"warning": [255, 0, 0, 255], "small_scale": 0.05}), encoding="utf-8")

    t = Theme.from_json(p)

    assert t.warning == (1.0, 0.0, 0.0, 1.0)
    assert t.small_scale == 0.05
    assert t.severity_color("warning") == t.warning
    assert t.severity_color("error") == t.danger
    assert t.severity_color("normal") == t.text


def test_theme_from_json_rejects_bad_input(tmp_path) -> None:
    p = tmp_path / "theme.json"
    p.write_text(json.dumps({"danger": [1, 2]}), encoding="utf-8")
    with pytest.raises(ValueError):
        Theme.from_json(p)

    p.write_text(json.dumps({"nope": 1}), encoding="utf-8")
    with pytest.raises(ValueError):
        Theme.from_json(p)


def test_markup_wraps_non_normal_severities() -> None:
    assert _markup("plain", "normal") == "plain"
    assert _markup("careful", "warning") == "\1devcon_warning\1careful\2"
    assert _markup("x\1y\2", "error") == "\1devcon_error\1xy\2"
