from __future__ import annotations

import json
import logging

from devconsole.app_config import ConsoleConfig, config_path, load_config, save_config


def test_missing_config_file_yields_defaults(tmp_path) -> None:
    cfg = load_config(tmp_path / "missing.json")
    assert cfg == ConsoleConfig()
    assert cfg.history_capacity == 6
    assert cfg.max_log_count == 75
    assert cfg.help_page_size == 15
    assert cfg.autocomplete_threshold == 2


def test_save_then_load_keeps_values(tmp_path) -> None:
    p = tmp_path / "nested" / "config.json"
    save_config(ConsoleConfig(history_capacity=10, toggle_key="f1", capture_logger=""), p)

    cfg = load_config(p)

    assert cfg.history_capacity == 10
    assert cfg.toggle_key == "f1"
    assert cfg.capture_logger == ""
    assert list(p.parent.glob("*.tmp")) == []


def test_invalid_values_are_reset_with_warning(tmp_path, caplog) -> None:
    p = tmp_path / "config.json"
    p.write_text(
        json.dumps({"history_capacity": 0, "help_page_size": "many", "log_level": "LOUD", "unknown": 1}),
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="devconsole"):
        cfg = load_config(p)

    assert cfg.history_capacity == 6
    assert cfg.help_page_size == 15
    assert cfg.log_level == "INFO"
    assert any("history_capacity" in r.getMessage() for r in caplog.records)


def test_unreadable_config_falls_back_to_defaults(tmp_path) -> None:
    p = tmp_path / "config.json"
    p.write_text("{not json", encoding="utf-8")
    assert load_config(p) == ConsoleConfig()


def test_config_dir_env_override(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("IRUN_DEVCONSOLE_CONFIG_DIR", str(tmp_path))
    assert config_path() == tmp_path / "config.json"
