from __future__ import annotations

import io
import logging

import pytest

from devconsole.__main__ import _stderr_handler, main, run_headless
from devconsole.app_config import ConsoleConfig


def _messages(lines: list[str]) -> list[str]:
    # Drop the "[HH:MM:SS]  " prefix.
    return [ln.split("]  ", 1)[1] for ln in lines]


def test_run_headless_executes_example_commands() -> None:
    lines = run_headless(
        ["testvector3 3,3,3", 'testlog "hello world"', "testenum beta", "testcalculate 1 2 3 4"],
        config=ConsoleConfig(),
    )
    msgs = _messages(lines)
    assert "(3.00, 3.00, 3.00)" in msgs
    assert "hello world" in msgs
    assert "BETA" in msgs
    assert "10" in msgs


def test_run_headless_reports_bad_vector() -> None:
    msgs = _messages(run_headless(["testvector3 3,3"], config=ConsoleConfig()))
    assert msgs[0] == "testvector3 3,3"
    assert msgs[1].startswith("[CONSOLE] Invalid command: Invalid Parameters")


def test_main_exec_prints_log(capsys, tmp_path) -> None:
    main(["--config", str(tmp_path / "none.json"), "--exec", "testbool on"])
    out = capsys.readouterr().out.splitlines()
    assert _messages(out) == ["testbool on", "True"]


def test_headless_stderr_handler_only_passes_warnings() -> None:
    stream = io.StringIO()
    handler = _stderr_handler(stream)
    root = logging.getLogger()
    root.addHandler(handler)
    try:
        run_headless(["nope", "testwarning"], config=ConsoleConfig())
    finally:
        root.removeHandler(handler)

    err = stream.getvalue()
    assert "Command not found" not in err
    assert "WARNING devconsole.example: careful" in err


def test_theme_option_rejects_bad_theme_file(tmp_path) -> None:
    theme = tmp_path / "theme.json"
    theme.write_text('{"nope": 1}', encoding="utf-8")
    with pytest.raises(ValueError):
        main(["--config", str(tmp_path / "none.json"), "--theme", str(theme)])
