from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from devconsole.app_config import ConsoleConfig, load_config, sanitize_config
from devconsole.console import CommandRegistry
from devconsole.example import ExampleCommands
from devconsole.frontend import ConsoleFrontend


def _stderr_handler(stream=None) -> logging.Handler:
    # The console log is printed on stdout; stderr only gets warnings and worse.
    handler = logging.StreamHandler(stream)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    return handler


def run_headless(lines: list[str], *, config: ConsoleConfig) -> list[str]:
    """Execute console lines without a window and return the resulting log lines."""
    registry = CommandRegistry(history_capacity=config.history_capacity)
    frontend = ConsoleFrontend(registry=registry, config=config)
    frontend.enable()
    examples = ExampleCommands()
    registry.register(examples)
    try:
        for line in lines:
            frontend.submit(line)
        return frontend.log.lines()
    finally:
        registry.unregister(examples)
        frontend.disable()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="devconsole", description="In-game developer console demo")
    parser.add_argument(
        "--config",
        default=None,
        help="Console config JSON (default: ~/.irun/devconsole/config.json).",
    )
    parser.add_argument(
        "--exec",
        dest="exec_lines",
        action="append",
        default=None,
        help='Run a console line headless and print the log (repeatable). Example: --exec "testvector3 3,3,3"',
    )
    parser.add_argument(
        "--toggle-key",
        default=None,
        help="Panda3D key event that toggles the console overlay (default from config: f4).",
    )
    parser.add_argument(
        "--history",
        type=int,
        default=None,
        help="Number of successful commands kept for Up/Down recall.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help="Theme override JSON for the console overlay (keys are Theme field names).",
    )
    parser.add_argument(
        "--smoke-screenshot",
        default=None,
        help="Render a couple of frames, save a PNG screenshot to this path and exit.",
    )
    args = parser.parse_args(argv)

    cfg = load_config(Path(args.config) if args.config else None)
    if args.toggle_key:
        cfg.toggle_key = str(args.toggle_key)
    if args.history is not None:
        cfg.history_capacity = int(args.history)
    cfg = sanitize_config(cfg)

    if args.exec_lines:
        logging.basicConfig(level=logging.WARNING, handlers=[_stderr_handler()])
        for ln in run_headless(list(args.exec_lines), config=cfg):
            print(ln)
        sys.stdout.flush()
        return

    # Panda3D is only imported for the windowed demo.
    from devconsole.ui.theme import Theme

    theme = Theme.from_json(args.theme) if args.theme else None
    from devconsole.demo import DemoApp

    DemoApp(config=cfg, theme=theme, smoke_screenshot=args.smoke_screenshot).run()


if __name__ == "__main__":
    main()
