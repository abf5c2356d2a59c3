"""Developer console settings, optionally persisted at ~/.irun/devconsole/config.json."""

from __future__ import annotations

import json
import logging
import os
import secrets
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class ConsoleConfig:
    # Successful command lines kept for Up/Down recall.
    history_capacity: int = 6
    # Log lines kept in the console view (oldest dropped first).
    max_log_count: int = 75
    # Commands listed per `commands <page>` page.
    help_page_size: int = 15
    # Ghost-text autocompletion starts once the input is longer than this.
    autocomplete_threshold: int = 2
    # Panda3D key event that toggles the console overlay.
    toggle_key: str = "f4"
    # Logger whose records are mirrored into the console ("" = root logger).
    capture_logger: str = "devconsole"
    log_level: str = "INFO"


_INT_LIMITS: dict[str, tuple[int, int]] = {
    "history_capacity": (1, 1000),
    "max_log_count": (1, 10000),
    "help_page_size": (1, 999),
    "autocomplete_threshold": (0, 64),
}


def _config_dir() -> Path:
    override = os.environ.get("IRUN_DEVCONSOLE_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".irun" / "devconsole"


def config_path() -> Path:
    return _config_dir() / "config.json"


def sanitize_config(cfg: ConsoleConfig) -> ConsoleConfig:
    """Reset out-of-range values to defaults. Invalid values are logged, not raised."""
    defaults = ConsoleConfig()
    changed: list[str] = []
    for name, (lo, hi) in _INT_LIMITS.items():
        if not (lo <= int(getattr(cfg, name)) <= hi):
            setattr(cfg, name, getattr(defaults, name))
            changed.append(name)
    if not str(cfg.toggle_key or "").strip():
        cfg.toggle_key = defaults.toggle_key
        changed.append("toggle_key")
    if not isinstance(logging.getLevelName(str(cfg.log_level).upper()), int):
        cfg.log_level = defaults.log_level
        changed.append("log_level")
    else:
        cfg.log_level = str(cfg.log_level).upper()
    if changed:
        logger.warning("Reset invalid devconsole config values: %s", ", ".join(changed))
    return cfg


def load_config(path: Path | None = None) -> ConsoleConfig:
    p = Path(path) if path is not None else config_path()
    if not p.exists():
        return ConsoleConfig()
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except Exception as e:
        logger.warning("Ignoring unreadable devconsole config %s: %s", p, e)
        return ConsoleConfig()
    if not isinstance(raw, dict):
        return ConsoleConfig()

    kwargs: dict = {}
    for fld, info in ConsoleConfig.__dataclass_fields__.items():
        if fld not in raw:
            continue
        val = raw[fld]
        if info.type == "int":
            if isinstance(val, (int, float)) and not isinstance(val, bool):
                kwargs[fld] = int(val)
        elif isinstance(val, str):
            kwargs[fld] = val
    return sanitize_config(ConsoleConfig(**kwargs))


def save_config(cfg: ConsoleConfig, path: Path | None = None) -> None:
    p = Path(path) if path is not None else config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(f"{p.name}.{os.getpid()}.{secrets.token_hex(4)}.tmp")
    tmp.write_text(
        json.dumps(asdict(cfg), indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    tmp.replace(p)
