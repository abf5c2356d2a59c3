from __future__ import annotations

from devconsole.ui.console_ui import ConsoleUI
from devconsole.ui.theme import Theme

__all__ = ["ConsoleUI", "Theme"]
