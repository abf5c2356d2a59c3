from __future__ import annotations

import logging
import math

from devconsole.app_config import ConsoleConfig
from devconsole.console.commands import Command, console_cmd
from devconsole.console.registry import CommandExecution, CommandRegistry
from devconsole.log import ConsoleLogHandler, LogBuffer

_OWN_LOGGER = "devconsole"

USAGE_LINES = (
    "========================================",
    "------- HOW TO USE DEV CONSOLE -------",
    "Format: 'function parameter1 parameter2'",
    "   E.g. calculate 1 1 1",
    '   E.g. testlog "hello world"',
    "   E.g. testvector3 3,3,3",
    "   E.g. clear",
    "   ",
    "   Type commands <page index> - to access different pages of the commands",
)


def page_count(total: int, per_page: int) -> int:
    return max(1, math.ceil(int(total) / max(1, int(per_page))))


def help_page_lines(commands: dict[str, Command], *, page: int, per_page: int) -> list[str]:
    """
    Render one page of the command list.

    Out-of-range pages produce an explicit "exceeded" line instead of an empty page.
    """

    per_page = max(1, int(per_page))
    pages = page_count(len(commands), per_page)
    out = [
        "========================================",
        "=======[ HELP COMMAND LIST ]=======",
        f"List of commands (Pg {page} / {pages})",
    ]
    start = (int(page) - 1) * per_page
    if int(page) < 1 or start >= len(commands):
        out.append("Help page count exceeded!")
        return out
    rows = list(commands.items())[start : start + per_page]
    for name, cmd in rows:
        out.append(f"    {name} - {cmd.description}")
    out.append(f"-------[ Pg {page} / {pages} ]-------")
    out.append("========================================")
    return out


class ConsoleFrontend:
    """
    Toolkit-independent console controller.

    Owns the log buffer, autocomplete ghost text and history cursor, and
    forwards submitted lines to the registry. A view (see `devconsole.ui`)
    only has to render `log` and `ghost_text` and call the input hooks.
    """

    def __init__(self, *, registry: CommandRegistry, config: ConsoleConfig | None = None) -> None:
        self._registry = registry
        self._cfg = config or ConsoleConfig()
        self.log = LogBuffer(max_entries=self._cfg.max_log_count)
        self._handler = ConsoleLogHandler(self.log, level=logging.getLevelName(self._cfg.log_level))
        self._captured: list[tuple[logging.Logger, int]] = []
        self._ghost = ""
        self._nearest: str | None = None
        self._history_index = -1
        self._enabled = False

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def ghost_text(self) -> str:
        return self._ghost

    @property
    def history_index(self) -> int:
        return self._history_index

    def _capture_names(self) -> list[str]:
        cap = str(self._cfg.capture_logger or "")
        # Root or an ancestor of our own logger already sees our records via propagation.
        if cap == "" or cap == _OWN_LOGGER or _OWN_LOGGER.startswith(cap + "."):
            return [cap]
        # A descendant propagates into our own logger.
        if cap.startswith(_OWN_LOGGER + "."):
            return [_OWN_LOGGER]
        return [_OWN_LOGGER, cap]

    def enable(self) -> None:
        if self._enabled:
            return
        level = logging.getLevelName(self._cfg.log_level)
        for name in self._capture_names():
            lg = logging.getLogger(name) if name else logging.getLogger()
            self._captured.append((lg, lg.level))
            if lg.level == logging.NOTSET or lg.level > level:
                lg.setLevel(level)
            lg.addHandler(self._handler)
        self._registry.register(self)
        self._enabled = True

    def disable(self) -> None:
        if not self._enabled:
            return
        self._registry.unregister(self)
        for lg, prev_level in self._captured:
            lg.removeHandler(self._handler)
            lg.setLevel(prev_level)
        self._captured.clear()
        self._enabled = False

    def print_lines(self, *lines: str) -> None:
        for ln in lines:
            self.log.append(str(ln))

    def on_input_changed(self, text: str) -> str:
        s = str(text or "")
        if len(s) > int(self._cfg.autocomplete_threshold):
            hit = self._registry.nearest_command(s)
            if hit is None:
                self._nearest = None
                self._ghost = ""
            else:
                name, params = hit
                self._nearest = name
                self._ghost = name + "".join(f" <{p}>" for p in params)
        else:
            self._nearest = None
            self._ghost = ""
        if not s:
            self._history_index = -1
        return self._ghost

    def autocomplete(self) -> str | None:
        return self._nearest

    def history_up(self) -> str | None:
        count = len(self._registry.history)
        if count == 0:
            return None
        self._history_index = max(0, min(count - 1, self._history_index + 1))
        return self._registry.history_at(self._history_index)

    def history_down(self) -> str | None:
        count = len(self._registry.history)
        if count == 0:
            return None
        # At the reset point (or already on the newest entry) there is nothing newer to show.
        if self._history_index in (-1, 0):
            return None
        self._history_index = max(0, min(count - 1, self._history_index - 1))
        return self._registry.history_at(self._history_index)

    def submit(self, text: str) -> CommandExecution | None:
        line = str(text or "").strip()
        self._history_index = -1
        self._ghost = ""
        self._nearest = None
        if not line:
            return None
        self.print_lines(line)
        return self._registry.parse_and_execute(line)

    def print_command_list(self, page_index: int = 1, *, all_commands: bool = False) -> None:
        commands = self._registry.list_commands()
        per_page = max(1, len(commands)) if all_commands else int(self._cfg.help_page_size)
        self.print_lines(*help_page_lines(commands, page=int(page_index), per_page=per_page))

    @console_cmd("Clears console", name="clear")
    def clear_console(self) -> None:
        self.log.clear()

    @console_cmd("Show how to use dev console")
    def help(self) -> None:
        self.print_lines(*USAGE_LINES)
        self.print_command_list()

    @console_cmd("Show list of commands. Give page index to access different pages of the commands")
    def commands(self, page_index: int = 1) -> None:
        self.print_command_list(page_index)

    @console_cmd("Show list of ALL commands")
    def commandsall(self) -> None:
        self.print_command_list(all_commands=True)
