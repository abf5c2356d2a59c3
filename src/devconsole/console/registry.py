from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Iterable

from devconsole.console.args import convert_parameter, extract_parameters
from devconsole.console.commands import Command, CommandSpec, collect_commands
from devconsole.console.errors import (
    ArityMismatch,
    CommandNotFound,
    ConsoleError,
    DuplicateRegistration,
    InvocationFailure,
)
from devconsole.console.history import DEFAULT_CAPACITY, CommandHistory

logger = logging.getLogger(__name__)


@dataclass
class CommandExecution:
    name: str
    ok: bool
    error_code: str = ""
    elapsed_ms: float = 0.0


def _split_line(line: str) -> tuple[str, str]:
    parts = str(line or "").strip().split(None, 1)
    if not parts:
        return "", ""
    return parts[0], (parts[1] if len(parts) > 1 else "")


class CommandRegistry:
    """
    Name -> command map with per-owner registration records and a bounded history.

    Command names are stored and looked up lowercased. Every failure in
    `parse_and_execute` is reported as a single log line and never raised.
    """

    def __init__(self, *, history_capacity: int = DEFAULT_CAPACITY) -> None:
        self._commands: dict[str, Command] = {}
        self._owners: dict[type, tuple[str, ...]] = {}
        self._history = CommandHistory(capacity=history_capacity)

    @property
    def history(self) -> tuple[str, ...]:
        return self._history.entries()

    @property
    def history_capacity(self) -> int:
        return self._history.capacity

    def history_at(self, index: int) -> str:
        return self._history.at(index)

    def is_registered(self, owner: Any) -> bool:
        return type(owner) in self._owners

    def register(self, owner: Any, commands: Iterable[CommandSpec] | None = None) -> list[str]:
        """
        Register an owner's commands and return the names actually added.

        Without `commands`, the owner's `@console_cmd` declarations are used.
        Duplicate names are skipped with a warning; an owner type that is already
        registered is left untouched.
        """

        owner_type = type(owner)
        if owner_type in self._owners:
            logger.warning("[CONSOLE] Class %s already subscribed to console.", owner_type.__qualname__)
            return []

        specs = list(commands) if commands is not None else collect_commands(owner)
        names = [str(spec.name or "").strip().lower() for spec in specs]
        if not all(names):
            raise ValueError("command name is required")

        added: list[str] = []
        for name, spec in zip(names, specs):
            if name in self._commands:
                err = DuplicateRegistration(f"Command {name} already exists.")
                logger.warning("[CONSOLE] %s", err)
                continue
            self._commands[name] = Command(
                name=name,
                owner=owner,
                target=spec.target,
                args=tuple(spec.args),
                description=str(spec.description or ""),
            )
            added.append(name)

        self._owners[owner_type] = tuple(added)
        return added

    def unregister(self, owner: Any) -> list[str]:
        """Remove the commands this owner's type contributed; other owners are unaffected."""
        owner_type = type(owner)
        names = self._owners.pop(owner_type, None)
        if names is None:
            logger.warning("[CONSOLE] Class %s is not subscribed to console.", owner_type.__qualname__)
            return []
        removed: list[str] = []
        for name in names:
            if self._commands.pop(name, None) is not None:
                removed.append(name)
        return removed

    def list_commands(self) -> dict[str, Command]:
        return dict(self._commands)

    def nearest_command(self, prefix: str) -> tuple[str, list[str]] | None:
        """First command (in registration order) starting with `prefix`, with its argument names."""
        p = str(prefix or "").lower()
        for name, cmd in self._commands.items():
            if name.startswith(p):
                return name, cmd.arg_names
        return None

    def _parse_arguments(self, cmd: Command, rest: str) -> list[Any]:
        if not rest:
            tokens: list[str] = []
        elif not cmd.args:
            # Zero-argument commands never accept trailing text.
            raise ArityMismatch("Invalid Parameters")
        else:
            tokens = extract_parameters(rest)

        if len(tokens) < cmd.required_count or len(tokens) > len(cmd.args):
            raise ArityMismatch(
                f"Invalid Parameters (expected {_arity_label(cmd)}, got {len(tokens)})"
            )

        values = [convert_parameter(spec, tok) for spec, tok in zip(cmd.args, tokens)]
        for spec in cmd.args[len(tokens) :]:
            values.append(spec.default)
        return values

    def parse_and_execute(self, line: str) -> CommandExecution:
        t0 = perf_counter()
        raw = str(line or "").strip()
        word, rest = _split_line(raw)
        name = word.lower()
        try:
            cmd = self._commands.get(name)
            if cmd is None:
                raise CommandNotFound("Command not found")
            try:
                values = self._parse_arguments(cmd, rest)
            except ArityMismatch:
                raise
            except ConsoleError as e:
                raise type(e)(f"Invalid Parameters ({e})") from e
            try:
                cmd.target(*values)
            except Exception as e:
                raise InvocationFailure(f"{type(e).__name__}: {e}") from e
        except CommandNotFound as e:
            logger.info("[CONSOLE] %s", e)
            return _execution(name, t0, e)
        except InvocationFailure as e:
            logger.error("[CONSOLE] Invalid command: %s", e)
            return _execution(name, t0, e)
        except ConsoleError as e:
            logger.info("[CONSOLE] Invalid command: %s", e)
            return _execution(name, t0, e)

        self._history.add(raw)
        return CommandExecution(name=name, ok=True, elapsed_ms=(perf_counter() - t0) * 1000.0)


def _arity_label(cmd: Command) -> str:
    total = len(cmd.args)
    if cmd.required_count == total:
        return str(total)
    return f"{cmd.required_count}..{total}"


def _execution(name: str, t0: float, err: ConsoleError) -> CommandExecution:
    return CommandExecution(
        name=name,
        ok=False,
        error_code=str(err.error_code),
        elapsed_ms=(perf_counter() - t0) * 1000.0,
    )
