from __future__ import annotations

from devconsole.console.args import ArgKind, ArgSpec, convert_parameter, extract_parameters
from devconsole.console.commands import Command, CommandSpec, console_cmd, spec_for_callable
from devconsole.console.history import CommandHistory
from devconsole.console.registry import CommandExecution, CommandRegistry

__all__ = [
    "ArgKind",
    "ArgSpec",
    "Command",
    "CommandExecution",
    "CommandHistory",
    "CommandRegistry",
    "CommandSpec",
    "console_cmd",
    "convert_parameter",
    "extract_parameters",
    "spec_for_callable",
]
