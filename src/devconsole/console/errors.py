from __future__ import annotations


class ConsoleError(Exception):
    """Base class for failures recovered at the registry boundary."""

    error_code = "command-error"


class CommandNotFound(ConsoleError):
    error_code = "unknown-command"


class ArityMismatch(ConsoleError):
    error_code = "arity-mismatch"


class CoercionFailure(ConsoleError):
    error_code = "validation-error"


class DuplicateRegistration(ConsoleError):
    # Warning level: the offending command is skipped, registration carries on.
    error_code = "duplicate-command"


class InvocationFailure(ConsoleError):
    error_code = "handler-error"
