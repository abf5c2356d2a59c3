from __future__ import annotations

import inspect
import typing
from dataclasses import dataclass
from typing import Any, Callable

from devconsole.console.args import ArgSpec, kind_for_annotation

_MARKER_ATTR = "__console_cmd__"


@dataclass(frozen=True)
class CommandMarker:
    name: str | None
    description: str
    args: tuple[ArgSpec, ...] | None = None


@dataclass(frozen=True)
class CommandSpec:
    """Owner-side declaration of one console command."""

    name: str
    description: str
    args: tuple[ArgSpec, ...]
    target: Callable[..., Any]


@dataclass
class Command:
    name: str
    owner: Any
    target: Callable[..., Any]
    args: tuple[ArgSpec, ...]
    description: str

    @property
    def arg_names(self) -> list[str]:
        return [a.name for a in self.args]

    @property
    def required_count(self) -> int:
        return sum(1 for a in self.args if a.required)


def console_cmd(description: Any = None, *, name: str | None = None, args: tuple[ArgSpec, ...] | None = None):
    """
    Mark a method as a console command.

    Usable bare (`@console_cmd`) or with a description (`@console_cmd("Clears console")`).
    The command name defaults to the method name; argument kinds come from the
    method's annotations unless `args` is given explicitly.
    """

    if callable(description) and name is None and args is None:
        setattr(description, _MARKER_ATTR, CommandMarker(name=None, description=""))
        return description

    def _decorate(fn):
        setattr(fn, _MARKER_ATTR, CommandMarker(name=name, description=str(description or ""), args=args))
        return fn

    return _decorate


def _unwrap(member: Any) -> Any:
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    return member


def marker_of(member: Any) -> CommandMarker | None:
    return getattr(_unwrap(member), _MARKER_ATTR, None)


def args_for_callable(fn: Callable[..., Any]) -> tuple[ArgSpec, ...]:
    """Derive the argument signature of a (bound) callable from its annotations."""

    try:
        hints = typing.get_type_hints(getattr(fn, "__func__", fn))
    except Exception:
        # Forward references that cannot be resolved fall back to raw annotations.
        hints = dict(getattr(fn, "__annotations__", {}) or {})
    out: list[ArgSpec] = []
    for p in inspect.signature(fn).parameters.values():
        if p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD, p.KEYWORD_ONLY):
            raise TypeError(f"console command {fn!r} may only take positional parameters")
        ann = hints.get(p.name, p.annotation)
        if ann is inspect.Parameter.empty:
            ann = None
        kind, enum_type = kind_for_annotation(ann)
        if p.default is inspect.Parameter.empty:
            out.append(ArgSpec(name=p.name, kind=kind, enum_type=enum_type))
        else:
            out.append(ArgSpec(name=p.name, kind=kind, enum_type=enum_type, default=p.default))
    return tuple(out)


def spec_for_callable(fn: Callable[..., Any], *, name: str | None = None, description: str = "") -> CommandSpec:
    n = str(name or getattr(fn, "__name__", "") or "").strip()
    if not n:
        raise ValueError("command name is required")
    return CommandSpec(name=n, description=str(description or ""), args=args_for_callable(fn), target=fn)


def collect_commands(owner: Any) -> list[CommandSpec]:
    """
    Collect the `@console_cmd` declarations of an owner instance.

    Walks the class hierarchy most-derived first, in declaration order. Names
    starting with an underscore are not eligible.
    """

    out: list[CommandSpec] = []
    seen: set[str] = set()
    for cls in type(owner).__mro__:
        for attr, member in vars(cls).items():
            if attr in seen:
                continue
            seen.add(attr)
            marker = marker_of(member)
            if marker is None or attr.startswith("_"):
                continue
            bound = getattr(owner, attr)
            if marker.args is not None:
                out.append(
                    CommandSpec(
                        name=str(marker.name or attr),
                        description=marker.description,
                        args=tuple(marker.args),
                        target=bound,
                    )
                )
                continue
            out.append(spec_for_callable(bound, name=marker.name or attr, description=marker.description))
    return out
