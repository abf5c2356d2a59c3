from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from panda3d.core import LVecBase2f, LVecBase3f, LVector2f, LVector3f

from devconsole.console.errors import CoercionFailure


class ArgKind(str, Enum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    VEC2 = "vec2"
    VEC3 = "vec3"
    ENUM = "enum"


_MISSING: Any = object()


@dataclass(frozen=True)
class ArgSpec:
    name: str
    kind: ArgKind = ArgKind.STR
    # Only meaningful for ArgKind.ENUM.
    enum_type: type[Enum] | None = None
    default: Any = _MISSING

    @property
    def required(self) -> bool:
        return self.default is _MISSING


def _parse_bool(value: str, _spec: ArgSpec) -> bool:
    v = str(value or "").strip().lower()
    if v in ("1", "true", "on", "yes", "y"):
        return True
    if v in ("0", "false", "off", "no", "n"):
        return False
    raise ValueError(f"invalid bool: {value!r}")


def _parse_int(value: str, _spec: ArgSpec) -> int:
    return int(str(value).strip())


def _parse_float(value: str, _spec: ArgSpec) -> float:
    return float(str(value).strip())


def _parse_str(value: str, _spec: ArgSpec) -> str:
    return str(value)


def _components(value: str, count: int) -> list[float]:
    parts = str(value).split(",")
    if len(parts) != count:
        raise ValueError(f"expected {count} comma-separated components, got {len(parts)}")
    return [float(p.strip()) for p in parts]


def _parse_vec2(value: str, _spec: ArgSpec) -> LVector2f:
    return LVector2f(*_components(value, 2))


def _parse_vec3(value: str, _spec: ArgSpec) -> LVector3f:
    return LVector3f(*_components(value, 3))


def _parse_enum(value: str, spec: ArgSpec) -> Enum:
    if spec.enum_type is None:
        raise ValueError(f"argument {spec.name!r} has no enum type")
    key = str(value).strip().casefold()
    for member in spec.enum_type:
        if member.name.casefold() == key:
            return member
    names = ", ".join(m.name for m in spec.enum_type)
    raise ValueError(f"unknown {spec.enum_type.__name__} {value!r} (expected one of: {names})")


PARSERS: dict[ArgKind, Callable[[str, ArgSpec], Any]] = {
    ArgKind.BOOL: _parse_bool,
    ArgKind.INT: _parse_int,
    ArgKind.FLOAT: _parse_float,
    ArgKind.STR: _parse_str,
    ArgKind.VEC2: _parse_vec2,
    ArgKind.VEC3: _parse_vec3,
    ArgKind.ENUM: _parse_enum,
}


def kind_for_annotation(annotation: Any) -> tuple[ArgKind, type[Enum] | None]:
    """
    Map a Python annotation to the argument kind used for coercion.

    Unannotated parameters are treated as strings.
    """

    if isinstance(annotation, str):
        # Unresolved string annotation: only the builtin scalar names are recognized.
        by_name = {"bool": ArgKind.BOOL, "int": ArgKind.INT, "float": ArgKind.FLOAT, "str": ArgKind.STR}
        if annotation in by_name:
            return by_name[annotation], None
        raise TypeError(f"unsupported console argument type: {annotation!r}")
    if annotation is None or annotation is str:
        return ArgKind.STR, None
    if annotation is bool:
        return ArgKind.BOOL, None
    if annotation is int:
        return ArgKind.INT, None
    if annotation is float:
        return ArgKind.FLOAT, None
    if isinstance(annotation, type):
        if issubclass(annotation, Enum):
            return ArgKind.ENUM, annotation
        if issubclass(annotation, LVecBase3f):
            return ArgKind.VEC3, None
        if issubclass(annotation, LVecBase2f):
            return ArgKind.VEC2, None
    raise TypeError(f"unsupported console argument type: {annotation!r}")


def extract_parameters(text: str) -> list[str]:
    """
    Split an argument string on spaces, keeping double-quoted runs as one token.

    Quotes are stripped and toggle a single in-quotes flag. A closing quote always
    ends the current token (so `""` yields an empty token). An unterminated quote
    flushes whatever was collected at the end of the string. There is no escape
    character.
    """

    out: list[str] = []
    buf: list[str] = []
    in_quotes = False
    for ch in str(text or ""):
        if ch == '"':
            in_quotes = not in_quotes
            if not in_quotes:
                out.append("".join(buf))
                buf = []
            continue
        if ch == " " and not in_quotes:
            if buf:
                out.append("".join(buf))
                buf = []
            continue
        buf.append(ch)
    if buf:
        out.append("".join(buf))
    return out


def convert_parameter(spec: ArgSpec, token: str) -> Any:
    parser = PARSERS.get(spec.kind)
    if parser is None:
        raise CoercionFailure(f"unsupported argument kind: {spec.kind!r}")
    try:
        return parser(token, spec)
    except CoercionFailure:
        raise
    except Exception as e:
        raise CoercionFailure(f"Error parsing parameter: {token} | {e}") from e
