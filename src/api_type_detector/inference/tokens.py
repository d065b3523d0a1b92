"""Structural type tokens and the JSON value kinds they are derived from.

A token describes the shape of one JSON value. Tokens are immutable and
compare by structure, so a set of tokens deduplicates identical shapes.
Rendering produces TypeScript-flavoured text:

- scalars render as their keyword (``string``, ``number``, ...)
- arrays render as ``T[]`` or ``(A | B)[]``
- records render inline as ``{ a: number; "b-c": string }``
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from ..exceptions import MalformedSampleError

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]

_BARE_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class _Missing:
    """Marker for a field that is absent from a sample."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class JsonKind(str, Enum):
    NULL = "null"
    MISSING = "missing"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_kind(value: object) -> JsonKind:
    """Tag a decoded value with its JSON kind.

    Raises:
        MalformedSampleError: for values outside the JSON value space.
    """
    if value is None:
        return JsonKind.NULL
    if value is MISSING:
        return JsonKind.MISSING
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        # bool is a subclass of int, handled above
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise MalformedSampleError(f"Unsupported JSON value type: {type(value)!r}")


def safe_field_name(name: str) -> str:
    """Return `name` bare when it is a valid identifier, double-quoted otherwise."""
    if _BARE_IDENTIFIER_RE.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class Tier(int, Enum):
    """Sort tier inside a union: values first, then null, then undefined."""

    VALUE = 0
    NULL = 1
    UNDEFINED = 2


class TypeToken:
    """Base class for structural type tokens."""

    __slots__ = ()

    @property
    def tier(self) -> Tier:
        return Tier.VALUE

    def render(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class ScalarToken(TypeToken):
    """A leaf token: primitives, null, undefined and the fallback markers."""

    name: str
    text: str

    @property
    def tier(self) -> Tier:
        if self.name == "null":
            return Tier.NULL
        if self.name == "undefined":
            return Tier.UNDEFINED
        return Tier.VALUE

    def render(self) -> str:
        return self.text


NULL = ScalarToken("null", "null")
UNDEFINED = ScalarToken("undefined", "undefined")
BOOLEAN = ScalarToken("boolean", "boolean")
NUMBER = ScalarToken("number", "number")
STRING = ScalarToken("string", "string")
DATE_STRING = ScalarToken("date", "string /* ISO Date */")
UNKNOWN = ScalarToken("unknown", "unknown")
CIRCULAR = ScalarToken("circular", "unknown /* circular reference */")


@dataclass(frozen=True, slots=True)
class ArrayToken(TypeToken):
    """An array whose elements are described by a normalized union."""

    elements: tuple[TypeToken, ...]

    def render(self) -> str:
        if not self.elements:
            return f"{UNKNOWN.render()}[]"
        if len(self.elements) == 1:
            return f"{self.elements[0].render()}[]"
        return f"({' | '.join(t.render() for t in self.elements)})[]"


@dataclass(frozen=True, slots=True)
class RecordToken(TypeToken):
    """An object shape: field name -> normalized union, sorted by field name."""

    fields: tuple[tuple[str, tuple[TypeToken, ...]], ...]

    def render(self) -> str:
        if not self.fields:
            return "Record<string, never>"
        parts = []
        for name, union in self.fields:
            rendered = " | ".join(t.render() for t in union) if union else UNKNOWN.render()
            parts.append(f"{safe_field_name(name)}: {rendered}")
        return f"{{ {'; '.join(parts)} }}"
