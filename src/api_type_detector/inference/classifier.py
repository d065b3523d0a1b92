"""Classify one decoded JSON value into a structural type token.

Classification is pure: the only state is the set of container identities on
the active recursion path, threaded through each call. A container that is
already on that path classifies as the circular-reference marker; the same
container reached again through a sibling field is analyzed in full.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from ..config import InferenceOptions
from ..exceptions import MalformedSampleError, ResourceExceededError
from .tokens import (
    BOOLEAN,
    CIRCULAR,
    DATE_STRING,
    NULL,
    NUMBER,
    STRING,
    UNDEFINED,
    ArrayToken,
    JsonKind,
    RecordToken,
    TypeToken,
    json_kind,
)
from .union import normalize_union

_ISO_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}(T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]{3})?Z?)?$")

DEFAULT_OPTIONS = InferenceOptions()


def is_date_string(value: str) -> bool:
    """True when `value` is ISO-8601 shaped and names a real calendar instant."""
    if not _ISO_DATE_RE.match(value):
        return False
    try:
        if "T" in value:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        else:
            date.fromisoformat(value)
    except ValueError:
        return False
    return True


def classify(
    value: object,
    options: InferenceOptions = DEFAULT_OPTIONS,
    active: frozenset[int] = frozenset(),
    depth: int = 0,
) -> TypeToken:
    """Return the structural type token for `value`.

    Args:
        value: Decoded JSON value (or ``MISSING`` for an absent field).
        options: Inference options (date detection, array sampling, depth guard).
        active: ``id()`` of every container on the current recursion path.
        depth: Current nesting depth.

    Raises:
        MalformedSampleError: if `value` contains a non-JSON value.
        ResourceExceededError: if nesting exceeds ``options.max_depth``.
    """
    kind = json_kind(value)

    if kind is JsonKind.NULL:
        return NULL
    if kind is JsonKind.MISSING:
        return UNDEFINED
    if kind is JsonKind.BOOLEAN:
        return BOOLEAN
    if kind is JsonKind.NUMBER:
        return NUMBER
    if isinstance(value, str):
        if options.detect_dates and is_date_string(value):
            return DATE_STRING
        return STRING

    # Containers from here on
    if id(value) in active:
        return CIRCULAR
    if depth >= options.max_depth:
        raise ResourceExceededError(f"Sample nesting exceeds max_depth={options.max_depth}")

    path = active | {id(value)}

    if isinstance(value, (list, tuple)):
        items = value if options.analyze_all_array_elements else value[: options.max_array_samples]
        if not items:
            return ArrayToken(())
        return ArrayToken(normalize_union(classify(item, options, path, depth + 1) for item in items))

    if not isinstance(value, dict):
        raise MalformedSampleError(f"Unsupported sample type {type(value)!r}")

    fields = []
    for key, child in value.items():
        if not isinstance(key, str):
            raise MalformedSampleError(f"Object keys must be strings, got {type(key)!r}")
        fields.append((key, (classify(child, options, path, depth + 1),)))
    return RecordToken(tuple(sorted(fields, key=lambda field: field[0])))
