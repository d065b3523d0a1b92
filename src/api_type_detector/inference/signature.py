"""Content signatures for change detection.

A signature is the 32-bit FNV-1a hash of a canonical serialization of the
bucketed samples and the output-affecting inference options, rendered as 8
lowercase hex digits. Mapping keys are sorted; array elements keep their order.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from ..config import InferenceOptions
from ..exceptions import MalformedSampleError, ResourceExceededError
from .buckets import OutcomeGroup

_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193

_DEFAULT_OPTIONS = InferenceOptions()


def stable_serialize(value: object, max_depth: int = _DEFAULT_OPTIONS.max_depth) -> str:
    """Serialize a JSON-like value with sorted mapping keys.

    Raises:
        MalformedSampleError: for non-JSON values, non-string keys, non-finite
            floats or self-referential containers.
        ResourceExceededError: when containers nest `max_depth` levels deep.
    """
    _check(value, frozenset(), 0, max_depth)
    try:
        return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise MalformedSampleError(f"Cannot serialize sample: {e}") from e


def _check(value: object, active: frozenset[int], depth: int, max_depth: int) -> None:
    # Recursion is bounded by max_depth, so json.dumps never sees deeper input
    if value is None or isinstance(value, (str, int, float, bool)):
        return
    if not isinstance(value, (dict, list, tuple)):
        raise MalformedSampleError(f"Cannot serialize value of type {type(value)!r}")
    if id(value) in active:
        raise MalformedSampleError("Cannot serialize a self-referential sample")
    if depth >= max_depth:
        raise ResourceExceededError(f"Sample nesting exceeds max_depth={max_depth}")

    active = active | {id(value)}
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise MalformedSampleError(f"Object keys must be strings, got {type(key)!r}")
            _check(item, active, depth + 1, max_depth)
    else:
        for item in value:
            _check(item, active, depth + 1, max_depth)


def fnv1a_hash(text: str) -> str:
    """32-bit FNV-1a over UTF-16 code units, as 8 hex digits."""
    data = text.encode("utf-16-le")
    h = _FNV_OFFSET_BASIS
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return f"{h:08x}"


def route_signature(route_id: str, groups: Sequence[OutcomeGroup], options: InferenceOptions = _DEFAULT_OPTIONS) -> str:
    """Signature of a route's bucketed samples, independent of group order.

    Each sample is depth-checked on its own, so the payload wrapper does not
    eat into `options.max_depth`.
    """
    ordered = sorted(groups, key=lambda g: g.sort_key)
    for group in ordered:
        for sample in group.samples:
            _check(sample, frozenset(), 0, options.max_depth)

    payload = {
        "routeId": route_id,
        "options": {
            "analyzeAllArrayElements": options.analyze_all_array_elements,
            "detectDates": options.detect_dates,
            "maxArraySamples": options.max_array_samples,
        },
        "normalized": [
            {
                "bucket": group.bucket.value,
                "isError": group.is_error,
                "count": group.count,
                "samples": group.samples,
            }
            for group in ordered
        ],
    }
    try:
        text = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise MalformedSampleError(f"Cannot serialize sample: {e}") from e
    return fnv1a_hash(text)
