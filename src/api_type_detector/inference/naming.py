"""Type names derived from route display names."""

from __future__ import annotations

import re

from .buckets import StatusBucket

_SEGMENT_SPLIT_RE = re.compile(r"[/\-_\s(){}\[\]]+")
_DROPPED_SEGMENT_RE = re.compile(r"^(Api|Endpoint|Route)$", flags=re.IGNORECASE)

FALLBACK_TYPE_NAME = "ApiResponse"
RESPONSE_SUFFIX = "Response"


def type_name_from_route(route_name: str) -> str:
    """PascalCase a route name into a ``...Response`` type name.

    >>> type_name_from_route("GET /api/user-profile/{id}")
    'GetUserProfileIdResponse'
    """
    segments = [s.capitalize() for s in _SEGMENT_SPLIT_RE.split(route_name) if s]
    cleaned = [s for s in segments if not _DROPPED_SEGMENT_RE.match(s)]
    if not cleaned:
        return FALLBACK_TYPE_NAME

    name = "".join(cleaned) + RESPONSE_SUFFIX
    if name[0].isdigit():
        return "T" + name
    return name


def base_type_name(route_name: str) -> str:
    """Type name without its trailing ``Response``."""
    name = type_name_from_route(route_name)
    return name.removesuffix(RESPONSE_SUFFIX)


def declaration_name(base_name: str, bucket: StatusBucket, is_error: bool) -> str:
    """``{base}{BucketSuffix}[Error]Response``."""
    return f"{base_name}{bucket.suffix}{'Error' if is_error else ''}{RESPONSE_SUFFIX}"
