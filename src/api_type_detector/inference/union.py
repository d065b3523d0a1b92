"""Canonical union normalization.

The same set of tokens always yields the same ordered tuple: duplicates are
dropped by structural equality, ``null`` sorts second to last, ``undefined``
last, and everything else comes first ordered by its rendered text.
"""

from __future__ import annotations

from collections.abc import Iterable

from .tokens import UNKNOWN, TypeToken


def _sort_key(token: TypeToken) -> tuple[int, str, str]:
    return (int(token.tier), token.render(), repr(token))


def normalize_union(tokens: Iterable[TypeToken]) -> tuple[TypeToken, ...]:
    """Deduplicate and order tokens into their canonical union sequence."""
    return tuple(sorted(set(tokens), key=_sort_key))


def render_union(tokens: Iterable[TypeToken], *, fallback: TypeToken = UNKNOWN) -> str:
    """Render a union as ``A | B``; an empty union renders as `fallback`."""
    union = normalize_union(tokens)
    if not union:
        return fallback.render()
    return " | ".join(token.render() for token in union)
