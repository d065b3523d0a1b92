"""Merge object-shaped samples into one per-field type map.

Only mapping samples contribute fields. Each field collects the tokens of its
non-null values; a ``null`` value marks the field nullable and appearing in
fewer samples than the group holds marks it optional. Optionality is
relative to the full sample list, so a non-object sample makes every field
optional.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..config import InferenceOptions
from .classifier import DEFAULT_OPTIONS, classify
from .tokens import MISSING, NULL, UNDEFINED, TypeToken
from .union import normalize_union, render_union


@dataclass(slots=True)
class FieldStat:
    """Running statistics for one field name across samples."""

    tokens: set[TypeToken] = field(default_factory=set)
    present: int = 0
    nullable: bool = False
    optional: bool = False

    def union(self) -> tuple[TypeToken, ...]:
        tokens = set(self.tokens)
        if self.nullable:
            tokens.add(NULL)
        if self.optional:
            tokens.add(UNDEFINED)
        return normalize_union(tokens)

    def render(self) -> str:
        return render_union(self.union())


def collect_field_stats(samples: Sequence[object], options: InferenceOptions = DEFAULT_OPTIONS) -> dict[str, FieldStat]:
    """Accumulate FieldStat per field over the object-shaped samples."""
    stats: dict[str, FieldStat] = {}
    objects = [sample for sample in samples if isinstance(sample, dict)]

    for sample in objects:
        active = frozenset({id(sample)})
        for key, value in sample.items():
            if value is MISSING:
                continue
            stat = stats.setdefault(key, FieldStat())
            stat.present += 1
            if value is None:
                stat.nullable = True
            else:
                stat.tokens.add(classify(value, options, active, 1))

    for stat in stats.values():
        stat.optional = stat.present < len(samples)
    return stats


def aggregate_samples(samples: Sequence[object], options: InferenceOptions = DEFAULT_OPTIONS) -> dict[str, str]:
    """Return field name -> rendered union, ordered by field name.

    Non-object samples contribute no fields but count towards optionality;
    an empty or object-free sample list yields an empty mapping.
    """
    stats = collect_field_stats(samples, options)
    return {name: stats[name].render() for name in sorted(stats)}
