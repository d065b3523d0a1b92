"""Render aggregated field maps as TypeScript declarations.

Output is deterministic but unformatted: two-space indentation, fields in
lexicographic order, one declaration per outcome group separated by a blank
line.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..config import InferenceOptions
from .aggregator import aggregate_samples
from .buckets import OutcomeGroup
from .classifier import DEFAULT_OPTIONS, classify
from .naming import declaration_name
from .tokens import safe_field_name
from .union import render_union

INDENT = "  "


def render_interface(name: str, fields: Mapping[str, str]) -> str:
    """``interface Name { ... }`` with fields sorted by name."""
    body = "".join(f"\n{INDENT}{safe_field_name(key)}: {fields[key]};" for key in sorted(fields))
    return f"interface {name} {{{body}\n}}"


def render_placeholder(name: str) -> str:
    """Open declaration for a group with no samples."""
    return f"interface {name} {{\n{INDENT}[key: string]: unknown;\n}}"


def render_alias(name: str, samples: Sequence[object], options: InferenceOptions = DEFAULT_OPTIONS) -> str:
    """``type Name = ...;`` over the union of the samples' own types."""
    return f"type {name} = {render_union(classify(sample, options) for sample in samples)};"


def render_group(name: str, samples: Sequence[object], options: InferenceOptions = DEFAULT_OPTIONS) -> str:
    if not samples:
        return render_placeholder(name)
    if not any(isinstance(sample, dict) for sample in samples):
        return render_alias(name, samples, options)
    return render_interface(name, aggregate_samples(samples, options))


def render_declarations(
    base_name: str,
    groups: Sequence[OutcomeGroup],
    options: InferenceOptions = DEFAULT_OPTIONS,
) -> str | None:
    """Render every group in bucket order; ``None`` when there are no groups."""
    if not groups:
        return None

    ordered = sorted(groups, key=lambda g: g.sort_key)
    return "\n\n".join(
        render_group(declaration_name(base_name, group.bucket, group.is_error), group.samples, options) for group in ordered
    )
