"""Schema inference and type synthesis for observed JSON responses.

The pipeline for one route:

1. WINDOW: keep the most recent observations that carry a decoded body
2. BUCKET: group them by status class and error flag, in fixed order
3. SIGN: hash the bucketed samples; stop if the signature is unchanged
4. AGGREGATE: merge object samples into a per-field union map
5. RENDER: emit one declaration per group, fields sorted by name
"""

from .aggregator import FieldStat, aggregate_samples, collect_field_stats
from .buckets import OutcomeGroup, StatusBucket, bucket_observations, is_error_status, recent_window, status_bucket
from .classifier import classify, is_date_string
from .engine import regenerate_all, synthesize_route
from .models import GeneratedDeclaration, Observation, Route
from .naming import base_type_name, declaration_name, type_name_from_route
from .renderer import render_declarations, render_group, render_interface
from .signature import fnv1a_hash, route_signature, stable_serialize
from .tokens import MISSING, ArrayToken, RecordToken, ScalarToken, TypeToken, safe_field_name
from .union import normalize_union, render_union

__all__ = [
    # Models
    "Observation",
    "Route",
    "GeneratedDeclaration",
    # Tokens
    "TypeToken",
    "ScalarToken",
    "ArrayToken",
    "RecordToken",
    "MISSING",
    # Components
    "classify",
    "is_date_string",
    "normalize_union",
    "render_union",
    "FieldStat",
    "collect_field_stats",
    "aggregate_samples",
    "StatusBucket",
    "OutcomeGroup",
    "status_bucket",
    "is_error_status",
    "recent_window",
    "bucket_observations",
    "stable_serialize",
    "fnv1a_hash",
    "route_signature",
    "type_name_from_route",
    "base_type_name",
    "declaration_name",
    "safe_field_name",
    "render_interface",
    "render_group",
    "render_declarations",
    # Pipeline
    "synthesize_route",
    "regenerate_all",
]
