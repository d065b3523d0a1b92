"""Per-route synthesis: window, bucket, sign, render.

`synthesize_route` is synchronous and pure apart from logging. The previous
signature is supplied by the caller; `regenerate_all` is the batch driver that
reads and writes signatures through a `DeclarationStore`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from ..config import InferenceOptions
from ..observability import bind_route_context, clear_route_context, get_route_logger
from .buckets import bucket_observations, recent_window
from .classifier import DEFAULT_OPTIONS
from .models import GeneratedDeclaration, Observation, Route
from .naming import RESPONSE_SUFFIX, base_type_name
from .renderer import render_declarations
from .signature import route_signature

if TYPE_CHECKING:
    from ..store import DeclarationStore


def synthesize_route(
    route: Route,
    observations: Iterable[Observation],
    options: InferenceOptions = DEFAULT_OPTIONS,
    previous_signature: str | None = None,
) -> GeneratedDeclaration | None:
    """Synthesize declarations for one route.

    Returns:
        A new declaration, or None when the route has no usable samples or its
        signature matches `previous_signature`.
    """
    logger = get_route_logger()
    routed = [obs for obs in observations if obs.route_id == route.id]
    window = recent_window(routed, options.window_size)
    if not window:
        logger.debug("no_samples", observed=len(routed))
        return None

    groups = bucket_observations(window)
    signature = route_signature(route.id, groups, options)
    if signature == previous_signature:
        logger.debug("signature_unchanged", signature=signature)
        return None

    base_name = base_type_name(route.name)
    definition = render_declarations(base_name, groups, options)
    if definition is None:
        return None

    logger.info(
        "declaration_generated",
        signature=signature,
        previous_signature=previous_signature,
        samples=len(window),
        groups=[f"{g.bucket.value}{':error' if g.is_error else ''}" for g in groups],
    )
    return GeneratedDeclaration(
        route_id=route.id,
        route_name=route.name,
        type_name=f"{base_name}{RESPONSE_SUFFIX}",
        type_definition=definition,
        sample_count=len(window),
        signature=signature,
    )


def regenerate_all(
    routes: Sequence[Route],
    observations: Sequence[Observation],
    store: DeclarationStore,
    options: InferenceOptions = DEFAULT_OPTIONS,
) -> list[GeneratedDeclaration]:
    """Re-synthesize every route and persist the ones whose signature changed."""
    changed: list[GeneratedDeclaration] = []
    for route in routes:
        bind_route_context(route.id, route.name)
        try:
            declaration = synthesize_route(route, observations, options, store.signature_for(route.id))
            if declaration is not None:
                store.save(declaration)
                changed.append(declaration)
        finally:
            clear_route_context()
    return changed
