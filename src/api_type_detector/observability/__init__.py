"""Observability module for structured, route-scoped logging."""

from .logging import bind_route_context, clear_route_context, get_route_logger, setup_structured_logging

__all__ = [
    "bind_route_context",
    "clear_route_context",
    "get_route_logger",
    "setup_structured_logging",
]
