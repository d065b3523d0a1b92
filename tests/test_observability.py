"""Tests for route-scoped logging context."""

import structlog

from api_type_detector.observability import bind_route_context, clear_route_context, get_route_logger


def test_bind_and_clear_route_context():
    bind_route_context("users", "GET /users")
    try:
        context = structlog.contextvars.get_contextvars()
        assert context["route_id"] == "users"
        assert context["route_name"] == "GET /users"
    finally:
        clear_route_context()

    assert "route_name" not in structlog.contextvars.get_contextvars()
    assert "route_id" not in structlog.contextvars.get_contextvars()


def test_get_route_logger_returns_bound_logger():
    logger = get_route_logger()
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
