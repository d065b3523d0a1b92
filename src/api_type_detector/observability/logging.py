"""Structured logging with per-route context using structlog and contextvars."""

import logging

import structlog

_configured = False


def setup_structured_logging(level: str = "INFO", json: bool = True) -> None:
    """Configure structlog with per-route context.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json: Render JSON lines when true, human-readable console output otherwise
    """
    global _configured
    if _configured:
        return

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,  # Inject route context
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to use structlog
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
    )

    _configured = True


def bind_route_context(route_id: str, route_name: str) -> None:
    """Bind route context for all subsequent logs in this context.

    Args:
        route_id: Logical route identifier
        route_name: Display name of the route
    """
    structlog.contextvars.bind_contextvars(route_id=route_id, route_name=route_name)


def clear_route_context() -> None:
    """Clear route context after synthesis completes."""
    structlog.contextvars.unbind_contextvars("route_id", "route_name")


def get_route_logger(name: str = "api_type_detector") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger carrying the route context."""
    return structlog.get_logger(name)
