"""Correlation ID management for request tracing.

Correlation ids live in a ContextVar so they follow a request across
await points without being passed explicitly.

Usage:
    # In middleware (request start)
    correlation_id = request.headers.get("X-Correlation-ID") or generate_correlation_id()
    set_correlation_id(correlation_id)

    # In structlog configuration
    processors = [..., correlation_id_processor, ...]
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Empty string means "not set"
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID4)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Get the current correlation ID, or an empty string if none is set."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding ``correlation_id`` to every log entry.

    Entries logged outside a request context carry no correlation_id.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict
