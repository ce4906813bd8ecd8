"""Observability infrastructure for structured logging and correlation.

Usage:
    from campus_ballot.infrastructure.observability import (
        configure_structlog,
        set_correlation_id,
    )

    # At startup
    configure_structlog(environment="production")

    # In request handling
    set_correlation_id(request_correlation_id)
"""

from campus_ballot.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from campus_ballot.infrastructure.observability.logging import configure_structlog

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]
