"""Logging middleware for correlation ID propagation.

- Extracts correlation ID from the incoming X-Correlation-ID header
- Generates a new correlation ID if not present
- Sets the correlation ID in context for downstream loggers
- Echoes the correlation ID in response headers
- Logs request start and completion with timing

Usage:
    from fastapi import FastAPI
    from campus_ballot.api.middleware.logging_middleware import LoggingMiddleware

    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
"""

import time
from typing import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from campus_ballot.infrastructure.observability.correlation import (
    generate_correlation_id,
    set_correlation_id,
)

# Header name for correlation ID
CORRELATION_HEADER = "X-Correlation-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for correlation ID propagation and request logging."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
        set_correlation_id(correlation_id)

        log = structlog.get_logger().bind(
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )
        log.info("request_started")
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            log.exception(
                "request_failed",
                duration_ms=round(duration_ms, 2),
                error_type=type(exc).__name__,
            )
            # Re-raise to let error handlers deal with it
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
