"""HTTP middleware."""

from campus_ballot.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
