"""Time Authority Protocol - interface for timestamp provisioning.

All services that need the current time MUST inject a
TimeAuthorityProtocol implementation instead of calling datetime.now()
directly. Session window decisions and record timestamps therefore come
from a single, substitutable source.

For production:
    Use SystemTimeAuthority from campus_ballot.application.services

For testing:
    Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return a monotonic clock value in seconds.

        Use this for measuring elapsed time, not for timestamps. Only
        differences between values are meaningful.
        """
        ...
