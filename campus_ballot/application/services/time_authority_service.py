"""System time authority.

Production implementation of TimeAuthorityProtocol backed by the host
clock. Tests substitute FakeTimeAuthority.
"""

import time
from datetime import datetime, timezone

from campus_ballot.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority reading the system wall clock and monotonic clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
