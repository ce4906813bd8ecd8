"""FakeTimeAuthority - Controllable time authority for deterministic tests.

Usage Patterns:

1. Frozen time:
    >>> fake_time = FakeTimeAuthority(frozen_at=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc))
    >>> service = VoteAdmissionService(..., time_authority=fake_time)

2. Time advancement (e.g. past a session's end_time):
    >>> fake_time.advance(seconds=3600)
    >>> fake_time.advance(delta=timedelta(days=1))

3. Monotonic clock, tied to advancement:
    >>> m1 = fake_time.monotonic()
    >>> fake_time.advance(seconds=10)
    >>> assert fake_time.monotonic() - m1 == 10.0
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from campus_ballot.application.ports.time_authority import TimeAuthorityProtocol

DEFAULT_FROZEN_AT = datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Controllable time authority for deterministic tests.

    Time never moves unless ``advance`` or ``set_time`` is called.
    """

    def __init__(
        self,
        frozen_at: datetime | None = None,
        *,
        start_monotonic: float = 0.0,
    ) -> None:
        """Initialize the fake time authority.

        Args:
            frozen_at: Time to freeze at. Defaults to 2026-03-02T09:00:00 UTC.
                Timezone-naive values are taken as UTC.
            start_monotonic: Starting value for the monotonic clock.
        """
        if frozen_at is None:
            frozen_at = DEFAULT_FROZEN_AT
        if frozen_at.tzinfo is None:
            frozen_at = frozen_at.replace(tzinfo=timezone.utc)

        self._current_time: datetime = frozen_at
        self._monotonic_base: float = start_monotonic
        self._monotonic_advances: float = 0.0

    def now(self) -> datetime:
        return self._current_time

    def monotonic(self) -> float:
        return self._monotonic_base + self._monotonic_advances

    def advance(
        self,
        seconds: float | int | None = None,
        delta: timedelta | None = None,
    ) -> None:
        """Advance time by the specified amount.

        Raises:
            ValueError: If neither seconds nor delta is provided, or the
                amount is negative.
        """
        if delta is not None:
            advance_seconds = delta.total_seconds()
        elif seconds is not None:
            advance_seconds = float(seconds)
        else:
            raise ValueError("Must provide either 'seconds' or 'delta' argument")

        if advance_seconds < 0:
            raise ValueError(
                f"Cannot advance time backwards. Got {advance_seconds} seconds. "
                "Use set_time() for explicit time changes."
            )

        self._current_time += timedelta(seconds=advance_seconds)
        self._monotonic_advances += advance_seconds

    def set_time(self, dt: datetime) -> None:
        """Set the current time explicitly. Does not touch the monotonic clock."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        self._current_time = dt

    def __repr__(self) -> str:
        return (
            f"FakeTimeAuthority("
            f"current_time={self._current_time.isoformat()}, "
            f"monotonic={self.monotonic():.3f})"
        )
