"""Session window gate.

Derives a session's temporal state from its configured bounds over the
half-open interval [start_time, end_time):

    now <  start_time              -> UPCOMING
    start_time <= now < end_time   -> ACTIVE
    now >= end_time                -> ENDED

Only ACTIVE sessions admit votes. The gate is a pure function of its
arguments; callers obtain ``now`` from the injected time authority.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum


class SessionWindowState(str, Enum):
    """Temporal state of a session derived from its window."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    ENDED = "ended"


def session_window_state(
    now: datetime, start_time: datetime, end_time: datetime
) -> SessionWindowState:
    """Return the window state of ``now`` relative to [start_time, end_time).

    Args:
        now: Current time (timezone-aware).
        start_time: Inclusive window start.
        end_time: Exclusive window end.

    Returns:
        UPCOMING, ACTIVE or ENDED.
    """
    if now < start_time:
        return SessionWindowState.UPCOMING
    if now < end_time:
        return SessionWindowState.ACTIVE
    return SessionWindowState.ENDED
