"""Session configuration and lookup errors.

These errors guard the value invariants of a voting session. A session
that violates them must never exist, so they are raised from model
constructors and from the session administration service rather than
returned as vote outcomes.

Invariants:
- start_time < end_time (half-open voting window)
- An enabled geofence has a positive radius and an in-range center
- Category names are unique, max_votes >= 1, and each candidate
  belongs to exactly one category
- Eligibility only references departments known to the directory
"""

from __future__ import annotations

from datetime import datetime

from campus_ballot.domain.exceptions import CampusBallotError


class SessionConfigurationError(CampusBallotError, ValueError):
    """Base error for invalid session configuration.

    Inherits from ValueError so dataclass ``__post_init__`` validation
    reads the same as any other value check.
    """

    def to_rfc7807_dict(self) -> dict:
        return {
            "type": "urn:campus-ballot:session:invalid-configuration",
            "title": "Invalid Session Configuration",
            "status": 422,
            "detail": str(self),
        }


class InvalidTimeWindowError(SessionConfigurationError):
    """Raised when a session's start_time is not strictly before end_time.

    Attributes:
        start_time: The configured start of the voting window.
        end_time: The configured end of the voting window.
    """

    def __init__(
        self,
        start_time: datetime,
        end_time: datetime,
        message: str | None = None,
    ) -> None:
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            message
            or (
                f"Invalid voting window: start_time {start_time.isoformat()} "
                f"must be before end_time {end_time.isoformat()}"
            )
        )


class InvalidGeofenceError(SessionConfigurationError):
    """Raised when geofence parameters are out of range."""

    pass


class InvalidCategoryError(SessionConfigurationError):
    """Raised when a ballot category or its candidates are malformed."""

    pass


class UnknownDepartmentError(SessionConfigurationError):
    """Raised when an eligibility spec references departments the directory lacks.

    Attributes:
        department_ids: The unknown department ids, sorted.
    """

    def __init__(self, department_ids: set[str] | frozenset[str]) -> None:
        self.department_ids = sorted(department_ids)
        super().__init__(
            f"Eligibility references unknown departments: {', '.join(self.department_ids)}"
        )

    def to_rfc7807_dict(self) -> dict:
        return {
            "type": "urn:campus-ballot:session:unknown-department",
            "title": "Unknown Department",
            "status": 422,
            "detail": str(self),
            "department_ids": self.department_ids,
        }


class SessionNotFoundError(CampusBallotError):
    """Raised when a session id does not resolve to a stored session.

    Only raised on administrative and read paths. Vote casting reports a
    missing session as the SESSION_NOT_FOUND rejection instead.

    Attributes:
        session_id: The session id that was not found.
    """

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Voting session not found: {session_id}")

    def to_rfc7807_dict(self) -> dict:
        return {
            "type": "urn:campus-ballot:session:not-found",
            "title": "Session Not Found",
            "status": 404,
            "detail": str(self),
            "session_id": self.session_id,
        }


class ResultsNotPublishedError(CampusBallotError):
    """Raised when public results are requested before they are released.

    Results are public only once the session has ended and an
    administrator has set ``results_public``.

    Attributes:
        session_id: The session whose results were requested.
        status: Derived session status at request time.
    """

    def __init__(self, session_id: str, status: str) -> None:
        self.session_id = session_id
        self.status = status
        super().__init__(
            f"Results for session {session_id} are not published (status: {status})"
        )

    def to_rfc7807_dict(self) -> dict:
        return {
            "type": "urn:campus-ballot:session:results-not-published",
            "title": "Results Not Published",
            "status": 403,
            "detail": str(self),
            "session_id": self.session_id,
            "session_status": self.status,
        }


class SessionNotEditableError(CampusBallotError):
    """Raised when a session's window, geofence or ballot is edited too late.

    Those fields can change only while the session is upcoming. Eligibility
    edits and cancellation are not restricted.

    Attributes:
        session_id: The session that was edited.
        status: Derived session status at request time.
    """

    def __init__(self, session_id: str, status: str) -> None:
        self.session_id = session_id
        self.status = status
        super().__init__(
            f"Session {session_id} can no longer be edited (status: {status})"
        )

    def to_rfc7807_dict(self) -> dict:
        return {
            "type": "urn:campus-ballot:session:not-editable",
            "title": "Session Not Editable",
            "status": 409,
            "detail": str(self),
            "session_id": self.session_id,
            "session_status": self.status,
        }
