"""Transient infrastructure errors.

Storage and identity collaborators can fail independently of the vote
decision. Those failures are a distinct category from business
rejections: they are safe to retry with the same idempotency key and
must never be reported as a duplicate vote.
"""

from __future__ import annotations

from campus_ballot.domain.exceptions import CampusBallotError

DEFAULT_RETRY_AFTER_SECONDS = 5


class TransientInfrastructureError(CampusBallotError):
    """Base error for retry-safe collaborator failures.

    Attributes:
        retry_after: Suggested seconds before the caller retries.
    """

    problem_type = "urn:campus-ballot:infrastructure:unavailable"
    title = "Service Unavailable"

    def __init__(
        self,
        message: str = "",
        retry_after: int = DEFAULT_RETRY_AFTER_SECONDS,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(message)

    def to_rfc7807_dict(self) -> dict:
        return {
            "type": self.problem_type,
            "title": self.title,
            "status": 503,
            "detail": str(self),
            "retry_after": self.retry_after,
        }


class VoteStoreUnavailableError(TransientInfrastructureError):
    """Raised when the vote record store cannot complete an operation.

    A commit that raises this error has left no partial effect: neither
    the record nor any counter increment is visible.
    """

    problem_type = "urn:campus-ballot:vote-store:unavailable"
    title = "Vote Store Unavailable"


class IdentityServiceUnavailableError(TransientInfrastructureError):
    """Raised when the voter directory cannot resolve an identity.

    Attributes:
        voter_id: The voter whose identity lookup failed.
    """

    problem_type = "urn:campus-ballot:identity:unavailable"
    title = "Identity Service Unavailable"

    def __init__(
        self,
        voter_id: str,
        retry_after: int = DEFAULT_RETRY_AFTER_SECONDS,
    ) -> None:
        self.voter_id = voter_id
        super().__init__(
            f"Identity service unavailable while resolving voter {voter_id}",
            retry_after=retry_after,
        )


class SessionStoreUnavailableError(TransientInfrastructureError):
    """Raised when the session configuration store cannot be read or written."""

    problem_type = "urn:campus-ballot:session-store:unavailable"
    title = "Session Store Unavailable"
