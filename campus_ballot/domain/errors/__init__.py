"""Domain errors for Campus Ballot.

Provides specific exception classes for configuration, lookup and
infrastructure failures. All exceptions inherit from CampusBallotError.
"""

from campus_ballot.domain.errors.infrastructure import (
    IdentityServiceUnavailableError,
    SessionStoreUnavailableError,
    TransientInfrastructureError,
    VoteStoreUnavailableError,
)
from campus_ballot.domain.errors.session import (
    InvalidCategoryError,
    InvalidGeofenceError,
    InvalidTimeWindowError,
    ResultsNotPublishedError,
    SessionConfigurationError,
    SessionNotEditableError,
    SessionNotFoundError,
    UnknownDepartmentError,
)

__all__: list[str] = [
    "IdentityServiceUnavailableError",
    "InvalidCategoryError",
    "InvalidGeofenceError",
    "InvalidTimeWindowError",
    "ResultsNotPublishedError",
    "SessionConfigurationError",
    "SessionNotEditableError",
    "SessionNotFoundError",
    "SessionStoreUnavailableError",
    "TransientInfrastructureError",
    "UnknownDepartmentError",
    "VoteStoreUnavailableError",
]
