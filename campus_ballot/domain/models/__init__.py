"""Domain models for Campus Ballot.

Contains value objects that represent core election concepts. These
models are immutable and contain no infrastructure dependencies.
"""

from campus_ballot.domain.models.eligibility import (
    CollegeSelectionState,
    EligibilityChange,
    EligibilityIssue,
    EligibilitySpec,
)
from campus_ballot.domain.models.geofence import (
    GeofenceCheck,
    GeofenceStatus,
    GeoPoint,
    Geofence,
)
from campus_ballot.domain.models.org_unit import College, Department, OrgUnitDirectory
from campus_ballot.domain.models.voter import Voter
from campus_ballot.domain.models.voting_session import (
    Candidate,
    Category,
    SessionPage,
    SessionStatus,
    VotingSession,
)
from campus_ballot.domain.models.vote_record import (
    RejectionKind,
    VoteDisposition,
    VoteKey,
    VoteOutcome,
    VoteRecord,
)
from campus_ballot.domain.models.turnout import (
    CandidateTally,
    CategoryTally,
    SessionResults,
    SessionStatistics,
    format_percentage,
)

__all__: list[str] = [
    "Candidate",
    "CandidateTally",
    "Category",
    "CategoryTally",
    "College",
    "CollegeSelectionState",
    "Department",
    "EligibilityChange",
    "EligibilityIssue",
    "EligibilitySpec",
    "GeoPoint",
    "Geofence",
    "GeofenceCheck",
    "GeofenceStatus",
    "OrgUnitDirectory",
    "RejectionKind",
    "SessionPage",
    "SessionResults",
    "SessionStatistics",
    "SessionStatus",
    "VoteDisposition",
    "VoteKey",
    "VoteOutcome",
    "VoteRecord",
    "Voter",
    "VotingSession",
    "format_percentage",
]
