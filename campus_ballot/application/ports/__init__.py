"""Application ports - Abstract interfaces for infrastructure adapters.

Available ports:
- OrgUnitDirectoryProtocol: College/department/level reference data
- TimeAuthorityProtocol: Current time and monotonic clock
- VoteRecordRepositoryProtocol: Atomic vote record store
- VoterDirectoryProtocol: Identity collaborator and roster
- VotingSessionRepositoryProtocol: Session configuration store
"""

from campus_ballot.application.ports.org_unit_directory import (
    OrgUnitDirectoryProtocol,
)
from campus_ballot.application.ports.session_repository import (
    VotingSessionRepositoryProtocol,
)
from campus_ballot.application.ports.time_authority import TimeAuthorityProtocol
from campus_ballot.application.ports.vote_record_repository import (
    CommitResult,
    VoteRecordRepositoryProtocol,
)
from campus_ballot.application.ports.voter_directory import VoterDirectoryProtocol

__all__: list[str] = [
    "CommitResult",
    "OrgUnitDirectoryProtocol",
    "TimeAuthorityProtocol",
    "VoteRecordRepositoryProtocol",
    "VoterDirectoryProtocol",
    "VotingSessionRepositoryProtocol",
]
