"""Infrastructure stubs for development and testing.

Available stubs:
- OrgUnitDirectoryStub: Fixed college/department snapshot
- VoteRecordRepositoryStub: In-memory vote store with per-key locking
- VoterDirectoryStub: Fixed roster, can simulate identity outages
- VotingSessionRepositoryStub: Dict-backed session store

WARNING: These stubs are NOT for production use.
Production implementations are in campus_ballot/infrastructure/adapters/.
"""

from campus_ballot.infrastructure.stubs.org_unit_directory_stub import (
    OrgUnitDirectoryStub,
)
from campus_ballot.infrastructure.stubs.vote_record_repository_stub import (
    VoteRecordRepositoryStub,
)
from campus_ballot.infrastructure.stubs.voter_directory_stub import VoterDirectoryStub
from campus_ballot.infrastructure.stubs.voting_session_repository_stub import (
    VotingSessionRepositoryStub,
)

__all__: list[str] = [
    "OrgUnitDirectoryStub",
    "VoteRecordRepositoryStub",
    "VoterDirectoryStub",
    "VotingSessionRepositoryStub",
]
