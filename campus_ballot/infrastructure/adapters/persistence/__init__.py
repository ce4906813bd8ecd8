"""PostgreSQL persistence adapters."""

from campus_ballot.infrastructure.adapters.persistence.vote_record_repository import (
    VOTE_RECORD_DDL,
    PostgresVoteRecordRepository,
)
from campus_ballot.infrastructure.adapters.persistence.voting_session_repository import (
    VOTING_SESSION_DDL,
    PostgresVotingSessionRepository,
)

__all__ = [
    "VOTE_RECORD_DDL",
    "VOTING_SESSION_DDL",
    "PostgresVoteRecordRepository",
    "PostgresVotingSessionRepository",
]
