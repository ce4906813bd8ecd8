"""Vote record repository protocol.

Separates persistence of vote records from the admission decision.
Implementations MUST make ``commit_accepted`` an atomic insert-if-absent
on the key (voter_id, session_id, category): the record and every
counter increment become visible together, or not at all.

Implementations:
- VoteRecordRepositoryStub: in-memory, per-key asyncio locks
- PostgresVoteRecordRepository: INSERT ... ON CONFLICT DO NOTHING
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol

from campus_ballot.domain.models.vote_record import RejectionKind, VoteRecord


@dataclass(frozen=True)
class CommitResult:
    """Result of an insert-if-absent commit.

    Attributes:
        committed: True if this call inserted the record.
        record: The record now stored for the key. When ``committed`` is
            False this is the record that won the race.
    """

    committed: bool
    record: VoteRecord


class VoteRecordRepositoryProtocol(Protocol):
    """Repository protocol for vote record persistence."""

    @abstractmethod
    async def get_accepted(
        self, voter_id: str, session_id: str, category: str
    ) -> VoteRecord | None:
        """Return the accepted record for the key, if any."""
        ...

    @abstractmethod
    async def commit_accepted(self, record: VoteRecord) -> CommitResult:
        """Atomically insert an accepted record if its key is free.

        On success, increments each named candidate's vote count and the
        session total by one, in the same atomic step.

        Args:
            record: An accepted VoteRecord.

        Returns:
            CommitResult. ``committed`` is False when another accepted
            record already holds the key; no counter changes in that case.

        Raises:
            VoteStoreUnavailableError: The store failed; nothing was written.
        """
        ...

    @abstractmethod
    async def log_rejection(self, record: VoteRecord) -> None:
        """Append a rejected attempt to the attempt log."""
        ...

    @abstractmethod
    async def count_accepted(self, session_id: str) -> int:
        """Number of accepted records for the session."""
        ...

    @abstractmethod
    async def list_voter_ids(self, session_id: str) -> set[str]:
        """Distinct voter ids with at least one accepted record."""
        ...

    @abstractmethod
    async def count_rejections(
        self, session_id: str, reason: RejectionKind | None = None
    ) -> int:
        """Count logged rejections, optionally for one reason only."""
        ...

    @abstractmethod
    async def count_rejections_by_reason(
        self, session_id: str
    ) -> dict[RejectionKind, int]:
        """Logged rejections grouped by reason; absent reasons are omitted."""
        ...

    @abstractmethod
    async def get_candidate_tallies(self, session_id: str) -> dict[str, int]:
        """Vote count per candidate id. Candidates without votes may be omitted."""
        ...

    @abstractmethod
    async def get_session_total(self, session_id: str) -> int:
        """The session's total-vote counter."""
        ...
