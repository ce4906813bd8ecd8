"""In-memory stub for VoteRecordRepositoryProtocol.

Simulates the database behavior the admission service relies on:
- Insert-if-absent on (voter_id, session_id, category) for accepted records
- Candidate and session counters updated together with the record
- An append-only rejection log

Mutual exclusion is per key via KeyedLock. Commits for different keys
never wait on each other.

WARNING: NOT for production use.
Production implementation is in campus_ballot/infrastructure/adapters/persistence/.
"""

from __future__ import annotations

import asyncio
from collections import Counter

from campus_ballot.application.ports.vote_record_repository import (
    CommitResult,
    VoteRecordRepositoryProtocol,
)
from campus_ballot.domain.errors import VoteStoreUnavailableError
from campus_ballot.domain.models.vote_record import RejectionKind, VoteKey, VoteRecord
from campus_ballot.infrastructure.concurrency.keyed_lock import KeyedLock


class VoteRecordRepositoryStub(VoteRecordRepositoryProtocol):
    """In-memory vote record store.

    Attributes:
        _accepted: Accepted records keyed by VoteKey.
        _rejections: Rejected attempts in arrival order.
        _candidate_counts: Per-session vote count per candidate id.
        _session_totals: Per-session total-vote counter.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._accepted: dict[VoteKey, VoteRecord] = {}
        self._rejections: list[VoteRecord] = []
        self._candidate_counts: dict[str, Counter[str]] = {}
        self._session_totals: dict[str, int] = {}
        self._locks = KeyedLock()
        self._fail_next_commit = False
        self._unavailable = False

    def _check_available(self) -> None:
        if self._unavailable:
            raise VoteStoreUnavailableError("Vote store is unavailable")

    async def get_accepted(
        self, voter_id: str, session_id: str, category: str
    ) -> VoteRecord | None:
        self._check_available()
        return self._accepted.get(VoteKey(voter_id, session_id, category))

    async def commit_accepted(self, record: VoteRecord) -> CommitResult:
        """Insert the record if its key is free, then bump the counters.

        Raises:
            ValueError: The record is not an accepted record.
            VoteStoreUnavailableError: Simulated failure; nothing is written.
        """
        if not record.is_accepted:
            raise ValueError("commit_accepted requires an accepted record")

        async with self._locks.hold(record.key):
            existing = self._accepted.get(record.key)
            if existing is not None:
                return CommitResult(committed=False, record=existing)

            # Suspend inside the critical section, as a database round trip would
            await asyncio.sleep(0)

            self._check_available()
            if self._fail_next_commit:
                self._fail_next_commit = False
                raise VoteStoreUnavailableError(
                    f"Simulated commit failure for {record.key}"
                )

            counts = self._candidate_counts.setdefault(record.session_id, Counter())
            for candidate_id in record.candidate_ids:
                counts[candidate_id] += 1
            self._session_totals[record.session_id] = (
                self._session_totals.get(record.session_id, 0) + 1
            )
            self._accepted[record.key] = record
            return CommitResult(committed=True, record=record)

    async def log_rejection(self, record: VoteRecord) -> None:
        if record.is_accepted:
            raise ValueError("log_rejection requires a rejected record")
        self._check_available()
        self._rejections.append(record)

    async def count_accepted(self, session_id: str) -> int:
        self._check_available()
        return sum(1 for key in self._accepted if key.session_id == session_id)

    async def list_voter_ids(self, session_id: str) -> set[str]:
        self._check_available()
        return {key.voter_id for key in self._accepted if key.session_id == session_id}

    async def count_rejections(
        self, session_id: str, reason: RejectionKind | None = None
    ) -> int:
        self._check_available()
        return sum(
            1
            for r in self._rejections
            if r.session_id == session_id
            and (reason is None or r.rejection_reason == reason)
        )

    async def count_rejections_by_reason(
        self, session_id: str
    ) -> dict[RejectionKind, int]:
        self._check_available()
        counts: Counter[RejectionKind] = Counter(
            r.rejection_reason
            for r in self._rejections
            if r.session_id == session_id and r.rejection_reason is not None
        )
        return dict(counts)

    async def get_candidate_tallies(self, session_id: str) -> dict[str, int]:
        self._check_available()
        return dict(self._candidate_counts.get(session_id, {}))

    async def get_session_total(self, session_id: str) -> int:
        self._check_available()
        return self._session_totals.get(session_id, 0)

    # Test helper methods

    def fail_next_commit(self) -> None:
        """Make the next commit raise VoteStoreUnavailableError."""
        self._fail_next_commit = True

    def set_unavailable(self, unavailable: bool = True) -> None:
        """Make every operation raise VoteStoreUnavailableError."""
        self._unavailable = unavailable

    def get_rejections(self, session_id: str | None = None) -> list[VoteRecord]:
        return [
            r for r in self._rejections if session_id is None or r.session_id == session_id
        ]

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._accepted.clear()
        self._rejections.clear()
        self._candidate_counts.clear()
        self._session_totals.clear()
        self._fail_next_commit = False
        self._unavailable = False
