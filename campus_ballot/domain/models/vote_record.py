"""Vote record and vote outcome models.

A VoteRecord is the durable trace of one vote-cast attempt. Accepted
records are append-only and unique per (voter_id, session_id, category);
rejected attempts may be logged any number of times and feed the
``rejected_votes`` and ``duplicate_attempts`` statistics.

A VoteOutcome is what the admission decider returns to its caller. It is
a closed result type: either accepted (with the committed record) or
rejected with exactly one RejectionKind. Business rejections are never
raised as exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

import blake3


class RejectionKind(str, Enum):
    """Why a vote-cast attempt was not admitted, in decision order."""

    SESSION_NOT_FOUND = "session_not_found"
    SESSION_NOT_ACTIVE = "session_not_active"
    NOT_ELIGIBLE = "not_eligible"
    INVALID_CANDIDATE = "invalid_candidate"
    DUPLICATE_VOTE = "duplicate_vote"
    OUT_OF_RANGE = "out_of_range"
    LOCATION_REQUIRED = "location_required"
    INVALID_GEOFENCE_CONFIG = "invalid_geofence_config"


class VoteDisposition(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class VoteKey:
    """Idempotency key: one accepted vote per voter, session and category."""

    voter_id: str
    session_id: str
    category: str

    def __str__(self) -> str:
        return f"{self.session_id}:{self.category}:{self.voter_id}"


@dataclass(frozen=True, eq=True)
class VoteRecord:
    """One vote-cast attempt as stored by the record store.

    Attributes:
        record_id: Unique identifier of this record.
        voter_id: The voter who attempted to vote.
        session_id: The target session.
        category: The target category.
        candidate_ids: Candidates named on the ballot, in ballot order.
            Non-empty for accepted records.
        committed_at: When the record was written (UTC, tz-aware).
        outcome: ACCEPTED or REJECTED.
        rejection_reason: Set iff outcome is REJECTED.
        request_id: Client-supplied retry token, if any.
        content_hash: BLAKE3 digest of the canonical content (32 bytes).
    """

    record_id: UUID
    voter_id: str
    session_id: str
    category: str
    candidate_ids: tuple[str, ...]
    committed_at: datetime
    outcome: VoteDisposition
    content_hash: bytes
    rejection_reason: RejectionKind | None = None
    request_id: str | None = None

    def __post_init__(self) -> None:
        """Validate record fields.

        Raises:
            ValueError: If any field validation fails.
        """
        object.__setattr__(self, "candidate_ids", tuple(self.candidate_ids))
        if self.committed_at.tzinfo is None:
            raise ValueError("committed_at must be timezone-aware (UTC)")
        if len(self.content_hash) != 32:
            raise ValueError(
                f"content_hash must be 32 bytes (BLAKE3), got {len(self.content_hash)}"
            )
        if self.outcome == VoteDisposition.ACCEPTED:
            if self.rejection_reason is not None:
                raise ValueError("Accepted records cannot carry a rejection reason")
            if not self.candidate_ids:
                raise ValueError("Accepted records must name at least one candidate")
        elif self.rejection_reason is None:
            raise ValueError("Rejected records must carry a rejection reason")

    @property
    def key(self) -> VoteKey:
        return VoteKey(self.voter_id, self.session_id, self.category)

    @property
    def is_accepted(self) -> bool:
        return self.outcome == VoteDisposition.ACCEPTED

    @staticmethod
    def compute_content_hash(
        voter_id: str,
        session_id: str,
        category: str,
        candidate_ids: tuple[str, ...],
        committed_at: datetime,
        outcome: VoteDisposition,
    ) -> bytes:
        """Compute the BLAKE3 digest of a record's canonical content.

        Canonical format: voter|session|category|c1,c2|committed_at_iso|outcome
        """
        content = "|".join(
            (
                voter_id,
                session_id,
                category,
                ",".join(candidate_ids),
                committed_at.isoformat(),
                outcome.value,
            )
        ).encode("utf-8")
        return blake3.blake3(content).digest()

    def verify_content_hash(self) -> bool:
        expected = self.compute_content_hash(
            self.voter_id,
            self.session_id,
            self.category,
            self.candidate_ids,
            self.committed_at,
            self.outcome,
        )
        return self.content_hash == expected

    @classmethod
    def accepted(
        cls,
        record_id: UUID,
        voter_id: str,
        session_id: str,
        category: str,
        candidate_ids: tuple[str, ...],
        committed_at: datetime,
        request_id: str | None = None,
    ) -> VoteRecord:
        return cls(
            record_id=record_id,
            voter_id=voter_id,
            session_id=session_id,
            category=category,
            candidate_ids=candidate_ids,
            committed_at=committed_at,
            outcome=VoteDisposition.ACCEPTED,
            content_hash=cls.compute_content_hash(
                voter_id,
                session_id,
                category,
                candidate_ids,
                committed_at,
                VoteDisposition.ACCEPTED,
            ),
            request_id=request_id,
        )

    @classmethod
    def rejected(
        cls,
        record_id: UUID,
        voter_id: str,
        session_id: str,
        category: str,
        candidate_ids: tuple[str, ...],
        committed_at: datetime,
        reason: RejectionKind,
        request_id: str | None = None,
    ) -> VoteRecord:
        return cls(
            record_id=record_id,
            voter_id=voter_id,
            session_id=session_id,
            category=category,
            candidate_ids=candidate_ids,
            committed_at=committed_at,
            outcome=VoteDisposition.REJECTED,
            content_hash=cls.compute_content_hash(
                voter_id,
                session_id,
                category,
                candidate_ids,
                committed_at,
                VoteDisposition.REJECTED,
            ),
            rejection_reason=reason,
            request_id=request_id,
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dictionary.

        WARNING: Never use asdict() - it breaks UUID/datetime/bytes serialization.
        """
        return {
            "record_id": str(self.record_id),
            "voter_id": self.voter_id,
            "session_id": self.session_id,
            "category": self.category,
            "candidate_ids": list(self.candidate_ids),
            "committed_at": self.committed_at.isoformat(),
            "outcome": self.outcome.value,
            "rejection_reason": (
                self.rejection_reason.value if self.rejection_reason else None
            ),
            "request_id": self.request_id,
            "content_hash": self.content_hash.hex(),
        }


@dataclass(frozen=True)
class VoteOutcome:
    """Decision returned for a single vote-cast attempt.

    Attributes:
        accepted: Whether the vote was admitted.
        reason: The rejection kind; None iff accepted.
        record: The accepted record (the original one on replay).
        replayed: True when a retry with the original request_id
            re-resolved to an existing accepted record.
        distance_meters: Distance from the geofence center, when measured.
    """

    accepted: bool
    reason: RejectionKind | None = None
    record: VoteRecord | None = field(default=None, compare=False)
    replayed: bool = False
    distance_meters: float | None = None

    def __post_init__(self) -> None:
        if self.accepted and self.reason is not None:
            raise ValueError("An accepted outcome cannot carry a rejection reason")
        if not self.accepted and self.reason is None:
            raise ValueError("A rejected outcome must carry a rejection reason")

    @classmethod
    def accept(
        cls,
        record: VoteRecord,
        replayed: bool = False,
        distance_meters: float | None = None,
    ) -> VoteOutcome:
        return cls(
            accepted=True,
            record=record,
            replayed=replayed,
            distance_meters=distance_meters,
        )

    @classmethod
    def reject(
        cls, reason: RejectionKind, distance_meters: float | None = None
    ) -> VoteOutcome:
        return cls(accepted=False, reason=reason, distance_meters=distance_meters)

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "reason": self.reason.value if self.reason else None,
            "replayed": self.replayed,
            "record_id": str(self.record.record_id) if self.record else None,
        }
