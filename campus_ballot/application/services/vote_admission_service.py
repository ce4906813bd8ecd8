"""Vote admission service.

Decides, for each vote-cast attempt, whether the vote is admitted. The
checks run in a fixed order and short-circuit on the first failure:

1. Session lookup                      -> SESSION_NOT_FOUND
2. Window ACTIVE and not cancelled     -> SESSION_NOT_ACTIVE
3. Voter department and level match    -> NOT_ELIGIBLE
4. Category and candidates valid       -> INVALID_CANDIDATE
5. No accepted record for the key      -> DUPLICATE_VOTE
6. Reported location inside geofence   -> OUT_OF_RANGE /
                                          LOCATION_REQUIRED /
                                          INVALID_GEOFENCE_CONFIG
7. Atomic insert-if-absent commit

Step 5 is a fast path only. The record store's insert-if-absent in step
7 is the authority: a commit that loses a race resolves to
DUPLICATE_VOTE, so at most one accepted record per
(voter_id, session_id, category) can ever exist.

Business rejections are returned as VoteOutcome values and appended to
the attempt log. Collaborator failures (TransientInfrastructureError)
propagate to the caller and are never turned into a rejection.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog
from structlog import get_logger
from uuid6 import uuid7

from campus_ballot.domain.models.geofence import GeofenceStatus, GeoPoint
from campus_ballot.domain.models.vote_record import (
    RejectionKind,
    VoteOutcome,
    VoteRecord,
)
from campus_ballot.domain.models.voting_session import Category
from campus_ballot.domain.services.geofence_validator import check_geofence

if TYPE_CHECKING:
    from campus_ballot.application.ports.session_repository import (
        VotingSessionRepositoryProtocol,
    )
    from campus_ballot.application.ports.time_authority import TimeAuthorityProtocol
    from campus_ballot.application.ports.vote_record_repository import (
        VoteRecordRepositoryProtocol,
    )
    from campus_ballot.application.ports.voter_directory import (
        VoterDirectoryProtocol,
    )
    from campus_ballot.infrastructure.monitoring.vote_metrics import (
        VoteMetricsCollector,
    )

logger = get_logger(__name__)

_GEOFENCE_REJECTIONS: dict[GeofenceStatus, RejectionKind] = {
    GeofenceStatus.OUTSIDE: RejectionKind.OUT_OF_RANGE,
    GeofenceStatus.MISSING_LOCATION: RejectionKind.LOCATION_REQUIRED,
    GeofenceStatus.INVALID_CONFIG: RejectionKind.INVALID_GEOFENCE_CONFIG,
}


def normalize_candidate_ids(candidate_ids: str | Sequence[str]) -> tuple[str, ...]:
    """Accept a single candidate id or a sequence of them."""
    if isinstance(candidate_ids, str):
        return (candidate_ids,)
    return tuple(candidate_ids)


def is_valid_ballot(category: Category, candidate_ids: tuple[str, ...]) -> bool:
    """Return True if the ballot names 1..max_votes distinct candidates of the category."""
    if not 1 <= len(candidate_ids) <= category.max_votes:
        return False
    if len(set(candidate_ids)) != len(candidate_ids):
        return False
    return set(candidate_ids) <= category.candidate_ids


class VoteAdmissionService:
    """Admits or rejects vote-cast attempts.

    The service holds no locks of its own. Per-key mutual exclusion is
    the record store's job, so attempts on different keys never wait on
    each other.

    Example:
        >>> service = VoteAdmissionService(
        ...     session_repository=sessions,
        ...     vote_record_repository=records,
        ...     voter_directory=voters,
        ...     time_authority=SystemTimeAuthority(),
        ... )
        >>> outcome = await service.cast_vote(
        ...     "CSC/2021/001", "sug-2026", "President", "cand-1",
        ...     reported_location=GeoPoint(6.5244, 3.3792),
        ... )
        >>> outcome.accepted
        True
    """

    def __init__(
        self,
        session_repository: VotingSessionRepositoryProtocol,
        vote_record_repository: VoteRecordRepositoryProtocol,
        voter_directory: VoterDirectoryProtocol,
        time_authority: TimeAuthorityProtocol,
        metrics: VoteMetricsCollector | None = None,
    ) -> None:
        """Initialize the vote admission service.

        Args:
            session_repository: Source of session configurations.
            vote_record_repository: Atomic vote record store.
            voter_directory: Identity collaborator.
            time_authority: Clock for window checks and record timestamps.
            metrics: Optional Prometheus collector.
        """
        self._sessions = session_repository
        self._records = vote_record_repository
        self._voters = voter_directory
        self._time = time_authority
        self._metrics = metrics

    async def cast_vote(
        self,
        voter_id: str,
        session_id: str,
        category: str,
        candidate_ids: str | Sequence[str],
        reported_location: GeoPoint | None = None,
        request_id: str | None = None,
    ) -> VoteOutcome:
        """Decide one vote-cast attempt.

        Args:
            voter_id: Authenticated voter identifier.
            session_id: Target session.
            category: Target category name.
            candidate_ids: One candidate id, or several for multi-select
                categories.
            reported_location: Device location, if the client sent one.
            request_id: Client retry token. A retry carrying the token of
                the already-accepted vote replays that acceptance.

        Returns:
            VoteOutcome; accepted with the committed record, or rejected
            with exactly one RejectionKind.

        Raises:
            IdentityServiceUnavailableError: Voter lookup failed.
            VoteStoreUnavailableError: The record store failed. Nothing
                was committed; the call is safe to retry.
        """
        started = self._time.monotonic()
        ballot = normalize_candidate_ids(candidate_ids)
        log = logger.bind(
            voter_id=voter_id,
            session_id=session_id,
            category=category,
            request_id=request_id,
        )
        try:
            return await self._decide(
                log, voter_id, session_id, category, ballot, reported_location, request_id
            )
        finally:
            if self._metrics is not None:
                self._metrics.observe_admission_duration(
                    self._time.monotonic() - started
                )

    async def _decide(
        self,
        log: structlog.BoundLogger,
        voter_id: str,
        session_id: str,
        category_name: str,
        ballot: tuple[str, ...],
        reported_location: GeoPoint | None,
        request_id: str | None,
    ) -> VoteOutcome:
        now = self._time.now()

        # 1. Session lookup
        session = await self._sessions.get(session_id)
        if session is None:
            return await self._reject(
                log, RejectionKind.SESSION_NOT_FOUND,
                voter_id, session_id, category_name, ballot, request_id,
            )

        # 2. Window gate
        if not session.accepts_votes(now):
            log.debug("session_not_accepting_votes", status=session.status(now).value)
            return await self._reject(
                log, RejectionKind.SESSION_NOT_ACTIVE,
                voter_id, session_id, category_name, ballot, request_id,
            )

        # 3. Eligibility; unknown identities never match
        voter = await self._voters.get_voter(voter_id)
        if voter is None or not session.eligibility.matches(
            voter.department_id, voter.level
        ):
            return await self._reject(
                log, RejectionKind.NOT_ELIGIBLE,
                voter_id, session_id, category_name, ballot, request_id,
            )

        # 4. Candidate validity
        category = session.get_category(category_name)
        if category is None or not is_valid_ballot(category, ballot):
            return await self._reject(
                log, RejectionKind.INVALID_CANDIDATE,
                voter_id, session_id, category_name, ballot, request_id,
            )

        # 5. Duplicate fast path
        existing = await self._records.get_accepted(voter_id, session_id, category_name)
        if existing is not None:
            if request_id is not None and existing.request_id == request_id:
                log.info("vote_replayed", record_id=str(existing.record_id))
                return VoteOutcome.accept(existing, replayed=True)
            log.info("duplicate_vote_attempt", record_id=str(existing.record_id))
            return await self._reject(
                log, RejectionKind.DUPLICATE_VOTE,
                voter_id, session_id, category_name, ballot, request_id,
            )

        # 6. Geofence
        check = check_geofence(session.geofence, reported_location)
        if not check.passed:
            return await self._reject(
                log, _GEOFENCE_REJECTIONS[check.status],
                voter_id, session_id, category_name, ballot, request_id,
                distance_meters=check.distance_meters,
            )

        # 7. Atomic commit
        record = VoteRecord.accepted(
            record_id=uuid7(),
            voter_id=voter_id,
            session_id=session_id,
            category=category_name,
            candidate_ids=ballot,
            committed_at=now,
            request_id=request_id,
        )
        result = await self._records.commit_accepted(record)

        if not result.committed:
            winner = result.record
            log.warning(
                "vote_commit_race_lost",
                winning_record_id=str(winner.record_id),
            )
            if request_id is not None and winner.request_id == request_id:
                return VoteOutcome.accept(winner, replayed=True)
            return await self._reject(
                log, RejectionKind.DUPLICATE_VOTE,
                voter_id, session_id, category_name, ballot, request_id,
            )

        if self._metrics is not None:
            self._metrics.record_accepted(category_name)
        log.info(
            "vote_accepted",
            record_id=str(record.record_id),
            candidates=len(ballot),
            distance_meters=check.distance_meters,
        )
        return VoteOutcome.accept(record, distance_meters=check.distance_meters)

    async def _reject(
        self,
        log: structlog.BoundLogger,
        reason: RejectionKind,
        voter_id: str,
        session_id: str,
        category: str,
        ballot: tuple[str, ...],
        request_id: str | None,
        distance_meters: float | None = None,
    ) -> VoteOutcome:
        """Append the rejected attempt to the log and build the outcome."""
        record = VoteRecord.rejected(
            record_id=uuid7(),
            voter_id=voter_id,
            session_id=session_id,
            category=category,
            candidate_ids=ballot,
            committed_at=self._time.now(),
            reason=reason,
            request_id=request_id,
        )
        await self._records.log_rejection(record)

        if self._metrics is not None:
            self._metrics.record_rejected(reason)
        log.info(
            "vote_rejected",
            reason=reason.value,
            distance_meters=distance_meters,
        )
        return VoteOutcome.reject(reason, distance_meters=distance_meters)
