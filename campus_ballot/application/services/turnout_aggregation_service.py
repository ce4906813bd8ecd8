"""Turnout aggregation service.

Read-side view over the vote record store. Every statistic is
recomputed on query; nothing here mutates state. Reads only need
read-committed consistency, but queries are issued in an order that
keeps ``total_votes >= unique_voters`` and
``unique_voters <= eligible_students`` true even while votes land
between them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from structlog import get_logger

from campus_ballot.domain.errors import ResultsNotPublishedError, SessionNotFoundError
from campus_ballot.domain.models.turnout import (
    CandidateTally,
    CategoryTally,
    SessionResults,
    SessionStatistics,
    format_percentage,
)
from campus_ballot.domain.models.vote_record import RejectionKind
from campus_ballot.domain.models.voting_session import SessionStatus, VotingSession

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

logger = get_logger(__name__)


class TurnoutAggregationService:
    """Computes session statistics and published results."""

    def __init__(
        self,
        session_repository: VotingSessionRepositoryProtocol,
        vote_record_repository: VoteRecordRepositoryProtocol,
        voter_directory: VoterDirectoryProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._sessions = session_repository
        self._records = vote_record_repository
        self._voters = voter_directory
        self._time = time_authority

    async def _get_session(self, session_id: str) -> VotingSession:
        session = await self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def get_session_stats(self, session_id: str) -> SessionStatistics:
        """Compute turnout statistics for a session.

        ``eligible_students`` counts roster entries matching the current
        spec plus every voter already admitted. Spec edits are not
        retroactive, so a voter admitted under an earlier spec still
        counts toward the denominator.

        Raises:
            SessionNotFoundError: The session does not exist.
        """
        session = await self._get_session(session_id)
        log = logger.bind(session_id=session_id)

        voted_ids = await self._records.list_voter_ids(session_id)
        # Read after voter ids: accepted records only grow
        total_votes = await self._records.count_accepted(session_id)

        matching = await self._voters.count_matching(session.eligibility)
        voted = await self._voters.get_voters(sorted(voted_ids))
        still_matching = sum(
            1
            for voter in voted
            if session.eligibility.matches(voter.department_id, voter.level)
        )
        eligible_students = matching + len(voted_ids) - still_matching
        unique_voters = len(voted_ids)

        rejections_by_reason = await self._records.count_rejections_by_reason(
            session_id
        )
        rejected_votes = sum(rejections_by_reason.values())
        duplicate_attempts = rejections_by_reason.get(
            RejectionKind.DUPLICATE_VOTE, 0
        )

        categories = await self._category_tallies(session)

        stats = SessionStatistics(
            session_id=session.session_id,
            title=session.title,
            status=session.status(self._time.now()),
            eligible_students=eligible_students,
            total_votes=total_votes,
            unique_voters=unique_voters,
            duplicate_attempts=duplicate_attempts,
            rejected_votes=rejected_votes,
            turnout_percentage=format_percentage(unique_voters, eligible_students),
            rejections_by_reason=rejections_by_reason,
            categories=categories,
        )
        log.debug(
            "session_stats_computed",
            eligible_students=eligible_students,
            unique_voters=unique_voters,
            total_votes=total_votes,
        )
        return stats

    async def get_public_results(self, session_id: str) -> SessionResults:
        """Return per-category results once they may be shown publicly.

        Raises:
            SessionNotFoundError: The session does not exist.
            ResultsNotPublishedError: The session has not ended or the
                administrator has not released its results.
        """
        session = await self._get_session(session_id)
        status = session.status(self._time.now())
        if not session.results_public or status != SessionStatus.ENDED:
            logger.info(
                "results_not_published",
                session_id=session_id,
                status=status.value,
                results_public=session.results_public,
            )
            raise ResultsNotPublishedError(session_id, status.value)

        return SessionResults(
            session_id=session.session_id,
            title=session.title,
            total_ballots=await self._records.get_session_total(session_id),
            categories=await self._category_tallies(session),
        )

    async def _category_tallies(
        self, session: VotingSession
    ) -> tuple[CategoryTally, ...]:
        counts = await self._records.get_candidate_tallies(session.session_id)
        tallies = []
        for category in session.categories:
            category_total = sum(
                counts.get(c.candidate_id, 0) for c in category.candidates
            )
            tallies.append(
                CategoryTally(
                    category=category.name,
                    total_votes=category_total,
                    candidates=tuple(
                        CandidateTally(
                            candidate_id=c.candidate_id,
                            name=c.name,
                            vote_count=counts.get(c.candidate_id, 0),
                            percentage=format_percentage(
                                counts.get(c.candidate_id, 0), category_total
                            ),
                        )
                        for c in category.candidates
                    ),
                )
            )
        return tuple(tallies)
