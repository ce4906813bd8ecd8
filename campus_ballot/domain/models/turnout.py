"""Turnout statistics and candidate tally models.

These are read-side values recomputed on every query. Percentages are
carried as strings with exactly two decimals so that transport layers
never re-round them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from campus_ballot.domain.models.vote_record import RejectionKind
from campus_ballot.domain.models.voting_session import SessionStatus

ZERO_PERCENTAGE = "0.00"


def format_percentage(numerator: int, denominator: int) -> str:
    """Return ``numerator / denominator * 100`` with two decimals.

    A zero denominator yields "0.00" rather than raising.

    Example:
        >>> format_percentage(1, 3)
        '33.33'
    """
    if denominator <= 0:
        return ZERO_PERCENTAGE
    value = Decimal(numerator) * 100 / Decimal(denominator)
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class CandidateTally:
    candidate_id: str
    name: str
    vote_count: int
    percentage: str

    def to_dict(self) -> dict:
        return {
            "candidate_id": self.candidate_id,
            "name": self.name,
            "vote_count": self.vote_count,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class CategoryTally:
    """Vote counts for one category.

    Attributes:
        category: Category name.
        total_votes: Sum of candidate vote counts in the category. For
            multi-select categories this exceeds the number of ballots.
        candidates: Per-candidate tallies in ballot order.
    """

    category: str
    total_votes: int
    candidates: tuple[CandidateTally, ...] = ()

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "total_votes": self.total_votes,
            "candidates": [c.to_dict() for c in self.candidates],
        }


@dataclass(frozen=True)
class SessionStatistics:
    """Turnout summary for one session.

    Invariants:
        unique_voters <= eligible_students
        total_votes >= unique_voters
    """

    session_id: str
    title: str
    status: SessionStatus
    eligible_students: int
    total_votes: int
    unique_voters: int
    duplicate_attempts: int
    rejected_votes: int
    turnout_percentage: str
    rejections_by_reason: dict[RejectionKind, int] = field(default_factory=dict)
    categories: tuple[CategoryTally, ...] = ()

    def to_dict(self) -> dict:
        return {
            "session": {
                "session_id": self.session_id,
                "title": self.title,
                "status": self.status.value,
            },
            "eligible_students": self.eligible_students,
            "total_votes": self.total_votes,
            "unique_voters": self.unique_voters,
            "duplicate_attempts": self.duplicate_attempts,
            "rejected_votes": self.rejected_votes,
            "turnout_percentage": self.turnout_percentage,
            "rejections_by_reason": {
                kind.value: count for kind, count in self.rejections_by_reason.items()
            },
            "categories": [c.to_dict() for c in self.categories],
        }


@dataclass(frozen=True)
class SessionResults:
    """Published per-category results for an ended session.

    Attributes:
        total_ballots: The session's total-vote counter (one per
            accepted ballot, regardless of how many candidates it names).
    """

    session_id: str
    title: str
    total_ballots: int
    categories: tuple[CategoryTally, ...] = ()

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "title": self.title,
            "total_ballots": self.total_ballots,
            "categories": [c.to_dict() for c in self.categories],
        }
