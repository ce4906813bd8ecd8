"""Voting session domain models.

A VotingSession bundles everything the admission decider needs: the
voting window, the geofence, the eligibility spec and the ballot
categories with their candidates.

Invariants (enforced on construction):
- start_time < end_time, both timezone-aware
- Category names are unique within the session
- Every category has max_votes >= 1
- Every candidate id appears in exactly one category, and the candidate's
  ``category`` field names that category

Sessions are frozen values. Administrative edits produce a new value via
``dataclasses.replace``; votes already accepted are not re-evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from campus_ballot.domain.errors.session import (
    InvalidCategoryError,
    InvalidTimeWindowError,
)
from campus_ballot.domain.models.eligibility import EligibilitySpec
from campus_ballot.domain.models.geofence import Geofence
from campus_ballot.domain.services.session_window import (
    SessionWindowState,
    session_window_state,
)


class SessionStatus(str, Enum):
    """Display status: the window state, or CANCELLED when overridden."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    ENDED = "ended"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Candidate:
    """A candidate standing in one category.

    Attributes:
        candidate_id: Identifier unique within the session.
        name: Display name.
        category: Name of the category this candidate belongs to.
    """

    candidate_id: str
    name: str
    category: str

    def to_dict(self) -> dict:
        return {
            "candidate_id": self.candidate_id,
            "name": self.name,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Candidate:
        return cls(
            candidate_id=data["candidate_id"],
            name=data["name"],
            category=data["category"],
        )


@dataclass(frozen=True)
class Category:
    """A ballot category (position) and its candidates.

    Attributes:
        name: Category name, unique within the session.
        max_votes: How many distinct candidates one ballot may name.
            1 for the common single-select position.
        candidates: Candidates in display order.
    """

    name: str
    max_votes: int = 1
    candidates: tuple[Candidate, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "candidates", tuple(self.candidates))
        if not self.name:
            raise InvalidCategoryError("Category name must be non-empty")
        if self.max_votes < 1:
            raise InvalidCategoryError(
                f"Category {self.name!r}: max_votes must be at least 1, got {self.max_votes}"
            )
        seen: set[str] = set()
        for candidate in self.candidates:
            if candidate.category != self.name:
                raise InvalidCategoryError(
                    f"Candidate {candidate.candidate_id} declares category "
                    f"{candidate.category!r} but is listed under {self.name!r}"
                )
            if candidate.candidate_id in seen:
                raise InvalidCategoryError(
                    f"Candidate {candidate.candidate_id} listed twice in {self.name!r}"
                )
            seen.add(candidate.candidate_id)

    @property
    def candidate_ids(self) -> frozenset[str]:
        return frozenset(c.candidate_id for c in self.candidates)

    def has_candidate(self, candidate_id: str) -> bool:
        return any(c.candidate_id == candidate_id for c in self.candidates)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "max_votes": self.max_votes,
            "candidates": [c.to_dict() for c in self.candidates],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Category:
        return cls(
            name=data["name"],
            max_votes=int(data.get("max_votes", 1)),
            candidates=tuple(
                Candidate.from_dict(c) for c in data.get("candidates", ())
            ),
        )


@dataclass(frozen=True)
class VotingSession:
    """A time-bounded election with geofence, eligibility and ballot.

    Attributes:
        session_id: Stable identifier.
        title: Display title.
        start_time: Inclusive start of the voting window (tz-aware).
        end_time: Exclusive end of the voting window (tz-aware).
        geofence: Location restriction.
        eligibility: Departments and levels allowed to vote.
        categories: Ballot categories in display order.
        results_public: Whether tallies may be shown to non-admins once
            the session has ended.
        cancelled: Administrative cancellation; a cancelled session
            admits no votes regardless of its window.
    """

    session_id: str
    title: str
    start_time: datetime
    end_time: datetime
    geofence: Geofence
    eligibility: EligibilitySpec = field(default_factory=EligibilitySpec)
    categories: tuple[Category, ...] = ()
    results_public: bool = False
    cancelled: bool = False

    def __post_init__(self) -> None:
        """Validate session invariants.

        Raises:
            InvalidTimeWindowError: If the window is empty or inverted, or
                either bound is timezone-naive.
            InvalidCategoryError: If category names repeat or a candidate
                id appears in more than one category.
        """
        object.__setattr__(self, "categories", tuple(self.categories))

        if self.start_time.tzinfo is None or self.end_time.tzinfo is None:
            raise InvalidTimeWindowError(
                self.start_time,
                self.end_time,
                "Voting window bounds must be timezone-aware",
            )
        if self.start_time >= self.end_time:
            raise InvalidTimeWindowError(self.start_time, self.end_time)

        names: set[str] = set()
        owners: dict[str, str] = {}
        for category in self.categories:
            if category.name in names:
                raise InvalidCategoryError(f"Duplicate category name: {category.name!r}")
            names.add(category.name)
            for candidate in category.candidates:
                owner = owners.setdefault(candidate.candidate_id, category.name)
                if owner != category.name:
                    raise InvalidCategoryError(
                        f"Candidate {candidate.candidate_id} appears in both "
                        f"{owner!r} and {category.name!r}"
                    )

    def get_category(self, name: str) -> Category | None:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def window_state(self, now: datetime) -> SessionWindowState:
        return session_window_state(now, self.start_time, self.end_time)

    def status(self, now: datetime) -> SessionStatus:
        if self.cancelled:
            return SessionStatus.CANCELLED
        return SessionStatus(self.window_state(now).value)

    def accepts_votes(self, now: datetime) -> bool:
        return not self.cancelled and self.window_state(now) == SessionWindowState.ACTIVE

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict.

        Datetimes are ISO 8601 strings with offset; ``from_dict`` reverses
        this and re-runs every constructor invariant.
        """
        return {
            "session_id": self.session_id,
            "title": self.title,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "geofence": self.geofence.to_dict(),
            "eligibility": self.eligibility.to_dict(),
            "categories": [c.to_dict() for c in self.categories],
            "results_public": self.results_public,
            "cancelled": self.cancelled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> VotingSession:
        return cls(
            session_id=data["session_id"],
            title=data["title"],
            start_time=datetime.fromisoformat(data["start_time"]),
            end_time=datetime.fromisoformat(data["end_time"]),
            geofence=Geofence.from_dict(data["geofence"]),
            eligibility=EligibilitySpec.from_dict(data.get("eligibility", {})),
            categories=tuple(Category.from_dict(c) for c in data.get("categories", ())),
            results_public=bool(data.get("results_public", False)),
            cancelled=bool(data.get("cancelled", False)),
        )


@dataclass(frozen=True)
class SessionPage:
    """One page of a session listing.

    Attributes:
        sessions: Sessions on this page, newest start_time first.
        total: Number of stored sessions.
        page: 1-based page number.
        limit: Page size.
    """

    sessions: tuple[VotingSession, ...]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit)
