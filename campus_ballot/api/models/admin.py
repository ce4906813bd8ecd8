"""Session administration request/response models.

Request models only check shape. Session invariants (window order,
timezone-aware bounds, geofence range, unique candidates) are enforced by
the domain constructors and surface as 422 problem details.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from campus_ballot.api.models.eligibility import EligibilitySpecModel
from campus_ballot.api.models.votes import DateTimeWithZ
from campus_ballot.domain.models.geofence import Geofence
from campus_ballot.domain.models.voting_session import (
    Candidate,
    Category,
    SessionStatus,
    VotingSession,
)


class CandidateModel(BaseModel):
    candidate_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class CategoryModel(BaseModel):
    """A ballot category. Candidates inherit the category name."""

    name: str = Field(..., min_length=1)
    max_votes: int = Field(default=1, ge=1)
    candidates: list[CandidateModel] = Field(default_factory=list)

    def to_domain(self) -> Category:
        return Category(
            name=self.name,
            max_votes=self.max_votes,
            candidates=tuple(
                Candidate(c.candidate_id, c.name, self.name) for c in self.candidates
            ),
        )

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryModel":
        return cls(
            name=category.name,
            max_votes=category.max_votes,
            candidates=[
                CandidateModel(candidate_id=c.candidate_id, name=c.name)
                for c in category.candidates
            ],
        )


class GeofenceModel(BaseModel):
    center_lat: float
    center_lng: float
    radius_meters: float = Field(..., ge=0)
    enabled: bool = True
    off_campus_allowed: bool = False

    def to_domain(self) -> Geofence:
        return Geofence(**self.model_dump())


class CreateSessionRequest(BaseModel):
    """Request to register a voting session.

    Attributes:
        session_id: Stable identifier chosen by the administrator.
        start_time: Inclusive window start; must carry a UTC offset.
        end_time: Exclusive window end; must carry a UTC offset.
    """

    session_id: str = Field(..., min_length=1, max_length=128)
    title: str = Field(..., min_length=1)
    start_time: datetime
    end_time: datetime
    geofence: GeofenceModel
    eligibility: EligibilitySpecModel = Field(default_factory=EligibilitySpecModel)
    categories: list[CategoryModel] = Field(default_factory=list)
    results_public: bool = False

    def to_domain(self) -> VotingSession:
        return VotingSession(
            session_id=self.session_id,
            title=self.title,
            start_time=self.start_time,
            end_time=self.end_time,
            geofence=self.geofence.to_domain(),
            eligibility=self.eligibility.to_domain(),
            categories=tuple(c.to_domain() for c in self.categories),
            results_public=self.results_public,
        )


class UpdateSessionRequest(BaseModel):
    """Partial session edit. Omitted fields keep their stored value."""

    title: str | None = Field(default=None, min_length=1)
    start_time: datetime | None = None
    end_time: datetime | None = None
    geofence: GeofenceModel | None = None
    categories: list[CategoryModel] | None = None
    results_public: bool | None = None


class SessionDetailResponse(BaseModel):
    """A stored session and its status at request time."""

    session_id: str
    title: str
    status: SessionStatus
    start_time: DateTimeWithZ
    end_time: DateTimeWithZ
    geofence: GeofenceModel
    eligibility: EligibilitySpecModel
    categories: list[CategoryModel]
    results_public: bool
    cancelled: bool

    @classmethod
    def from_domain(
        cls, session: VotingSession, now: datetime
    ) -> "SessionDetailResponse":
        return cls(
            session_id=session.session_id,
            title=session.title,
            status=session.status(now),
            start_time=session.start_time,
            end_time=session.end_time,
            geofence=GeofenceModel(**session.geofence.to_dict()),
            eligibility=EligibilitySpecModel(**session.eligibility.to_dict()),
            categories=[CategoryModel.from_domain(c) for c in session.categories],
            results_public=session.results_public,
            cancelled=session.cancelled,
        )


class PaginationModel(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class SessionListResponse(BaseModel):
    sessions: list[SessionDetailResponse]
    pagination: PaginationModel