"""Session statistics and results response models."""

from pydantic import BaseModel, Field


class SessionHeader(BaseModel):
    session_id: str
    title: str
    status: str = Field(..., description="upcoming, active, ended or cancelled")


class CandidateTallyResponse(BaseModel):
    candidate_id: str
    name: str
    vote_count: int
    percentage: str = Field(..., description="Share of the category's votes, two decimals")


class CategoryTallyResponse(BaseModel):
    category: str
    total_votes: int
    candidates: list[CandidateTallyResponse]


class SessionStatsResponse(BaseModel):
    """Turnout statistics for a session.

    Percentages are strings with exactly two decimals.
    """

    session: SessionHeader
    eligible_students: int
    total_votes: int
    unique_voters: int
    duplicate_attempts: int
    rejected_votes: int
    turnout_percentage: str
    rejections_by_reason: dict[str, int]
    categories: list[CategoryTallyResponse]


class SessionResultsResponse(BaseModel):
    """Published results of an ended session."""

    session_id: str
    title: str
    total_ballots: int
    categories: list[CategoryTallyResponse]
