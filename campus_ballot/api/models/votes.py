"""Vote casting request/response models.

Business rejections are successful HTTP exchanges: the response carries
``accepted: false`` and the rejection reason.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

from campus_ballot.domain.models.vote_record import RejectionKind

# Custom datetime serializer for ISO 8601 with Z suffix (Pydantic v2)
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class ReportedLocation(BaseModel):
    """Device location as reported by the client.

    Range is not validated here: an out-of-range report is a vote
    outcome (invalid_geofence_config), not a malformed request.
    """

    lat: float = Field(..., description="Latitude in degrees")
    lng: float = Field(..., description="Longitude in degrees")


class CastVoteRequest(BaseModel):
    """Request to cast a vote in one category.

    Attributes:
        voter_id: Authenticated voter identifier.
        category: Ballot category name.
        candidate_ids: Chosen candidates; one for single-select categories.
        location: Device location, required when the session is geofenced.
        request_id: Client retry token for idempotent replay.
    """

    voter_id: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    candidate_ids: list[str] = Field(..., min_length=1)
    location: ReportedLocation | None = None
    request_id: str | None = Field(default=None, max_length=128)


class CastVoteResponse(BaseModel):
    """Outcome of a vote-cast attempt.

    Attributes:
        accepted: Whether the vote was admitted.
        reason: Rejection reason when not accepted.
        replayed: True when a retry re-resolved to the original acceptance.
        record_id: Id of the accepted record.
        committed_at: When the accepted record was committed.
        distance_meters: Distance from the geofence center, if measured.
    """

    accepted: bool
    reason: RejectionKind | None = None
    replayed: bool = False
    record_id: UUID | None = None
    committed_at: DateTimeWithZ | None = None
    distance_meters: float | None = None
