"""Vote casting API routes.

Rejections (not eligible, duplicate, out of range, ...) are business
outcomes and return 200 with ``accepted: false``. Only collaborator
failures produce an error status: 503 with Retry-After, safe to retry
with the same request_id.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from campus_ballot.api.dependencies.ballot import get_vote_admission_service
from campus_ballot.api.models.votes import CastVoteRequest, CastVoteResponse
from campus_ballot.application.services.vote_admission_service import (
    VoteAdmissionService,
)
from campus_ballot.domain.errors import TransientInfrastructureError
from campus_ballot.domain.models.geofence import GeoPoint

router = APIRouter(prefix="/v1/sessions", tags=["votes"])


@router.post(
    "/{session_id}/votes",
    response_model=CastVoteResponse,
    status_code=200,
    responses={
        503: {"description": "Vote store or identity service unavailable; retry"},
    },
    summary="Cast a vote",
    description=(
        "Submit a ballot for one category of a voting session. The response "
        "states whether the vote was admitted and, if not, why."
    ),
)
async def cast_vote(
    session_id: str,
    request_data: CastVoteRequest,
    request: Request,
    service: VoteAdmissionService = Depends(get_vote_admission_service),
) -> CastVoteResponse:
    """Cast a vote.

    Args:
        session_id: Target voting session.
        request_data: Voter, category, candidates, location, retry token.
        request: FastAPI request for error context.
        service: Injected vote admission service.

    Raises:
        HTTPException 503: A collaborator failed; nothing was committed.
    """
    location = (
        GeoPoint(lat=request_data.location.lat, lng=request_data.location.lng)
        if request_data.location is not None
        else None
    )
    try:
        outcome = await service.cast_vote(
            voter_id=request_data.voter_id,
            session_id=session_id,
            category=request_data.category,
            candidate_ids=request_data.candidate_ids,
            reported_location=location,
            request_id=request_data.request_id,
        )
    except TransientInfrastructureError as e:
        raise HTTPException(
            status_code=503,
            detail={**e.to_rfc7807_dict(), "instance": str(request.url)},
            headers={"Retry-After": str(e.retry_after)},
        ) from None

    record = outcome.record
    return CastVoteResponse(
        accepted=outcome.accepted,
        reason=outcome.reason,
        replayed=outcome.replayed,
        record_id=record.record_id if record else None,
        committed_at=record.committed_at if record else None,
        distance_meters=outcome.distance_meters,
    )
