"""Session statistics and results API routes."""

from fastapi import APIRouter, Depends, HTTPException, Request

from campus_ballot.api.dependencies.ballot import get_turnout_service
from campus_ballot.api.models.sessions import (
    SessionResultsResponse,
    SessionStatsResponse,
)
from campus_ballot.application.services.turnout_aggregation_service import (
    TurnoutAggregationService,
)
from campus_ballot.domain.errors import (
    ResultsNotPublishedError,
    SessionNotFoundError,
    TransientInfrastructureError,
)

router = APIRouter(prefix="/v1/sessions", tags=["sessions"])


def _problem(status_code: int, error: Exception, request: Request) -> HTTPException:
    headers = None
    if isinstance(error, TransientInfrastructureError):
        headers = {"Retry-After": str(error.retry_after)}
    return HTTPException(
        status_code=status_code,
        detail={**error.to_rfc7807_dict(), "instance": str(request.url)},
        headers=headers,
    )


@router.get(
    "/{session_id}/stats",
    response_model=SessionStatsResponse,
    responses={
        404: {"description": "Session not found"},
        503: {"description": "Vote store unavailable"},
    },
    summary="Session turnout statistics",
)
async def get_session_stats(
    session_id: str,
    request: Request,
    service: TurnoutAggregationService = Depends(get_turnout_service),
) -> SessionStatsResponse:
    """Return turnout statistics, recomputed on every call."""
    try:
        stats = await service.get_session_stats(session_id)
    except SessionNotFoundError as e:
        raise _problem(404, e, request) from None
    except TransientInfrastructureError as e:
        raise _problem(503, e, request) from None
    return SessionStatsResponse.model_validate(stats.to_dict())


@router.get(
    "/{session_id}/results",
    response_model=SessionResultsResponse,
    responses={
        403: {"description": "Results not yet published"},
        404: {"description": "Session not found"},
        503: {"description": "Vote store unavailable"},
    },
    summary="Published session results",
)
async def get_session_results(
    session_id: str,
    request: Request,
    service: TurnoutAggregationService = Depends(get_turnout_service),
) -> SessionResultsResponse:
    """Return per-category results once the session has ended and results are public."""
    try:
        results = await service.get_public_results(session_id)
    except SessionNotFoundError as e:
        raise _problem(404, e, request) from None
    except ResultsNotPublishedError as e:
        raise _problem(403, e, request) from None
    except TransientInfrastructureError as e:
        raise _problem(503, e, request) from None
    return SessionResultsResponse.model_validate(results.to_dict())
