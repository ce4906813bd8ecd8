"""Session administration API routes.

Register, list, inspect and edit voting sessions. Authentication and
authorization are enforced upstream of this service; these routes assume
an already-authorized administrator.

Error mapping (RFC 7807 bodies):
- 404: unknown session id
- 409: window, geofence or ballot edit after the session opened
- 422: invalid session configuration
- 503: session store unavailable, with Retry-After
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from campus_ballot.api.dependencies.ballot import (
    get_session_admin_service,
    get_time_authority,
)
from campus_ballot.api.models.admin import (
    CreateSessionRequest,
    PaginationModel,
    SessionDetailResponse,
    SessionListResponse,
    UpdateSessionRequest,
)
from campus_ballot.api.models.eligibility import EligibilitySpecModel
from campus_ballot.application.ports.time_authority import TimeAuthorityProtocol
from campus_ballot.application.services.session_admin_service import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    SessionAdminService,
)
from campus_ballot.domain.errors import (
    SessionConfigurationError,
    SessionNotEditableError,
    SessionNotFoundError,
    TransientInfrastructureError,
)

router = APIRouter(prefix="/v1/admin/sessions", tags=["admin"])

_HANDLED = (
    SessionConfigurationError,
    SessionNotEditableError,
    SessionNotFoundError,
    TransientInfrastructureError,
)


def _problem(error: Exception, request: Request) -> HTTPException:
    detail = {**error.to_rfc7807_dict(), "instance": str(request.url)}
    headers = None
    if isinstance(error, TransientInfrastructureError):
        headers = {"Retry-After": str(error.retry_after)}
    return HTTPException(status_code=detail["status"], detail=detail, headers=headers)


@router.get(
    "",
    response_model=SessionListResponse,
    summary="List sessions, newest first",
)
async def list_sessions(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    service: SessionAdminService = Depends(get_session_admin_service),
    time_authority: TimeAuthorityProtocol = Depends(get_time_authority),
) -> SessionListResponse:
    try:
        result = await service.list_sessions(page=page, limit=limit)
    except TransientInfrastructureError as e:
        raise _problem(e, request) from None

    now = time_authority.now()
    return SessionListResponse(
        sessions=[SessionDetailResponse.from_domain(s, now) for s in result.sessions],
        pagination=PaginationModel(
            total=result.total,
            page=result.page,
            limit=result.limit,
            pages=result.pages,
        ),
    )


@router.post(
    "",
    response_model=SessionDetailResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"description": "Invalid session configuration"},
        503: {"description": "Session store unavailable"},
    },
    summary="Register a voting session",
)
async def register_session(
    request_data: CreateSessionRequest,
    request: Request,
    service: SessionAdminService = Depends(get_session_admin_service),
    time_authority: TimeAuthorityProtocol = Depends(get_time_authority),
) -> SessionDetailResponse:
    """Create or replace a session.

    A naive start or end time is rejected: the window must be anchored
    to an explicit UTC offset.
    """
    try:
        session = await service.register_session(request_data.to_domain())
    except _HANDLED as e:
        raise _problem(e, request) from None
    return SessionDetailResponse.from_domain(session, time_authority.now())


@router.get(
    "/{session_id}",
    response_model=SessionDetailResponse,
    responses={404: {"description": "Session not found"}},
    summary="Get one session",
)
async def get_session(
    session_id: str,
    request: Request,
    service: SessionAdminService = Depends(get_session_admin_service),
    time_authority: TimeAuthorityProtocol = Depends(get_time_authority),
) -> SessionDetailResponse:
    try:
        session = await service.get_session(session_id)
    except _HANDLED as e:
        raise _problem(e, request) from None
    return SessionDetailResponse.from_domain(session, time_authority.now())


@router.patch(
    "/{session_id}",
    response_model=SessionDetailResponse,
    responses={
        404: {"description": "Session not found"},
        409: {"description": "Session already opened"},
        422: {"description": "Invalid session configuration"},
    },
    summary="Edit a session",
)
async def update_session(
    session_id: str,
    request_data: UpdateSessionRequest,
    request: Request,
    service: SessionAdminService = Depends(get_session_admin_service),
    time_authority: TimeAuthorityProtocol = Depends(get_time_authority),
) -> SessionDetailResponse:
    try:
        session = await service.update_session(
            session_id,
            title=request_data.title,
            start_time=request_data.start_time,
            end_time=request_data.end_time,
            geofence=(
                request_data.geofence.to_domain() if request_data.geofence else None
            ),
            categories=(
                [c.to_domain() for c in request_data.categories]
                if request_data.categories is not None
                else None
            ),
            results_public=request_data.results_public,
        )
    except _HANDLED as e:
        raise _problem(e, request) from None
    return SessionDetailResponse.from_domain(session, time_authority.now())


@router.put(
    "/{session_id}/eligibility",
    response_model=SessionDetailResponse,
    responses={
        404: {"description": "Session not found"},
        422: {"description": "Unknown department"},
    },
    summary="Replace a session's eligibility spec",
)
async def update_eligibility(
    session_id: str,
    request_data: EligibilitySpecModel,
    request: Request,
    service: SessionAdminService = Depends(get_session_admin_service),
    time_authority: TimeAuthorityProtocol = Depends(get_time_authority),
) -> SessionDetailResponse:
    """Votes already accepted stay accepted under the new spec."""
    try:
        session = await service.update_eligibility(session_id, request_data.to_domain())
    except _HANDLED as e:
        raise _problem(e, request) from None
    return SessionDetailResponse.from_domain(session, time_authority.now())


@router.post(
    "/{session_id}/cancel",
    response_model=SessionDetailResponse,
    responses={404: {"description": "Session not found"}},
    summary="Cancel a session",
)
async def cancel_session(
    session_id: str,
    request: Request,
    service: SessionAdminService = Depends(get_session_admin_service),
    time_authority: TimeAuthorityProtocol = Depends(get_time_authority),
) -> SessionDetailResponse:
    try:
        session = await service.cancel_session(session_id)
    except _HANDLED as e:
        raise _problem(e, request) from None
    return SessionDetailResponse.from_domain(session, time_authority.now())
