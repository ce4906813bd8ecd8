"""Session administration service.

Registers, lists and edits sessions. Time window, category and geofence
shape invariants are enforced by the model constructors, which also run
on every ``dataclasses.replace``; this service adds the checks that need
collaborators: eligibility references against the org-unit directory,
the minimum geofence radius policy from EngineConfig, and the session
status from the time authority.

Edits are not retroactive. Votes already accepted stay accepted when the
eligibility spec changes or the session is cancelled. The window, the
geofence and the ballot can only change while the session is upcoming.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from structlog import get_logger

from campus_ballot.application.services.time_authority_service import (
    SystemTimeAuthority,
)
from campus_ballot.config.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from campus_ballot.domain.errors import (
    InvalidGeofenceError,
    SessionNotEditableError,
    SessionNotFoundError,
    UnknownDepartmentError,
)
from campus_ballot.domain.models.eligibility import EligibilitySpec
from campus_ballot.domain.models.geofence import Geofence
from campus_ballot.domain.models.voting_session import (
    Category,
    SessionPage,
    SessionStatus,
    VotingSession,
)

if TYPE_CHECKING:
    from campus_ballot.application.ports.org_unit_directory import (
        OrgUnitDirectoryProtocol,
    )
    from campus_ballot.application.ports.session_repository import (
        VotingSessionRepositoryProtocol,
    )
    from campus_ballot.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Fields that reshape the ballot or who can reach it
_UPCOMING_ONLY_FIELDS = frozenset({"start_time", "end_time", "geofence", "categories"})


class SessionAdminService:
    """Administrative operations on voting sessions."""

    def __init__(
        self,
        session_repository: VotingSessionRepositoryProtocol,
        org_unit_directory: OrgUnitDirectoryProtocol,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        time_authority: TimeAuthorityProtocol | None = None,
    ) -> None:
        self._sessions = session_repository
        self._org_units = org_unit_directory
        self._config = config
        self._time = time_authority or SystemTimeAuthority()

    async def register_session(self, session: VotingSession) -> VotingSession:
        """Validate and store a new or replacement session.

        Raises:
            UnknownDepartmentError: The eligibility spec names departments
                the directory does not know.
            InvalidGeofenceError: The radius is below the configured minimum.
        """
        await self._validate_eligibility(session.eligibility)
        self._validate_radius(session.geofence)

        await self._sessions.save(session)
        logger.info(
            "session_registered",
            session_id=session.session_id,
            start_time=session.start_time.isoformat(),
            end_time=session.end_time.isoformat(),
            departments=len(session.eligibility.department_ids),
            categories=len(session.categories),
        )
        return session

    async def get_session(self, session_id: str) -> VotingSession:
        """Raises SessionNotFoundError for unknown ids."""
        return await self._get(session_id)

    async def list_sessions(
        self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> SessionPage:
        """Return one page of sessions, newest start_time first.

        Raises:
            ValueError: page < 1, or limit outside 1..MAX_PAGE_SIZE.
        """
        if page < 1:
            raise ValueError(f"page must be at least 1, got {page}")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}, got {limit}")

        total = await self._sessions.count()
        sessions = await self._sessions.list_sessions((page - 1) * limit, limit)
        return SessionPage(sessions=tuple(sessions), total=total, page=page, limit=limit)

    async def update_session(
        self,
        session_id: str,
        *,
        title: str | None = None,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        geofence: Geofence | None = None,
        categories: Sequence[Category] | None = None,
        results_public: bool | None = None,
    ) -> VotingSession:
        """Apply a partial edit. Fields left as None keep their value.

        Title and result publication can change at any time. The window,
        the geofence and the categories can change only while the session
        is upcoming and not cancelled.

        Raises:
            SessionNotFoundError: The session does not exist.
            SessionNotEditableError: A window, geofence or category edit on a
                session that is active, ended or cancelled.
            InvalidTimeWindowError: The resulting window is empty or inverted.
            InvalidCategoryError: The resulting categories are malformed.
            InvalidGeofenceError: The radius is below the configured minimum.
        """
        session = await self._get(session_id)

        changes: dict[str, Any] = {
            name: value
            for name, value in (
                ("title", title),
                ("start_time", start_time),
                ("end_time", end_time),
                ("geofence", geofence),
                ("categories", tuple(categories) if categories is not None else None),
                ("results_public", results_public),
            )
            if value is not None
        }
        if not changes:
            return session

        if _UPCOMING_ONLY_FIELDS & changes.keys():
            status = session.status(self._time.now())
            if status != SessionStatus.UPCOMING:
                raise SessionNotEditableError(session_id, status.value)

        updated = replace(session, **changes)
        if geofence is not None:
            self._validate_radius(updated.geofence)

        await self._sessions.save(updated)
        logger.info(
            "session_updated",
            session_id=session_id,
            fields=sorted(changes),
        )
        return updated

    async def update_eligibility(
        self, session_id: str, spec: EligibilitySpec
    ) -> VotingSession:
        """Replace a session's eligibility spec.

        Raises:
            SessionNotFoundError: The session does not exist.
            UnknownDepartmentError: The spec names unknown departments.
        """
        session = await self._get(session_id)
        await self._validate_eligibility(spec)

        updated = replace(session, eligibility=spec)
        await self._sessions.save(updated)
        logger.info(
            "session_eligibility_updated",
            session_id=session_id,
            departments=len(spec.department_ids),
            levels=len(spec.levels),
        )
        return updated

    async def cancel_session(self, session_id: str) -> VotingSession:
        """Mark a session cancelled. Idempotent.

        Raises:
            SessionNotFoundError: The session does not exist.
        """
        session = await self._get(session_id)
        if session.cancelled:
            return session

        updated = replace(session, cancelled=True)
        await self._sessions.save(updated)
        logger.warning("session_cancelled", session_id=session_id)
        return updated

    async def _get(self, session_id: str) -> VotingSession:
        session = await self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def _validate_eligibility(self, spec: EligibilitySpec) -> None:
        directory = await self._org_units.get_directory()
        unknown = directory.unknown_departments(spec.department_ids)
        if unknown:
            raise UnknownDepartmentError(unknown)

    def _validate_radius(self, geofence: Geofence) -> None:
        if not (self._config.enforce_min_radius and geofence.is_enforced):
            return
        if geofence.radius_meters < self._config.min_geofence_radius_meters:
            raise InvalidGeofenceError(
                f"Geofence radius {geofence.radius_meters} m is below the "
                f"minimum of {self._config.min_geofence_radius_meters} m"
            )
