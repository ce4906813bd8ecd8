"""Unit tests for SessionAdminService."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from campus_ballot.application.services.session_admin_service import (
    SessionAdminService,
)
from campus_ballot.config.engine_config import (
    DEFAULT_ENGINE_CONFIG,
    TEST_ENGINE_CONFIG,
)
from campus_ballot.domain.errors import (
    InvalidCategoryError,
    InvalidGeofenceError,
    InvalidTimeWindowError,
    SessionNotEditableError,
    SessionNotFoundError,
    UnknownDepartmentError,
)
from campus_ballot.domain.models.eligibility import EligibilitySpec
from campus_ballot.domain.models.geofence import Geofence
from campus_ballot.domain.models.org_unit import OrgUnitDirectory
from campus_ballot.domain.models.voting_session import (
    Candidate,
    Category,
    VotingSession,
)
from campus_ballot.infrastructure.stubs import (
    OrgUnitDirectoryStub,
    VotingSessionRepositoryStub,
)
from tests.helpers import FakeTimeAuthority
from tests.helpers.factories import SESSION_ID, build_session, campus_geofence

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def sessions() -> VotingSessionRepositoryStub:
    return VotingSessionRepositoryStub()


@pytest.fixture
def admin(
    sessions: VotingSessionRepositoryStub,
    directory: OrgUnitDirectory,
    fake_time: FakeTimeAuthority,
) -> SessionAdminService:
    return SessionAdminService(
        sessions, OrgUnitDirectoryStub(directory), TEST_ENGINE_CONFIG, fake_time
    )


def _upcoming(**overrides) -> VotingSession:
    """A session that opens in one day."""
    return build_session(NOW + timedelta(days=1, hours=1), **overrides)


class TestRegisterSession:
    """Tests for register_session."""

    async def test_registers_valid_session(
        self, admin: SessionAdminService, sessions: VotingSessionRepositoryStub
    ) -> None:
        session = build_session(NOW)

        await admin.register_session(session)

        assert await sessions.get(SESSION_ID) == session
        assert await sessions.count() == 1

    async def test_unknown_department_is_rejected(
        self, admin: SessionAdminService, sessions: VotingSessionRepositoryStub
    ) -> None:
        session = build_session(
            NOW, eligibility=EligibilitySpec(frozenset({"CS", "BIO"}), frozenset({"100"}))
        )

        with pytest.raises(UnknownDepartmentError) as exc_info:
            await admin.register_session(session)

        assert exc_info.value.department_ids == ["BIO"]
        assert await sessions.get(SESSION_ID) is None

    async def test_radius_below_minimum(
        self, sessions: VotingSessionRepositoryStub, directory: OrgUnitDirectory
    ) -> None:
        """The default config requires at least 500 m for an enforced geofence."""
        admin = SessionAdminService(
            sessions, OrgUnitDirectoryStub(directory), DEFAULT_ENGINE_CONFIG
        )

        with pytest.raises(InvalidGeofenceError, match="below the minimum"):
            await admin.register_session(build_session(NOW))

    async def test_minimum_ignored_for_disabled_geofence(
        self, sessions: VotingSessionRepositoryStub, directory: OrgUnitDirectory
    ) -> None:
        admin = SessionAdminService(
            sessions, OrgUnitDirectoryStub(directory), DEFAULT_ENGINE_CONFIG
        )

        await admin.register_session(build_session(NOW, geofence=Geofence.disabled()))

        assert await sessions.get(SESSION_ID) is not None

    async def test_minimum_ignored_when_off_campus_allowed(
        self, sessions: VotingSessionRepositoryStub, directory: OrgUnitDirectory
    ) -> None:
        admin = SessionAdminService(
            sessions, OrgUnitDirectoryStub(directory), DEFAULT_ENGINE_CONFIG
        )

        await admin.register_session(
            build_session(NOW, geofence=campus_geofence(off_campus_allowed=True))
        )

        assert await sessions.get(SESSION_ID) is not None


class TestUpdateEligibility:
    async def test_replaces_spec(
        self, admin: SessionAdminService, sessions: VotingSessionRepositoryStub
    ) -> None:
        await admin.register_session(build_session(NOW))
        spec = EligibilitySpec(frozenset({"MTH"}), frozenset({"100"}))

        updated = await admin.update_eligibility(SESSION_ID, spec)

        assert updated.eligibility == spec
        assert (await sessions.get(SESSION_ID)).eligibility == spec

    async def test_unknown_department(self, admin: SessionAdminService) -> None:
        await admin.register_session(build_session(NOW))

        with pytest.raises(UnknownDepartmentError):
            await admin.update_eligibility(
                SESSION_ID, EligibilitySpec(frozenset({"LAW"}), frozenset())
            )

    async def test_unknown_session(self, admin: SessionAdminService) -> None:
        with pytest.raises(SessionNotFoundError):
            await admin.update_eligibility("missing", EligibilitySpec())


class TestCancelSession:
    async def test_cancel(
        self, admin: SessionAdminService, sessions: VotingSessionRepositoryStub
    ) -> None:
        await admin.register_session(build_session(NOW))

        cancelled = await admin.cancel_session(SESSION_ID)

        assert cancelled.cancelled
        assert not (await sessions.get(SESSION_ID)).accepts_votes(NOW)

    async def test_cancel_is_idempotent(self, admin: SessionAdminService) -> None:
        await admin.register_session(build_session(NOW))

        first = await admin.cancel_session(SESSION_ID)
        second = await admin.cancel_session(SESSION_ID)

        assert first == second

    async def test_unknown_session(self, admin: SessionAdminService) -> None:
        with pytest.raises(SessionNotFoundError):
            await admin.cancel_session("missing")


class TestListSessions:
    """Tests for paginated listing."""

    async def test_newest_first_with_pagination(self, admin: SessionAdminService) -> None:
        for day in range(5):
            await admin.register_session(
                build_session(NOW + timedelta(days=day), session_id=f"s{day}")
            )

        first = await admin.list_sessions(page=1, limit=2)
        last = await admin.list_sessions(page=3, limit=2)

        assert [s.session_id for s in first.sessions] == ["s4", "s3"]
        assert first.total == 5
        assert first.pages == 3
        assert [s.session_id for s in last.sessions] == ["s0"]

    async def test_page_past_the_end_is_empty(self, admin: SessionAdminService) -> None:
        await admin.register_session(build_session(NOW))

        page = await admin.list_sessions(page=2, limit=20)

        assert page.sessions == ()
        assert page.total == 1

    async def test_empty_listing(self, admin: SessionAdminService) -> None:
        page = await admin.list_sessions()

        assert page.total == 0
        assert page.pages == 0

    @pytest.mark.parametrize(("page", "limit"), [(0, 20), (1, 0), (1, 101)])
    async def test_invalid_paging(
        self, admin: SessionAdminService, page: int, limit: int
    ) -> None:
        with pytest.raises(ValueError):
            await admin.list_sessions(page=page, limit=limit)


class TestUpdateSession:
    """Tests for partial edits of window, geofence, ballot and publication."""

    async def test_edit_upcoming_window_and_geofence(
        self, admin: SessionAdminService, sessions: VotingSessionRepositoryStub
    ) -> None:
        await admin.register_session(_upcoming())
        start = NOW + timedelta(days=2)

        updated = await admin.update_session(
            SESSION_ID,
            start_time=start,
            end_time=start + timedelta(hours=6),
            geofence=campus_geofence(radius_meters=350.0),
        )

        assert updated.start_time == start
        assert updated.geofence.radius_meters == 350.0
        assert await sessions.get(SESSION_ID) == updated

    async def test_edit_categories(self, admin: SessionAdminService) -> None:
        await admin.register_session(_upcoming())
        secretary = Category(
            name="Secretary",
            candidates=(Candidate("sec-1", "Ada", "Secretary"),),
        )

        updated = await admin.update_session(SESSION_ID, categories=[secretary])

        assert updated.categories == (secretary,)

    async def test_inverted_window_is_rejected(
        self, admin: SessionAdminService, sessions: VotingSessionRepositoryStub
    ) -> None:
        original = await admin.register_session(_upcoming())

        with pytest.raises(InvalidTimeWindowError):
            await admin.update_session(SESSION_ID, end_time=original.start_time)

        assert await sessions.get(SESSION_ID) == original

    async def test_duplicate_candidate_is_rejected(
        self, admin: SessionAdminService
    ) -> None:
        await admin.register_session(_upcoming())
        first = Category("A", candidates=(Candidate("x", "X", "A"),))
        second = Category("B", candidates=(Candidate("x", "X", "B"),))

        with pytest.raises(InvalidCategoryError):
            await admin.update_session(SESSION_ID, categories=[first, second])

    async def test_radius_policy_applies_to_edits(
        self, sessions: VotingSessionRepositoryStub, directory: OrgUnitDirectory
    ) -> None:
        admin = SessionAdminService(
            sessions,
            OrgUnitDirectoryStub(directory),
            DEFAULT_ENGINE_CONFIG,
            FakeTimeAuthority(),
        )
        await admin.register_session(_upcoming(geofence=campus_geofence(radius_meters=800.0)))

        with pytest.raises(InvalidGeofenceError, match="below the minimum"):
            await admin.update_session(
                SESSION_ID, geofence=campus_geofence(radius_meters=100.0)
            )

    async def test_active_session_window_is_locked(
        self, admin: SessionAdminService
    ) -> None:
        """build_session(NOW) is active at NOW."""
        await admin.register_session(build_session(NOW))

        with pytest.raises(SessionNotEditableError) as exc_info:
            await admin.update_session(
                SESSION_ID, end_time=NOW + timedelta(hours=3)
            )

        assert exc_info.value.status == "active"
        assert exc_info.value.to_rfc7807_dict()["status"] == 409

    async def test_cancelled_session_ballot_is_locked(
        self, admin: SessionAdminService
    ) -> None:
        await admin.register_session(_upcoming())
        await admin.cancel_session(SESSION_ID)

        with pytest.raises(SessionNotEditableError):
            await admin.update_session(SESSION_ID, geofence=Geofence.disabled())

    async def test_title_and_publication_editable_after_end(
        self, admin: SessionAdminService, fake_time: FakeTimeAuthority
    ) -> None:
        await admin.register_session(build_session(NOW))
        fake_time.advance(delta=timedelta(hours=2))

        updated = await admin.update_session(
            SESSION_ID, title="SUG 2026 (final)", results_public=True
        )

        assert updated.title == "SUG 2026 (final)"
        assert updated.results_public

    async def test_empty_edit_returns_stored_session(
        self, admin: SessionAdminService
    ) -> None:
        original = await admin.register_session(build_session(NOW))

        assert await admin.update_session(SESSION_ID) == original

    async def test_unknown_session(self, admin: SessionAdminService) -> None:
        with pytest.raises(SessionNotFoundError):
            await admin.update_session("missing", title="x")
