"""
Pytest configuration and shared fixtures for campus-ballot tests.

Testing Standards:
- All async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from campus_ballot.application.services.turnout_aggregation_service import (
    TurnoutAggregationService,
)
from campus_ballot.application.services.vote_admission_service import (
    VoteAdmissionService,
)
from campus_ballot.domain.models.org_unit import OrgUnitDirectory
from campus_ballot.domain.models.voting_session import VotingSession
from campus_ballot.infrastructure.stubs import (
    VoteRecordRepositoryStub,
    VoterDirectoryStub,
    VotingSessionRepositoryStub,
)
from tests.helpers.factories import build_directory, build_session, build_voters
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from campus_ballot import __version__

    return __version__


@pytest.fixture(autouse=True)
def _reset_singletons() -> Iterator[None]:
    """Drop bootstrap and metrics singletons around every test."""
    from campus_ballot.bootstrap.ballot import reset_ballot_dependencies
    from campus_ballot.infrastructure.monitoring.vote_metrics import (
        reset_vote_metrics_collector,
    )

    reset_ballot_dependencies()
    reset_vote_metrics_collector()
    yield
    reset_ballot_dependencies()
    reset_vote_metrics_collector()


@pytest.fixture
def fake_time() -> FakeTimeAuthority:
    return FakeTimeAuthority()


@pytest.fixture
def directory() -> OrgUnitDirectory:
    return build_directory()


@pytest.fixture
def session(fake_time: FakeTimeAuthority) -> VotingSession:
    """Active session for CS/EEE levels 200 and 300."""
    return build_session(fake_time.now())


@pytest.fixture
def session_repository(session: VotingSession) -> VotingSessionRepositoryStub:
    return VotingSessionRepositoryStub([session])


@pytest.fixture
def vote_records() -> VoteRecordRepositoryStub:
    return VoteRecordRepositoryStub()


@pytest.fixture
def voter_directory() -> VoterDirectoryStub:
    return VoterDirectoryStub(build_voters())


@pytest.fixture
def admission_service(
    session_repository: VotingSessionRepositoryStub,
    vote_records: VoteRecordRepositoryStub,
    voter_directory: VoterDirectoryStub,
    fake_time: FakeTimeAuthority,
) -> VoteAdmissionService:
    return VoteAdmissionService(
        session_repository=session_repository,
        vote_record_repository=vote_records,
        voter_directory=voter_directory,
        time_authority=fake_time,
    )


@pytest.fixture
def turnout_service(
    session_repository: VotingSessionRepositoryStub,
    vote_records: VoteRecordRepositoryStub,
    voter_directory: VoterDirectoryStub,
    fake_time: FakeTimeAuthority,
) -> TurnoutAggregationService:
    return TurnoutAggregationService(
        session_repository=session_repository,
        vote_record_repository=vote_records,
        voter_directory=voter_directory,
        time_authority=fake_time,
    )
