"""API test fixtures: a TestClient over stub collaborators."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from campus_ballot.api.main import app
from campus_ballot.bootstrap import ballot
from campus_ballot.config.engine_config import TEST_ENGINE_CONFIG
from campus_ballot.domain.models.org_unit import OrgUnitDirectory
from campus_ballot.infrastructure.stubs import (
    OrgUnitDirectoryStub,
    VoteRecordRepositoryStub,
    VoterDirectoryStub,
    VotingSessionRepositoryStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def client(
    session_repository: VotingSessionRepositoryStub,
    vote_records: VoteRecordRepositoryStub,
    voter_directory: VoterDirectoryStub,
    directory: OrgUnitDirectory,
    fake_time: FakeTimeAuthority,
) -> TestClient:
    """Client without lifespan, so no development seed data is loaded."""
    ballot.set_engine_config(TEST_ENGINE_CONFIG)
    ballot.set_session_repository(session_repository)
    ballot.set_vote_record_repository(vote_records)
    ballot.set_voter_directory(voter_directory)
    ballot.set_org_unit_directory(OrgUnitDirectoryStub(directory))
    ballot.set_time_authority(fake_time)
    return TestClient(app)
