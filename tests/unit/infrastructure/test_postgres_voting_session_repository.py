"""Unit tests for PostgresVotingSessionRepository with a mocked session factory."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from campus_ballot.domain.errors import SessionStoreUnavailableError
from campus_ballot.domain.models.voting_session import VotingSession
from campus_ballot.infrastructure.adapters.persistence.voting_session_repository import (
    PostgresVotingSessionRepository,
)
from tests.helpers.factories import build_session

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def session_factory(db_session: AsyncMock) -> MagicMock:
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = db_session
    factory.begin.return_value.__aenter__.return_value = db_session
    return factory


@pytest.fixture
def repository(session_factory: MagicMock) -> PostgresVotingSessionRepository:
    return PostgresVotingSessionRepository(session_factory)


@pytest.fixture
def voting_session() -> VotingSession:
    return build_session(NOW)


class TestSave:
    async def test_upsert_carries_columns_and_document(
        self,
        repository: PostgresVotingSessionRepository,
        session_factory: MagicMock,
        db_session: AsyncMock,
        voting_session: VotingSession,
    ) -> None:
        await repository.save(voting_session)

        session_factory.begin.assert_called_once()
        params = db_session.execute.await_args.args[1]
        assert params["session_id"] == voting_session.session_id
        assert params["start_time"] == voting_session.start_time
        assert params["cancelled"] is False
        assert json.loads(params["document"]) == voting_session.to_dict()

    async def test_failure_is_store_unavailable(
        self,
        repository: PostgresVotingSessionRepository,
        db_session: AsyncMock,
        voting_session: VotingSession,
    ) -> None:
        db_session.execute.side_effect = OperationalError("INSERT", {}, Exception("down"))

        with pytest.raises(SessionStoreUnavailableError):
            await repository.save(voting_session)


class TestRead:
    async def test_get_decodes_text_document(
        self,
        repository: PostgresVotingSessionRepository,
        db_session: AsyncMock,
        voting_session: VotingSession,
    ) -> None:
        """asyncpg without a JSONB codec returns the document as text."""
        result = MagicMock()
        result.scalar.return_value = json.dumps(voting_session.to_dict())
        db_session.execute.return_value = result

        assert await repository.get(voting_session.session_id) == voting_session

    async def test_get_accepts_decoded_document(
        self,
        repository: PostgresVotingSessionRepository,
        db_session: AsyncMock,
        voting_session: VotingSession,
    ) -> None:
        result = MagicMock()
        result.scalar.return_value = voting_session.to_dict()
        db_session.execute.return_value = result

        assert await repository.get(voting_session.session_id) == voting_session

    async def test_get_missing(
        self, repository: PostgresVotingSessionRepository, db_session: AsyncMock
    ) -> None:
        result = MagicMock()
        result.scalar.return_value = None
        db_session.execute.return_value = result

        assert await repository.get("missing") is None

    async def test_list_sessions_passes_paging(
        self,
        repository: PostgresVotingSessionRepository,
        db_session: AsyncMock,
        voting_session: VotingSession,
    ) -> None:
        result = MagicMock()
        result.scalars.return_value.all.return_value = [
            json.dumps(voting_session.to_dict())
        ]
        db_session.execute.return_value = result

        sessions = await repository.list_sessions(offset=20, limit=10)

        assert sessions == [voting_session]
        assert db_session.execute.await_args.args[1] == {"offset": 20, "limit": 10}

    async def test_count_failure_is_store_unavailable(
        self, repository: PostgresVotingSessionRepository, db_session: AsyncMock
    ) -> None:
        db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(SessionStoreUnavailableError) as exc_info:
            await repository.count()

        assert exc_info.value.to_rfc7807_dict()["status"] == 503


class TestCreateSchema:
    async def test_runs_each_statement_in_one_transaction(
        self,
        repository: PostgresVotingSessionRepository,
        session_factory: MagicMock,
        db_session: AsyncMock,
    ) -> None:
        await repository.create_schema()

        session_factory.begin.assert_called_once()
        assert db_session.execute.await_count == 2
