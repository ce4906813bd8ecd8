"""PostgreSQL voting session repository.

Sessions are stored as one JSONB document per row. The window bounds and
the cancellation flag are also kept as columns so listings can be ordered
and filtered without decoding every document.

Usage:
    from campus_ballot.bootstrap.database import get_session_factory

    repository = PostgresVotingSessionRepository(get_session_factory())
    await repository.create_schema()
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from campus_ballot.application.ports.session_repository import (
    VotingSessionRepositoryProtocol,
)
from campus_ballot.domain.errors import SessionStoreUnavailableError
from campus_ballot.domain.models.voting_session import VotingSession

logger = get_logger(__name__)

VOTING_SESSION_DDL = """
CREATE TABLE IF NOT EXISTS voting_sessions (
    session_id TEXT PRIMARY KEY,
    start_time TIMESTAMPTZ NOT NULL,
    end_time   TIMESTAMPTZ NOT NULL,
    cancelled  BOOLEAN NOT NULL DEFAULT FALSE,
    document   JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    CHECK (start_time < end_time)
);

CREATE INDEX IF NOT EXISTS ix_voting_sessions_start_time
    ON voting_sessions (start_time DESC, session_id);
"""

_UPSERT = text("""
    INSERT INTO voting_sessions (session_id, start_time, end_time, cancelled, document)
    VALUES (:session_id, :start_time, :end_time, :cancelled, CAST(:document AS JSONB))
    ON CONFLICT (session_id) DO UPDATE SET
        start_time = EXCLUDED.start_time,
        end_time   = EXCLUDED.end_time,
        cancelled  = EXCLUDED.cancelled,
        document   = EXCLUDED.document,
        updated_at = now()
""")

_SELECT_ONE = text("""
    SELECT document FROM voting_sessions WHERE session_id = :session_id
""")

_SELECT_PAGE = text("""
    SELECT document FROM voting_sessions
    ORDER BY start_time DESC, session_id
    LIMIT :limit OFFSET :offset
""")

_COUNT = text("SELECT COUNT(*) FROM voting_sessions")


def _document_to_session(document: Any) -> VotingSession:
    # asyncpg hands JSONB back as text unless a codec is registered
    data = json.loads(document) if isinstance(document, (str, bytes)) else document
    return VotingSession.from_dict(data)


class PostgresVotingSessionRepository(VotingSessionRepositoryProtocol):
    """Voting session store backed by PostgreSQL.

    Attributes:
        _session_factory: SQLAlchemy async session factory for DB access.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_schema(self) -> None:
        """Create the sessions table and index if they do not exist."""
        try:
            async with self._session_factory.begin() as session:
                for statement in VOTING_SESSION_DDL.split(";"):
                    if statement.strip():
                        await session.execute(text(statement))
        except SQLAlchemyError as e:
            raise self._unavailable("create_schema", e) from e

    async def get(self, session_id: str) -> VotingSession | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(_SELECT_ONE, {"session_id": session_id})
                document = result.scalar()
        except SQLAlchemyError as e:
            raise self._unavailable("get", e) from e
        return _document_to_session(document) if document is not None else None

    async def save(self, voting_session: VotingSession) -> None:
        params = {
            "session_id": voting_session.session_id,
            "start_time": voting_session.start_time,
            "end_time": voting_session.end_time,
            "cancelled": voting_session.cancelled,
            "document": json.dumps(voting_session.to_dict()),
        }
        try:
            async with self._session_factory.begin() as session:
                await session.execute(_UPSERT, params)
        except SQLAlchemyError as e:
            raise self._unavailable("save", e) from e

    async def list_sessions(self, offset: int, limit: int) -> list[VotingSession]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    _SELECT_PAGE, {"offset": offset, "limit": limit}
                )
                documents = result.scalars().all()
        except SQLAlchemyError as e:
            raise self._unavailable("list_sessions", e) from e
        return [_document_to_session(document) for document in documents]

    async def count(self) -> int:
        try:
            async with self._session_factory() as session:
                result = await session.execute(_COUNT)
                return result.scalar() or 0
        except SQLAlchemyError as e:
            raise self._unavailable("count", e) from e

    @staticmethod
    def _unavailable(operation: str, error: Exception) -> SessionStoreUnavailableError:
        logger.error(
            "session_store_operation_failed", operation=operation, error=str(error)
        )
        return SessionStoreUnavailableError(f"Session store {operation} failed: {error}")
