"""
Integration test configuration with testcontainers.

Provides a session-scoped PostgreSQL 16 container for the vote store
tests. Tests that need it are skipped when Docker is not available.
In-memory concurrency tests in this package need no container.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from campus_ballot.infrastructure.adapters.persistence.vote_record_repository import (
    PostgresVoteRecordRepository,
)
from campus_ballot.infrastructure.adapters.persistence.voting_session_repository import (
    PostgresVotingSessionRepository,
)


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Session-scoped PostgreSQL 16 container, started once per test run."""
    try:
        container = PostgresContainer("postgres:16-alpine")
        container.start()
    except Exception as exc:  # Docker daemon missing or unreachable
        pytest.skip(f"PostgreSQL container unavailable: {exc}")
    try:
        yield container
    finally:
        container.stop()


@pytest.fixture(scope="session")
def postgres_async_url(postgres_container: PostgresContainer) -> str:
    """Async-compatible PostgreSQL connection URL (asyncpg driver)."""
    sync_url = postgres_container.get_connection_url()
    async_url: str = sync_url.replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://"
    ).replace("postgresql://", "postgresql+asyncpg://")
    return async_url


@pytest.fixture
async def pg_repository(
    postgres_async_url: str,
) -> AsyncGenerator[PostgresVoteRecordRepository, None]:
    """Repository over a fresh schema; tables are truncated after each test."""
    engine = create_async_engine(postgres_async_url, echo=False)
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    repository = PostgresVoteRecordRepository(session_factory)
    await repository.create_schema()

    yield repository

    async with session_factory.begin() as session:
        await session.execute(
            text(
                "TRUNCATE vote_records, candidate_vote_counts, session_vote_totals"
            )
        )
    await engine.dispose()


@pytest.fixture
async def pg_session_repository(
    postgres_async_url: str,
) -> AsyncGenerator[PostgresVotingSessionRepository, None]:
    """Session store over a fresh schema; truncated after each test."""
    engine = create_async_engine(postgres_async_url, echo=False)
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    repository = PostgresVotingSessionRepository(session_factory)
    await repository.create_schema()

    yield repository

    async with session_factory.begin() as session:
        await session.execute(text("TRUNCATE voting_sessions"))
    await engine.dispose()
