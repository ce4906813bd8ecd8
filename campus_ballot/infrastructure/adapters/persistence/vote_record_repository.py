"""PostgreSQL vote record repository.

Implements VoteRecordRepositoryProtocol with raw SQL over a SQLAlchemy
async session factory (asyncpg driver).

Exclusivity comes from a partial unique index on accepted records:

    INSERT ... ON CONFLICT (voter_id, session_id, category)
        WHERE outcome = 'accepted' DO NOTHING RETURNING record_id

Counter updates run in the same transaction as the insert, so a record
and its counter increments become visible together. Any SQLAlchemy
failure rolls the transaction back and surfaces as
VoteStoreUnavailableError.

Usage:
    from campus_ballot.bootstrap.database import get_session_factory

    repository = PostgresVoteRecordRepository(get_session_factory())
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from campus_ballot.application.ports.vote_record_repository import (
    CommitResult,
    VoteRecordRepositoryProtocol,
)
from campus_ballot.domain.errors import VoteStoreUnavailableError
from campus_ballot.domain.models.vote_record import (
    RejectionKind,
    VoteDisposition,
    VoteRecord,
)

logger = get_logger(__name__)

VOTE_RECORD_DDL = """
CREATE TABLE IF NOT EXISTS vote_records (
    record_id        UUID PRIMARY KEY,
    voter_id         TEXT NOT NULL,
    session_id       TEXT NOT NULL,
    category         TEXT NOT NULL,
    candidate_ids    TEXT[] NOT NULL,
    committed_at     TIMESTAMPTZ NOT NULL,
    outcome          TEXT NOT NULL CHECK (outcome IN ('accepted', 'rejected')),
    rejection_reason TEXT,
    request_id       TEXT,
    content_hash     BYTEA NOT NULL,
    CHECK ((outcome = 'accepted') = (rejection_reason IS NULL))
);

CREATE UNIQUE INDEX IF NOT EXISTS uq_vote_records_accepted_key
    ON vote_records (voter_id, session_id, category)
    WHERE outcome = 'accepted';

CREATE INDEX IF NOT EXISTS ix_vote_records_session_outcome
    ON vote_records (session_id, outcome);

CREATE TABLE IF NOT EXISTS candidate_vote_counts (
    session_id   TEXT NOT NULL,
    candidate_id TEXT NOT NULL,
    vote_count   BIGINT NOT NULL DEFAULT 0,
    PRIMARY KEY (session_id, candidate_id)
);

CREATE TABLE IF NOT EXISTS session_vote_totals (
    session_id  TEXT PRIMARY KEY,
    total_votes BIGINT NOT NULL DEFAULT 0
);
"""

_RECORD_COLUMNS = (
    "record_id, voter_id, session_id, category, candidate_ids, committed_at, "
    "outcome, rejection_reason, request_id, content_hash"
)

_INSERT_ACCEPTED = text(f"""
    INSERT INTO vote_records ({_RECORD_COLUMNS})
    VALUES (:record_id, :voter_id, :session_id, :category, :candidate_ids,
            :committed_at, 'accepted', NULL, :request_id, :content_hash)
    ON CONFLICT (voter_id, session_id, category) WHERE outcome = 'accepted'
    DO NOTHING
    RETURNING record_id
""")

_INSERT_REJECTED = text(f"""
    INSERT INTO vote_records ({_RECORD_COLUMNS})
    VALUES (:record_id, :voter_id, :session_id, :category, :candidate_ids,
            :committed_at, 'rejected', :rejection_reason, :request_id,
            :content_hash)
""")

_INCREMENT_CANDIDATES = text("""
    INSERT INTO candidate_vote_counts (session_id, candidate_id, vote_count)
    SELECT :session_id, candidate_id, 1
    FROM unnest(CAST(:candidate_ids AS TEXT[])) AS candidate_id
    ON CONFLICT (session_id, candidate_id)
    DO UPDATE SET vote_count = candidate_vote_counts.vote_count + 1
""")

_INCREMENT_SESSION_TOTAL = text("""
    INSERT INTO session_vote_totals (session_id, total_votes)
    VALUES (:session_id, 1)
    ON CONFLICT (session_id)
    DO UPDATE SET total_votes = session_vote_totals.total_votes + 1
""")

_SELECT_ACCEPTED = text(f"""
    SELECT {_RECORD_COLUMNS}
    FROM vote_records
    WHERE voter_id = :voter_id
      AND session_id = :session_id
      AND category = :category
      AND outcome = 'accepted'
""")


def _record_params(record: VoteRecord) -> dict[str, Any]:
    return {
        "record_id": record.record_id,
        "voter_id": record.voter_id,
        "session_id": record.session_id,
        "category": record.category,
        "candidate_ids": list(record.candidate_ids),
        "committed_at": record.committed_at,
        "rejection_reason": (
            record.rejection_reason.value if record.rejection_reason else None
        ),
        "request_id": record.request_id,
        "content_hash": record.content_hash,
    }


def _row_to_record(row: Any) -> VoteRecord:
    """Map a vote_records row (mapping) back to a VoteRecord."""
    reason = row["rejection_reason"]
    return VoteRecord(
        record_id=row["record_id"],
        voter_id=row["voter_id"],
        session_id=row["session_id"],
        category=row["category"],
        candidate_ids=tuple(row["candidate_ids"]),
        committed_at=row["committed_at"],
        outcome=VoteDisposition(row["outcome"]),
        rejection_reason=RejectionKind(reason) if reason else None,
        request_id=row["request_id"],
        content_hash=bytes(row["content_hash"]),
    )


class PostgresVoteRecordRepository(VoteRecordRepositoryProtocol):
    """Vote record store backed by PostgreSQL.

    Attributes:
        _session_factory: SQLAlchemy async session factory for DB access.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_schema(self) -> None:
        """Create tables and indexes if they do not exist."""
        try:
            async with self._session_factory.begin() as session:
                for statement in VOTE_RECORD_DDL.split(";"):
                    if statement.strip():
                        await session.execute(text(statement))
        except SQLAlchemyError as e:
            logger.error("vote_store_schema_failed", error=str(e))
            raise VoteStoreUnavailableError("Failed to create vote store schema") from e

    async def get_accepted(
        self, voter_id: str, session_id: str, category: str
    ) -> VoteRecord | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    _SELECT_ACCEPTED,
                    {"voter_id": voter_id, "session_id": session_id, "category": category},
                )
                row = result.mappings().first()
        except SQLAlchemyError as e:
            raise self._unavailable("get_accepted", e) from e
        return _row_to_record(row) if row is not None else None

    async def commit_accepted(self, record: VoteRecord) -> CommitResult:
        """Insert-if-absent plus counter increments in one transaction.

        Raises:
            ValueError: The record is not an accepted record.
            VoteStoreUnavailableError: The transaction failed and was rolled back.
        """
        if not record.is_accepted:
            raise ValueError("commit_accepted requires an accepted record")

        params = _record_params(record)
        try:
            async with self._session_factory.begin() as session:
                inserted = await session.execute(_INSERT_ACCEPTED, params)
                if inserted.scalar() is None:
                    # The conflicting row is committed once ON CONFLICT returns
                    result = await session.execute(
                        _SELECT_ACCEPTED,
                        {
                            "voter_id": record.voter_id,
                            "session_id": record.session_id,
                            "category": record.category,
                        },
                    )
                    existing = _row_to_record(result.mappings().one())
                    logger.info(
                        "vote_insert_conflict",
                        session_id=record.session_id,
                        category=record.category,
                        voter_id=record.voter_id,
                    )
                    return CommitResult(committed=False, record=existing)

                await session.execute(
                    _INCREMENT_CANDIDATES,
                    {
                        "session_id": record.session_id,
                        "candidate_ids": list(record.candidate_ids),
                    },
                )
                await session.execute(
                    _INCREMENT_SESSION_TOTAL, {"session_id": record.session_id}
                )
        except SQLAlchemyError as e:
            raise self._unavailable("commit_accepted", e) from e

        return CommitResult(committed=True, record=record)

    async def log_rejection(self, record: VoteRecord) -> None:
        if record.is_accepted:
            raise ValueError("log_rejection requires a rejected record")
        try:
            async with self._session_factory.begin() as session:
                await session.execute(_INSERT_REJECTED, _record_params(record))
        except SQLAlchemyError as e:
            raise self._unavailable("log_rejection", e) from e

    async def count_accepted(self, session_id: str) -> int:
        return await self._scalar(
            "count_accepted",
            """
            SELECT COUNT(*) FROM vote_records
            WHERE session_id = :session_id AND outcome = 'accepted'
            """,
            {"session_id": session_id},
        )

    async def list_voter_ids(self, session_id: str) -> set[str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text("""
                        SELECT DISTINCT voter_id FROM vote_records
                        WHERE session_id = :session_id AND outcome = 'accepted'
                    """),
                    {"session_id": session_id},
                )
                return {row[0] for row in result.fetchall()}
        except SQLAlchemyError as e:
            raise self._unavailable("list_voter_ids", e) from e

    async def count_rejections(
        self, session_id: str, reason: RejectionKind | None = None
    ) -> int:
        if reason is None:
            return await self._scalar(
                "count_rejections",
                """
                SELECT COUNT(*) FROM vote_records
                WHERE session_id = :session_id AND outcome = 'rejected'
                """,
                {"session_id": session_id},
            )
        return await self._scalar(
            "count_rejections",
            """
            SELECT COUNT(*) FROM vote_records
            WHERE session_id = :session_id
              AND outcome = 'rejected'
              AND rejection_reason = :reason
            """,
            {"session_id": session_id, "reason": reason.value},
        )

    async def count_rejections_by_reason(
        self, session_id: str
    ) -> dict[RejectionKind, int]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text("""
                        SELECT rejection_reason, COUNT(*) FROM vote_records
                        WHERE session_id = :session_id AND outcome = 'rejected'
                        GROUP BY rejection_reason
                    """),
                    {"session_id": session_id},
                )
                return {RejectionKind(row[0]): row[1] for row in result.fetchall()}
        except SQLAlchemyError as e:
            raise self._unavailable("count_rejections_by_reason", e) from e

    async def get_candidate_tallies(self, session_id: str) -> dict[str, int]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text("""
                        SELECT candidate_id, vote_count FROM candidate_vote_counts
                        WHERE session_id = :session_id
                    """),
                    {"session_id": session_id},
                )
                return {row[0]: row[1] for row in result.fetchall()}
        except SQLAlchemyError as e:
            raise self._unavailable("get_candidate_tallies", e) from e

    async def get_session_total(self, session_id: str) -> int:
        return await self._scalar(
            "get_session_total",
            """
            SELECT total_votes FROM session_vote_totals
            WHERE session_id = :session_id
            """,
            {"session_id": session_id},
        )

    async def _scalar(self, operation: str, sql: str, params: dict[str, Any]) -> int:
        try:
            async with self._session_factory() as session:
                result = await session.execute(text(sql), params)
                return result.scalar() or 0
        except SQLAlchemyError as e:
            raise self._unavailable(operation, e) from e

    @staticmethod
    def _unavailable(operation: str, error: Exception) -> VoteStoreUnavailableError:
        logger.error("vote_store_operation_failed", operation=operation, error=str(error))
        return VoteStoreUnavailableError(f"Vote store {operation} failed: {error}")
