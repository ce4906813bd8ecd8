"""Bootstrap wiring for vote admission dependencies.

Every collaborator is a lazily-created singleton that tests can replace
with ``set_*`` and clear with ``reset_ballot_dependencies``. The session
and vote record stores are PostgreSQL when ``DATABASE_URL`` is configured
and in-memory stubs otherwise; the other collaborators are owned by
external systems and default to stubs. ``initialize_storage`` creates the
PostgreSQL schema and runs once at application startup.
"""

from __future__ import annotations

from structlog import get_logger

from campus_ballot.application.ports.org_unit_directory import (
    OrgUnitDirectoryProtocol,
)
from campus_ballot.application.ports.session_repository import (
    VotingSessionRepositoryProtocol,
)
from campus_ballot.application.ports.time_authority import TimeAuthorityProtocol
from campus_ballot.application.ports.vote_record_repository import (
    VoteRecordRepositoryProtocol,
)
from campus_ballot.application.ports.voter_directory import VoterDirectoryProtocol
from campus_ballot.application.services.session_admin_service import (
    SessionAdminService,
)
from campus_ballot.application.services.time_authority_service import (
    SystemTimeAuthority,
)
from campus_ballot.application.services.turnout_aggregation_service import (
    TurnoutAggregationService,
)
from campus_ballot.application.services.vote_admission_service import (
    VoteAdmissionService,
)
from campus_ballot.bootstrap.database import get_session_factory
from campus_ballot.config.engine_config import EngineConfig
from campus_ballot.infrastructure.adapters.persistence.vote_record_repository import (
    PostgresVoteRecordRepository,
)
from campus_ballot.infrastructure.adapters.persistence.voting_session_repository import (
    PostgresVotingSessionRepository,
)
from campus_ballot.infrastructure.monitoring.vote_metrics import (
    get_vote_metrics_collector,
)
from campus_ballot.infrastructure.stubs.org_unit_directory_stub import (
    OrgUnitDirectoryStub,
)
from campus_ballot.infrastructure.stubs.vote_record_repository_stub import (
    VoteRecordRepositoryStub,
)
from campus_ballot.infrastructure.stubs.voter_directory_stub import VoterDirectoryStub
from campus_ballot.infrastructure.stubs.voting_session_repository_stub import (
    VotingSessionRepositoryStub,
)

logger = get_logger(__name__)

_engine_config: EngineConfig | None = None
_session_repository: VotingSessionRepositoryProtocol | None = None
_vote_record_repository: VoteRecordRepositoryProtocol | None = None
_voter_directory: VoterDirectoryProtocol | None = None
_org_unit_directory: OrgUnitDirectoryProtocol | None = None
_time_authority: TimeAuthorityProtocol | None = None
_vote_admission_service: VoteAdmissionService | None = None
_turnout_service: TurnoutAggregationService | None = None
_session_admin_service: SessionAdminService | None = None


def get_engine_config() -> EngineConfig:
    """Get engine configuration (read from the environment once)."""
    global _engine_config
    if _engine_config is None:
        _engine_config = EngineConfig.from_environment()
    return _engine_config


def get_session_repository() -> VotingSessionRepositoryProtocol:
    """Get voting session repository instance.

    PostgreSQL when DATABASE_URL is configured, in-memory otherwise.
    """
    global _session_repository
    if _session_repository is None:
        if get_engine_config().database_url:
            _session_repository = PostgresVotingSessionRepository(
                get_session_factory()
            )
            logger.info("session_store_selected", store="postgresql")
        else:
            _session_repository = VotingSessionRepositoryStub()
            logger.warning("session_store_selected", store="in_memory")
    return _session_repository


def get_vote_record_repository() -> VoteRecordRepositoryProtocol:
    """Get vote record repository instance.

    PostgreSQL when DATABASE_URL is configured, in-memory otherwise.
    """
    global _vote_record_repository
    if _vote_record_repository is None:
        if get_engine_config().database_url:
            _vote_record_repository = PostgresVoteRecordRepository(
                get_session_factory()
            )
            logger.info("vote_record_store_selected", store="postgresql")
        else:
            _vote_record_repository = VoteRecordRepositoryStub()
            logger.warning("vote_record_store_selected", store="in_memory")
    return _vote_record_repository


def get_voter_directory() -> VoterDirectoryProtocol:
    """Get voter directory instance."""
    global _voter_directory
    if _voter_directory is None:
        _voter_directory = VoterDirectoryStub()
    return _voter_directory


def get_org_unit_directory() -> OrgUnitDirectoryProtocol:
    """Get org-unit directory instance."""
    global _org_unit_directory
    if _org_unit_directory is None:
        _org_unit_directory = OrgUnitDirectoryStub()
    return _org_unit_directory


def get_time_authority() -> TimeAuthorityProtocol:
    """Get time authority instance."""
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_vote_admission_service() -> VoteAdmissionService:
    """Get vote admission service instance."""
    global _vote_admission_service
    if _vote_admission_service is None:
        _vote_admission_service = VoteAdmissionService(
            session_repository=get_session_repository(),
            vote_record_repository=get_vote_record_repository(),
            voter_directory=get_voter_directory(),
            time_authority=get_time_authority(),
            metrics=get_vote_metrics_collector(),
        )
    return _vote_admission_service


def get_turnout_service() -> TurnoutAggregationService:
    """Get turnout aggregation service instance."""
    global _turnout_service
    if _turnout_service is None:
        _turnout_service = TurnoutAggregationService(
            session_repository=get_session_repository(),
            vote_record_repository=get_vote_record_repository(),
            voter_directory=get_voter_directory(),
            time_authority=get_time_authority(),
        )
    return _turnout_service


def get_session_admin_service() -> SessionAdminService:
    """Get session administration service instance."""
    global _session_admin_service
    if _session_admin_service is None:
        _session_admin_service = SessionAdminService(
            session_repository=get_session_repository(),
            org_unit_directory=get_org_unit_directory(),
            config=get_engine_config(),
            time_authority=get_time_authority(),
        )
    return _session_admin_service


async def initialize_storage() -> None:
    """Create PostgreSQL tables for the selected stores.

    A no-op for in-memory stores. Safe to call on every startup.

    Raises:
        SessionStoreUnavailableError: The sessions schema could not be created.
        VoteStoreUnavailableError: The vote records schema could not be created.
    """
    stores = (get_session_repository(), get_vote_record_repository())
    for store in stores:
        if isinstance(
            store, (PostgresVotingSessionRepository, PostgresVoteRecordRepository)
        ):
            await store.create_schema()
            logger.info("storage_schema_ready", store=type(store).__name__)


def reset_ballot_dependencies() -> None:
    """Reset all singleton instances for testing."""
    global _engine_config
    global _session_repository
    global _vote_record_repository
    global _voter_directory
    global _org_unit_directory
    global _time_authority
    global _vote_admission_service
    global _turnout_service
    global _session_admin_service

    _engine_config = None
    _session_repository = None
    _vote_record_repository = None
    _voter_directory = None
    _org_unit_directory = None
    _time_authority = None
    _vote_admission_service = None
    _turnout_service = None
    _session_admin_service = None


def set_engine_config(config: EngineConfig) -> None:
    """Set custom engine config for testing."""
    global _engine_config
    _engine_config = config


def set_session_repository(repo: VotingSessionRepositoryProtocol) -> None:
    """Set custom session repository for testing."""
    global _session_repository
    _session_repository = repo


def set_vote_record_repository(repo: VoteRecordRepositoryProtocol) -> None:
    """Set custom vote record repository for testing."""
    global _vote_record_repository
    _vote_record_repository = repo


def set_voter_directory(directory: VoterDirectoryProtocol) -> None:
    """Set custom voter directory for testing."""
    global _voter_directory
    _voter_directory = directory


def set_org_unit_directory(directory: OrgUnitDirectoryProtocol) -> None:
    """Set custom org-unit directory for testing."""
    global _org_unit_directory
    _org_unit_directory = directory


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set custom time authority for testing."""
    global _time_authority
    _time_authority = time_authority
