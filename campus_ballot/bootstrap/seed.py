"""Development seed data.

Populates the in-memory collaborators with a small campus so the API
can be exercised locally without external systems. Only used when
ENVIRONMENT is "development".
"""

from __future__ import annotations

from datetime import timedelta

from structlog import get_logger

from campus_ballot.bootstrap.ballot import (
    get_engine_config,
    get_org_unit_directory,
    get_session_admin_service,
    get_time_authority,
    get_voter_directory,
)
from campus_ballot.domain.models.eligibility import EligibilitySpec
from campus_ballot.domain.models.geofence import Geofence
from campus_ballot.domain.models.org_unit import College, Department, OrgUnitDirectory
from campus_ballot.domain.models.voter import Voter
from campus_ballot.domain.models.voting_session import (
    Candidate,
    Category,
    VotingSession,
)
from campus_ballot.infrastructure.stubs.org_unit_directory_stub import (
    OrgUnitDirectoryStub,
)
from campus_ballot.infrastructure.stubs.voter_directory_stub import VoterDirectoryStub

logger = get_logger(__name__)

DEMO_SESSION_ID = "demo-sug-election"
DEMO_CAMPUS_CENTER = (6.5244, 3.3792)

UNDERGRADUATE_LEVELS = frozenset({"100", "200", "300", "400"})


def build_demo_directory() -> OrgUnitDirectory:
    return OrgUnitDirectory(
        [
            College(
                "COPAS",
                "COPAS",
                "College of Pure and Applied Sciences",
                (
                    Department("CS", "CSC", "Computer Science", "COPAS", UNDERGRADUATE_LEVELS),
                    Department("MTH", "MTH", "Mathematics", "COPAS", UNDERGRADUATE_LEVELS),
                ),
            ),
            College(
                "COLENG",
                "COLENG",
                "College of Engineering",
                (
                    Department(
                        "EEE",
                        "EEE",
                        "Electrical and Electronics Engineering",
                        "COLENG",
                        UNDERGRADUATE_LEVELS | {"500"},
                    ),
                ),
            ),
        ]
    )


def build_demo_voters() -> list[Voter]:
    return [
        Voter("CSC/2023/001", "CS", "200"),
        Voter("CSC/2022/014", "CS", "300"),
        Voter("EEE/2022/007", "EEE", "300"),
        Voter("MTH/2023/002", "MTH", "200"),
    ]


async def seed_development_data() -> None:
    """Load the demo campus and register an active demo session."""
    org_units = get_org_unit_directory()
    if isinstance(org_units, OrgUnitDirectoryStub):
        org_units.set_directory(build_demo_directory())

    voters = get_voter_directory()
    if isinstance(voters, VoterDirectoryStub):
        for voter in build_demo_voters():
            voters.add_voter(voter)

    now = get_time_authority().now()
    lat, lng = DEMO_CAMPUS_CENTER
    session = VotingSession(
        session_id=DEMO_SESSION_ID,
        title="Students' Union Election",
        start_time=now - timedelta(minutes=5),
        end_time=now + timedelta(days=1),
        geofence=Geofence(
            center_lat=lat,
            center_lng=lng,
            radius_meters=get_engine_config().default_geofence_radius_meters,
        ),
        eligibility=EligibilitySpec(
            department_ids=frozenset({"CS", "EEE"}),
            levels=frozenset({"200", "300"}),
        ),
        categories=(
            Category(
                "President",
                candidates=(
                    Candidate("pres-ada", "Ada Okafor", "President"),
                    Candidate("pres-tunde", "Tunde Bello", "President"),
                ),
            ),
            Category(
                "Senate",
                max_votes=2,
                candidates=(
                    Candidate("sen-ife", "Ife Adeyemi", "Senate"),
                    Candidate("sen-chidi", "Chidi Nwosu", "Senate"),
                    Candidate("sen-zara", "Zara Musa", "Senate"),
                ),
            ),
        ),
    )
    await get_session_admin_service().register_session(session)
    logger.info("development_data_seeded", session_id=DEMO_SESSION_ID)
