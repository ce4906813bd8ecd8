"""Vote admission API dependencies.

Thin FastAPI dependency functions over the bootstrap composition root.
Tests override collaborators with the ``set_*`` functions in
campus_ballot.bootstrap.ballot or with ``app.dependency_overrides``.
"""

from campus_ballot.application.ports.time_authority import TimeAuthorityProtocol
from campus_ballot.application.services.session_admin_service import (
    SessionAdminService,
)
from campus_ballot.application.services.turnout_aggregation_service import (
    TurnoutAggregationService,
)
from campus_ballot.application.services.vote_admission_service import (
    VoteAdmissionService,
)
from campus_ballot.bootstrap import ballot
from campus_ballot.domain.services.eligibility_builder import EligibilityBuilder


def get_vote_admission_service() -> VoteAdmissionService:
    return ballot.get_vote_admission_service()


def get_turnout_service() -> TurnoutAggregationService:
    return ballot.get_turnout_service()


def get_session_admin_service() -> SessionAdminService:
    return ballot.get_session_admin_service()


def get_time_authority() -> TimeAuthorityProtocol:
    return ballot.get_time_authority()


async def get_eligibility_builder() -> EligibilityBuilder:
    """Builder over the current org-unit directory snapshot."""
    directory = await ballot.get_org_unit_directory().get_directory()
    return EligibilityBuilder(directory)
