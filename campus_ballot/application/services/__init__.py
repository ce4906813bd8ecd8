"""Application services - Use case orchestration.

Available services:
- SessionAdminService: Session registration, eligibility edits, cancellation
- SystemTimeAuthority: Production time authority
- TurnoutAggregationService: Turnout statistics and published results
- VoteAdmissionService: Vote admission decisions
"""

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

__all__ = [
    "SessionAdminService",
    "SystemTimeAuthority",
    "TurnoutAggregationService",
    "VoteAdmissionService",
]
