"""Domain services for Campus Ballot.

Pure functions and stateless helpers over domain values. They never
touch storage or the clock; callers pass ``now`` explicitly.

Available services:
- EligibilityBuilder: Builds eligibility specs against the org-unit directory
- check_geofence / haversine_distance_meters: Location check
- session_window_state: Half-open voting window gate
"""

from campus_ballot.domain.services.session_window import (
    SessionWindowState,
    session_window_state,
)
from campus_ballot.domain.services.geofence_validator import (
    EARTH_MEAN_RADIUS_METERS,
    check_geofence,
    haversine_distance_meters,
)
from campus_ballot.domain.services.eligibility_builder import EligibilityBuilder

__all__ = [
    "EARTH_MEAN_RADIUS_METERS",
    "EligibilityBuilder",
    "SessionWindowState",
    "check_geofence",
    "haversine_distance_meters",
    "session_window_state",
]
