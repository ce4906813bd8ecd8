"""
Domain layer - Pure business logic for Campus Ballot.

This layer contains:
- Value objects (sessions, eligibility specs, geofences, vote records)
- Pure domain services (eligibility builder, geofence check, window gate)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or api.
"""

from campus_ballot.domain.exceptions import CampusBallotError

__all__: list[str] = ["CampusBallotError"]
