"""Geofence validator.

Great-circle distance uses the haversine formula on a spherical Earth of
mean radius 6,371,000 m. At campus scales (tens to thousands of meters)
the result is exact to well under a meter relative to that model.
"""

from __future__ import annotations

import math

from campus_ballot.domain.models.geofence import (
    GeoPoint,
    Geofence,
    GeofenceCheck,
    GeofenceStatus,
)

EARTH_MEAN_RADIUS_METERS: float = 6_371_000.0


def haversine_distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in meters."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    )
    # Rounding can push h a hair past 1.0 for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_MEAN_RADIUS_METERS * math.asin(math.sqrt(h))


def check_geofence(geofence: Geofence, reported: GeoPoint | None) -> GeofenceCheck:
    """Check a reported location against a geofence.

    Order of evaluation:
    1. Disabled geofence or off-campus override -> SKIPPED
    2. No reported location -> MISSING_LOCATION
    3. Reported coordinates out of range -> INVALID_CONFIG
    4. distance <= radius -> INSIDE, else OUTSIDE

    Args:
        geofence: The session's geofence.
        reported: Location reported by the client device, if any.

    Returns:
        GeofenceCheck with the status and, for INSIDE/OUTSIDE, the distance.
    """
    if not geofence.is_enforced:
        return GeofenceCheck(status=GeofenceStatus.SKIPPED)

    if reported is None:
        return GeofenceCheck(status=GeofenceStatus.MISSING_LOCATION)

    if not reported.is_valid:
        return GeofenceCheck(status=GeofenceStatus.INVALID_CONFIG)

    distance = haversine_distance_meters(geofence.center, reported)
    status = (
        GeofenceStatus.INSIDE
        if distance <= geofence.radius_meters
        else GeofenceStatus.OUTSIDE
    )
    return GeofenceCheck(status=status, distance_meters=distance)
