"""Geofence models.

A geofence is a circle on a spherical Earth: a center in degrees and a
radius in meters. Sessions that do not restrict location either disable
the geofence or allow off-campus voting; both bypass the check.

Note: reported device coordinates are not authenticated. The geofence is
a deterrent against casual remote voting, not a security boundary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from campus_ballot.domain.errors.session import InvalidGeofenceError

MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0


def is_valid_coordinate(lat: float, lng: float) -> bool:
    """Return True if (lat, lng) are finite and within ±90 / ±180 degrees."""
    return (
        math.isfinite(lat)
        and math.isfinite(lng)
        and -MAX_LATITUDE <= lat <= MAX_LATITUDE
        and -MAX_LONGITUDE <= lng <= MAX_LONGITUDE
    )


@dataclass(frozen=True)
class GeoPoint:
    """A location reported by a client device.

    Not validated on construction: an out-of-range report is a vote
    outcome (INVALID_GEOFENCE_CONFIG), not a programming error.
    """

    lat: float
    lng: float

    @property
    def is_valid(self) -> bool:
        return is_valid_coordinate(self.lat, self.lng)


@dataclass(frozen=True)
class Geofence:
    """Circular voting area for a session.

    Attributes:
        center_lat: Center latitude in degrees.
        center_lng: Center longitude in degrees.
        radius_meters: Allowed distance from the center. Must be > 0 when
            the geofence is enabled.
        enabled: Whether location is checked at all.
        off_campus_allowed: Administrative override that bypasses the
            check even when enabled.
    """

    center_lat: float
    center_lng: float
    radius_meters: float
    enabled: bool = True
    off_campus_allowed: bool = False

    def __post_init__(self) -> None:
        """Validate geofence configuration.

        Raises:
            InvalidGeofenceError: If the center is out of range or an
                enabled geofence has a non-positive radius.
        """
        if not is_valid_coordinate(self.center_lat, self.center_lng):
            raise InvalidGeofenceError(
                f"Geofence center ({self.center_lat}, {self.center_lng}) "
                "is outside the valid coordinate range"
            )
        if not math.isfinite(self.radius_meters):
            raise InvalidGeofenceError("Geofence radius must be finite")
        if self.enabled and self.radius_meters <= 0:
            raise InvalidGeofenceError(
                f"Enabled geofence requires a positive radius, got {self.radius_meters}"
            )

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.center_lat, self.center_lng)

    @property
    def is_enforced(self) -> bool:
        return self.enabled and not self.off_campus_allowed

    @classmethod
    def disabled(cls) -> Geofence:
        """A geofence that never restricts location."""
        return cls(center_lat=0.0, center_lng=0.0, radius_meters=0.0, enabled=False)

    def to_dict(self) -> dict:
        return {
            "center_lat": self.center_lat,
            "center_lng": self.center_lng,
            "radius_meters": self.radius_meters,
            "enabled": self.enabled,
            "off_campus_allowed": self.off_campus_allowed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Geofence:
        return cls(
            center_lat=float(data["center_lat"]),
            center_lng=float(data["center_lng"]),
            radius_meters=float(data["radius_meters"]),
            enabled=bool(data.get("enabled", True)),
            off_campus_allowed=bool(data.get("off_campus_allowed", False)),
        )


class GeofenceStatus(str, Enum):
    INSIDE = "inside"
    OUTSIDE = "outside"
    SKIPPED = "skipped"
    MISSING_LOCATION = "missing_location"
    INVALID_CONFIG = "invalid_config"


@dataclass(frozen=True)
class GeofenceCheck:
    """Result of checking one reported location.

    Attributes:
        status: Check outcome.
        distance_meters: Great-circle distance from the center, present
            only for INSIDE and OUTSIDE.
    """

    status: GeofenceStatus
    distance_meters: float | None = None

    @property
    def passed(self) -> bool:
        return self.status in (GeofenceStatus.INSIDE, GeofenceStatus.SKIPPED)
