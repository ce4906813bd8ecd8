"""Vote admission engine configuration.

Environment Variables:
- ENVIRONMENT: Deployment environment name (default: development)
- DEFAULT_GEOFENCE_RADIUS_METERS: Radius offered for new sessions (default: 5000)
- MIN_GEOFENCE_RADIUS_METERS: Smallest radius an administrator may set (default: 500)
- ENFORCE_MIN_GEOFENCE_RADIUS: Reject enforced geofences below the minimum (default: true)
- DATABASE_URL: PostgreSQL URL for the vote record store (optional)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

VALID_ENVIRONMENTS = frozenset({"development", "test", "staging", "production"})


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Accepts 1/true/yes/on and 0/false/no/off, case-insensitively.
    Anything else yields the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off"):
        return False
    return default


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the vote admission engine.

    Attributes:
        environment: Deployment environment; selects the log renderer.
        default_geofence_radius_meters: Radius suggested for new sessions.
        min_geofence_radius_meters: Smallest radius accepted for an
            enforced geofence when ``enforce_min_radius`` is set.
        enforce_min_radius: Whether session registration applies the minimum.
        database_url: Async SQLAlchemy URL. None selects in-memory stores.
    """

    environment: str = "development"
    default_geofence_radius_meters: float = 5000.0
    min_geofence_radius_meters: float = 500.0
    enforce_min_radius: bool = True
    database_url: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {sorted(VALID_ENVIRONMENTS)}, "
                f"got {self.environment!r}"
            )
        if self.min_geofence_radius_meters <= 0:
            raise ValueError(
                "min_geofence_radius_meters must be positive, "
                f"got {self.min_geofence_radius_meters}"
            )
        if self.default_geofence_radius_meters < self.min_geofence_radius_meters:
            raise ValueError(
                f"default_geofence_radius_meters ({self.default_geofence_radius_meters}) "
                f"must be at least min_geofence_radius_meters "
                f"({self.min_geofence_radius_meters})"
            )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_environment(cls) -> "EngineConfig":
        """Create config from environment variables with defaults.

        Returns:
            EngineConfig with values from environment or defaults.
        """
        return cls(
            environment=os.environ.get("ENVIRONMENT", "development"),
            default_geofence_radius_meters=_get_float_env(
                "DEFAULT_GEOFENCE_RADIUS_METERS", 5000.0
            ),
            min_geofence_radius_meters=_get_float_env(
                "MIN_GEOFENCE_RADIUS_METERS", 500.0
            ),
            enforce_min_radius=_get_bool_env("ENFORCE_MIN_GEOFENCE_RADIUS", True),
            database_url=os.environ.get("DATABASE_URL") or None,
        )


# Pre-defined configurations for common use cases

# Default development config
DEFAULT_ENGINE_CONFIG = EngineConfig()

# Testing config: small geofences allowed so fixtures can use 200 m campuses
TEST_ENGINE_CONFIG = EngineConfig(
    environment="test",
    default_geofence_radius_meters=200.0,
    min_geofence_radius_meters=1.0,
    enforce_min_radius=False,
)
