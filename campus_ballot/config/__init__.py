"""Configuration module for Campus Ballot.

Available Configurations:
- EngineConfig: Geofence radius policy, environment and storage URL
"""

from campus_ballot.config.engine_config import (
    DEFAULT_ENGINE_CONFIG,
    TEST_ENGINE_CONFIG,
    EngineConfig,
)

__all__ = [
    "EngineConfig",
    "DEFAULT_ENGINE_CONFIG",
    "TEST_ENGINE_CONFIG",
]
