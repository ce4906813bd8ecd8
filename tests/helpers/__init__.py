"""Test helpers.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    factories: Shared campus, roster and session builders
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority"]
