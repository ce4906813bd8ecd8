"""In-memory stub for OrgUnitDirectoryProtocol."""

from __future__ import annotations

from campus_ballot.application.ports.org_unit_directory import (
    OrgUnitDirectoryProtocol,
)
from campus_ballot.domain.models.org_unit import OrgUnitDirectory


class OrgUnitDirectoryStub(OrgUnitDirectoryProtocol):
    """Returns a fixed directory snapshot.

    WARNING: NOT for production use.
    """

    def __init__(self, directory: OrgUnitDirectory | None = None) -> None:
        self._directory = directory or OrgUnitDirectory([])

    async def get_directory(self) -> OrgUnitDirectory:
        return self._directory

    def set_directory(self, directory: OrgUnitDirectory) -> None:
        self._directory = directory
