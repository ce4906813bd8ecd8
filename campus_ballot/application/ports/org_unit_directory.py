"""Org-unit directory protocol.

The college/department/level hierarchy is owned by an administrative
collaborator. The engine loads it as an immutable OrgUnitDirectory.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from campus_ballot.domain.models.org_unit import OrgUnitDirectory


class OrgUnitDirectoryProtocol(Protocol):
    @abstractmethod
    async def get_directory(self) -> OrgUnitDirectory:
        """Return the current org-unit directory snapshot."""
        ...
