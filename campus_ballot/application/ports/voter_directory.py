"""Voter directory protocol.

The voter directory is the identity collaborator: it resolves an
authenticated voter id to the department and level the engine checks
against an eligibility spec, and it counts the roster for turnout.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from campus_ballot.domain.models.eligibility import EligibilitySpec
from campus_ballot.domain.models.voter import Voter


class VoterDirectoryProtocol(Protocol):
    """Read-only access to the student roster."""

    @abstractmethod
    async def get_voter(self, voter_id: str) -> Voter | None:
        """Resolve a voter id.

        Returns:
            The voter, or None if the id is not on the roster.

        Raises:
            IdentityServiceUnavailableError: The directory is unreachable.
        """
        ...

    @abstractmethod
    async def get_voters(self, voter_ids: list[str]) -> list[Voter]:
        """Resolve several voter ids, skipping unknown ones."""
        ...

    @abstractmethod
    async def count_matching(self, spec: EligibilitySpec) -> int:
        """Count roster entries whose department and level match the spec."""
        ...
