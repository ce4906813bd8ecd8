"""In-memory stub for VoterDirectoryProtocol.

Holds a fixed roster. Can simulate an unreachable identity service.
"""

from __future__ import annotations

from campus_ballot.application.ports.voter_directory import VoterDirectoryProtocol
from campus_ballot.domain.errors import IdentityServiceUnavailableError
from campus_ballot.domain.models.eligibility import EligibilitySpec
from campus_ballot.domain.models.voter import Voter


class VoterDirectoryStub(VoterDirectoryProtocol):
    """Roster stub.

    WARNING: NOT for production use.
    """

    def __init__(self, voters: list[Voter] | None = None) -> None:
        self._voters: dict[str, Voter] = {}
        self._unavailable = False
        for voter in voters or []:
            self.add_voter(voter)

    def add_voter(self, voter: Voter) -> None:
        self._voters[voter.voter_id] = voter

    def set_unavailable(self, unavailable: bool = True) -> None:
        """Make lookups raise IdentityServiceUnavailableError."""
        self._unavailable = unavailable

    async def get_voter(self, voter_id: str) -> Voter | None:
        if self._unavailable:
            raise IdentityServiceUnavailableError(voter_id)
        return self._voters.get(voter_id)

    async def get_voters(self, voter_ids: list[str]) -> list[Voter]:
        return [self._voters[v] for v in voter_ids if v in self._voters]

    async def count_matching(self, spec: EligibilitySpec) -> int:
        return sum(
            1
            for voter in self._voters.values()
            if spec.matches(voter.department_id, voter.level)
        )

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._voters.clear()
        self._unavailable = False
