"""Voting session repository protocol."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from campus_ballot.domain.models.voting_session import VotingSession


class VotingSessionRepositoryProtocol(Protocol):
    """Storage for voting session configurations.

    Sessions are frozen values. ``save`` replaces any stored value with
    the same ``session_id``. Implementations raise
    SessionStoreUnavailableError when the backing store fails.
    """

    @abstractmethod
    async def get(self, session_id: str) -> VotingSession | None:
        """Return the session, or None if it does not exist."""
        ...

    @abstractmethod
    async def save(self, session: VotingSession) -> None:
        """Insert or replace a session."""
        ...

    @abstractmethod
    async def list_sessions(self, offset: int, limit: int) -> list[VotingSession]:
        """Return one page of sessions, newest ``start_time`` first.

        Ties on ``start_time`` are broken by ``session_id``.
        """
        ...

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored sessions."""
        ...
