"""In-memory stub for VotingSessionRepositoryProtocol."""

from __future__ import annotations

from campus_ballot.application.ports.session_repository import (
    VotingSessionRepositoryProtocol,
)
from campus_ballot.domain.models.voting_session import VotingSession


class VotingSessionRepositoryStub(VotingSessionRepositoryProtocol):
    """Stores sessions in a dict keyed by session_id.

    WARNING: NOT for production use.
    """

    def __init__(self, sessions: list[VotingSession] | None = None) -> None:
        self._sessions: dict[str, VotingSession] = {}
        for session in sessions or []:
            self._sessions[session.session_id] = session

    async def get(self, session_id: str) -> VotingSession | None:
        return self._sessions.get(session_id)

    async def save(self, session: VotingSession) -> None:
        self._sessions[session.session_id] = session

    async def list_sessions(self, offset: int, limit: int) -> list[VotingSession]:
        ordered = sorted(self._sessions.values(), key=lambda s: s.session_id)
        ordered.sort(key=lambda s: s.start_time, reverse=True)
        return ordered[offset : offset + limit]

    async def count(self) -> int:
        return len(self._sessions)

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._sessions.clear()
