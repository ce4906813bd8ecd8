"""Unit tests for the session window gate and VotingSession status."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from campus_ballot.domain.errors import InvalidCategoryError, InvalidTimeWindowError
from campus_ballot.domain.models.voting_session import (
    Candidate,
    Category,
    SessionStatus,
)
from campus_ballot.domain.services.session_window import (
    SessionWindowState,
    session_window_state,
)
from tests.helpers.factories import build_session

START = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)
END = datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc)


class TestSessionWindowState:
    """The window is the half-open interval [start_time, end_time)."""

    def test_before_start_is_upcoming(self) -> None:
        now = START - timedelta(microseconds=1)

        assert session_window_state(now, START, END) == SessionWindowState.UPCOMING

    def test_start_is_inclusive(self) -> None:
        assert session_window_state(START, START, END) == SessionWindowState.ACTIVE

    def test_inside_window_is_active(self) -> None:
        now = START + timedelta(hours=5)

        assert session_window_state(now, START, END) == SessionWindowState.ACTIVE

    def test_end_is_exclusive(self) -> None:
        assert session_window_state(END, START, END) == SessionWindowState.ENDED

    def test_after_end_is_ended(self) -> None:
        now = END + timedelta(days=1)

        assert session_window_state(now, START, END) == SessionWindowState.ENDED


class TestVotingSessionStatus:
    """Tests for VotingSession.status and accepts_votes."""

    def test_active_session_accepts_votes(self) -> None:
        session = build_session(START)

        assert session.status(START) == SessionStatus.ACTIVE
        assert session.accepts_votes(START)

    def test_ended_session_rejects_votes(self) -> None:
        session = build_session(START)

        later = session.end_time
        assert session.status(later) == SessionStatus.ENDED
        assert not session.accepts_votes(later)

    def test_upcoming_session_rejects_votes(self) -> None:
        session = build_session(START)

        earlier = session.start_time - timedelta(seconds=1)
        assert session.status(earlier) == SessionStatus.UPCOMING
        assert not session.accepts_votes(earlier)

    def test_cancelled_overrides_window(self) -> None:
        session = build_session(START, cancelled=True)

        assert session.status(START) == SessionStatus.CANCELLED
        assert not session.accepts_votes(START)


class TestVotingSessionInvariants:
    """Tests for construction-time validation."""

    def test_start_must_precede_end(self) -> None:
        with pytest.raises(InvalidTimeWindowError) as exc_info:
            build_session(START, start_time=END, end_time=START)

        assert exc_info.value.start_time == END
        assert exc_info.value.end_time == START

    def test_empty_window_is_rejected(self) -> None:
        with pytest.raises(InvalidTimeWindowError):
            build_session(START, start_time=START, end_time=START)

    def test_naive_bounds_are_rejected(self) -> None:
        with pytest.raises(InvalidTimeWindowError, match="timezone-aware"):
            build_session(
                START,
                start_time=datetime(2026, 3, 2, 8, 0),
                end_time=datetime(2026, 3, 2, 18, 0),
            )

    def test_duplicate_category_names(self) -> None:
        president = Category(
            "President", candidates=(Candidate("p1", "A", "President"),)
        )

        with pytest.raises(InvalidCategoryError, match="Duplicate category"):
            build_session(START, categories=(president, president))

    def test_candidate_in_two_categories(self) -> None:
        categories = (
            Category("President", candidates=(Candidate("c1", "A", "President"),)),
            Category("Senate", candidates=(Candidate("c1", "A", "Senate"),)),
        )

        with pytest.raises(InvalidCategoryError, match="appears in both"):
            build_session(START, categories=categories)

    def test_get_category(self) -> None:
        session = build_session(START)

        assert session.get_category("Senate").max_votes == 2
        assert session.get_category("Treasurer") is None


class TestCategory:
    """Tests for Category validation."""

    def test_max_votes_must_be_positive(self) -> None:
        with pytest.raises(InvalidCategoryError):
            Category("President", max_votes=0)

    def test_candidate_category_must_match(self) -> None:
        with pytest.raises(InvalidCategoryError, match="declares category"):
            Category("President", candidates=(Candidate("c1", "A", "Senate"),))

    def test_repeated_candidate(self) -> None:
        candidate = Candidate("c1", "A", "President")

        with pytest.raises(InvalidCategoryError, match="listed twice"):
            Category("President", candidates=(candidate, candidate))

    def test_candidate_lookup(self) -> None:
        category = Category(
            "President",
            candidates=(
                Candidate("c1", "A", "President"),
                Candidate("c2", "B", "President"),
            ),
        )

        assert category.candidate_ids == frozenset({"c1", "c2"})
        assert category.has_candidate("c2")
        assert not category.has_candidate("c3")
