"""Unit tests for VoteMetricsCollector."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from campus_ballot.domain.models.vote_record import RejectionKind
from campus_ballot.infrastructure.monitoring.vote_metrics import (
    VoteMetricsCollector,
    generate_metrics,
    get_vote_metrics_collector,
    reset_vote_metrics_collector,
)


@pytest.fixture
def collector(monkeypatch: pytest.MonkeyPatch) -> VoteMetricsCollector:
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("SERVICE_NAME", "campus-ballot")
    return VoteMetricsCollector(registry=CollectorRegistry())


LABELS = {"service": "campus-ballot", "environment": "test"}


class TestVoteMetricsCollector:
    def test_record_accepted(self, collector: VoteMetricsCollector) -> None:
        collector.record_accepted("President")
        collector.record_accepted("President")

        assert collector.get_registry().get_sample_value(
            "votes_accepted_total", {"category": "President", **LABELS}
        ) == 2.0

    def test_record_rejected_uses_reason_value(
        self, collector: VoteMetricsCollector
    ) -> None:
        collector.record_rejected(RejectionKind.OUT_OF_RANGE)

        assert collector.get_registry().get_sample_value(
            "votes_rejected_total", {"reason": "out_of_range", **LABELS}
        ) == 1.0

    def test_observe_duration(self, collector: VoteMetricsCollector) -> None:
        collector.observe_admission_duration(0.02)

        registry = collector.get_registry()
        assert registry.get_sample_value(
            "vote_admission_duration_seconds_count", LABELS
        ) == 1.0
        assert registry.get_sample_value(
            "vote_admission_duration_seconds_bucket", {"le": "0.025", **LABELS}
        ) == 1.0


class TestSingleton:
    def test_singleton_is_shared(self) -> None:
        assert get_vote_metrics_collector() is get_vote_metrics_collector()

    def test_reset_creates_new_instance(self) -> None:
        first = get_vote_metrics_collector()
        reset_vote_metrics_collector()

        assert get_vote_metrics_collector() is not first

    def test_generate_metrics(self) -> None:
        get_vote_metrics_collector().observe_admission_duration(0.1)

        output = generate_metrics()

        assert b"vote_admission_duration_seconds" in output
