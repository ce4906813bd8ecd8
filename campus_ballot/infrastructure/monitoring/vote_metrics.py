"""Vote admission metrics for Prometheus exposition.

Tracks admission outcomes and decision latency:
- votes_accepted_total{category}
- votes_rejected_total{reason}
- vote_admission_duration_seconds (histogram)

Voter ids are never used as labels.
"""

from __future__ import annotations

import os
import threading

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from campus_ballot.domain.models.vote_record import RejectionKind

# Content type for Prometheus metrics endpoint
METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

# Decisions are dominated by store round trips (1ms to 5s)
ADMISSION_HISTOGRAM_BUCKETS = (0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)

# Thread lock for singleton initialization
_metrics_lock = threading.Lock()


class VoteMetricsCollector:
    """Collects vote admission metrics.

    Attributes:
        votes_accepted_total: Counter of accepted votes per category.
        votes_rejected_total: Counter of rejected attempts per reason.
        vote_admission_duration_seconds: Histogram of decision latency.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize the collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "campus-ballot")

        self.votes_accepted_total = Counter(
            name="votes_accepted_total",
            documentation="Total accepted votes per ballot category",
            labelnames=["category", "service", "environment"],
            registry=self._registry,
        )

        self.votes_rejected_total = Counter(
            name="votes_rejected_total",
            documentation="Total rejected vote attempts per rejection reason",
            labelnames=["reason", "service", "environment"],
            registry=self._registry,
        )

        self.vote_admission_duration_seconds = Histogram(
            name="vote_admission_duration_seconds",
            documentation="Time taken to decide one vote-cast attempt",
            labelnames=["service", "environment"],
            buckets=ADMISSION_HISTOGRAM_BUCKETS,
            registry=self._registry,
        )

    def record_accepted(self, category: str) -> None:
        self.votes_accepted_total.labels(
            category=category,
            service=self._service_name,
            environment=self._environment,
        ).inc()

    def record_rejected(self, reason: RejectionKind) -> None:
        self.votes_rejected_total.labels(
            reason=reason.value,
            service=self._service_name,
            environment=self._environment,
        ).inc()

    def observe_admission_duration(self, seconds: float) -> None:
        self.vote_admission_duration_seconds.labels(
            service=self._service_name,
            environment=self._environment,
        ).observe(seconds)

    def get_registry(self) -> CollectorRegistry:
        return self._registry


# Singleton instance
_vote_metrics: VoteMetricsCollector | None = None


def get_vote_metrics_collector() -> VoteMetricsCollector:
    """Get the singleton VoteMetricsCollector (thread-safe)."""
    global _vote_metrics
    if _vote_metrics is None:
        with _metrics_lock:
            # Double-check inside lock
            if _vote_metrics is None:
                _vote_metrics = VoteMetricsCollector()
    return _vote_metrics


def generate_metrics() -> bytes:
    """Generate Prometheus metrics in exposition format."""
    return generate_latest(get_vote_metrics_collector().get_registry())


def reset_vote_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _vote_metrics
    with _metrics_lock:
        _vote_metrics = None
