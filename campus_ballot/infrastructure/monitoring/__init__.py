"""Prometheus monitoring for the vote admission engine."""

from campus_ballot.infrastructure.monitoring.vote_metrics import (
    METRICS_CONTENT_TYPE,
    VoteMetricsCollector,
    generate_metrics,
    get_vote_metrics_collector,
    reset_vote_metrics_collector,
)

__all__ = [
    "METRICS_CONTENT_TYPE",
    "VoteMetricsCollector",
    "generate_metrics",
    "get_vote_metrics_collector",
    "reset_vote_metrics_collector",
]
