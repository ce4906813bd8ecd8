"""Base exception classes for the Campus Ballot domain layer."""


class CampusBallotError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so that
    adapters (HTTP, CLI, workers) can translate them consistently.

    Vote rejections are NOT exceptions. They are returned as
    ``VoteOutcome`` values; only configuration faults, missing resources
    and infrastructure failures are raised.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
