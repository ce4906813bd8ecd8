"""Voter identity as handed over by the identity collaborator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Voter:
    """An authenticated, facially-verified student.

    The engine trusts this identity without re-verifying it.

    Attributes:
        voter_id: Stable student identifier (e.g. matric number).
        department_id: Department the student belongs to.
        level: Current level label (e.g. "200").
    """

    voter_id: str
    department_id: str
    level: str
