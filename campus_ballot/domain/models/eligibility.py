"""Eligibility specification models.

An EligibilitySpec is the set of (department, level) combinations allowed
to vote in a session, stored as two independent sets. A voter matches
when both their department and their level are selected.

College selection is never stored. Its tri-state display value is
always derived from ``department_ids`` by the builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EligibilityIssue(str, Enum):
    """Why a builder operation left the spec unchanged."""

    INVALID_DEPARTMENT = "invalid_department"
    LEVEL_NOT_AVAILABLE = "level_not_available"
    UNKNOWN_COLLEGE = "unknown_college"


class CollegeSelectionState(str, Enum):
    """Aggregate selection state of a college's departments."""

    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"


@dataclass(frozen=True)
class EligibilitySpec:
    """Departments and levels permitted to vote.

    Attributes:
        department_ids: Selected department ids.
        levels: Selected level labels. A level no selected department
            offers is inert: it matches no voter but is not invalid.
    """

    department_ids: frozenset[str] = field(default_factory=frozenset)
    levels: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "department_ids", frozenset(self.department_ids))
        object.__setattr__(self, "levels", frozenset(self.levels))

    def matches(self, department_id: str, level: str) -> bool:
        """Return True if a voter in this department and level may vote."""
        return department_id in self.department_ids and level in self.levels

    @property
    def is_empty(self) -> bool:
        return not self.department_ids and not self.levels

    def to_dict(self) -> dict:
        return {
            "department_ids": sorted(self.department_ids),
            "levels": sorted(self.levels),
        }

    @classmethod
    def from_dict(cls, data: dict) -> EligibilitySpec:
        return cls(
            department_ids=frozenset(data.get("department_ids", ())),
            levels=frozenset(data.get("levels", ())),
        )


@dataclass(frozen=True)
class EligibilityChange:
    """Result of a builder operation.

    Attributes:
        spec: The spec after the operation (unchanged when ``issue`` is set).
        issue: Why the operation was refused, if it was.
    """

    spec: EligibilitySpec
    issue: EligibilityIssue | None = None

    @property
    def applied(self) -> bool:
        return self.issue is None
