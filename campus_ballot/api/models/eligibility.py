"""Eligibility builder request/response models."""

from pydantic import BaseModel, Field

from campus_ballot.domain.models.eligibility import (
    CollegeSelectionState,
    EligibilityIssue,
    EligibilitySpec,
)


class EligibilitySpecModel(BaseModel):
    department_ids: list[str] = Field(default_factory=list)
    levels: list[str] = Field(default_factory=list)

    def to_domain(self) -> EligibilitySpec:
        return EligibilitySpec(
            department_ids=frozenset(self.department_ids),
            levels=frozenset(self.levels),
        )


class EligibilityOperationRequest(BaseModel):
    """Apply one builder operation to a spec.

    Attributes:
        spec: The spec to operate on.
        target: Department id, college id or level label, for the
            toggle operations; ignored by the others.
    """

    spec: EligibilitySpecModel = Field(default_factory=EligibilitySpecModel)
    target: str | None = None


class EligibilityOperationResponse(BaseModel):
    """The spec after the operation plus derived display state.

    Attributes:
        spec: Resulting spec (unchanged when ``issue`` is set).
        applied: False when an issue blocked the operation.
        issue: Why the operation was refused, if it was.
        college_states: Derived tri-state per college id.
        available_levels: Levels offered by the selected departments.
    """

    spec: EligibilitySpecModel
    applied: bool
    issue: EligibilityIssue | None = None
    college_states: dict[str, CollegeSelectionState]
    available_levels: list[str]
