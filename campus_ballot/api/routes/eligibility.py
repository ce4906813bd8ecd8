"""Eligibility builder API routes.

Stateless: the client sends the current spec and gets back the spec
after one operation, together with each college's derived tri-state.
"""

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException

from campus_ballot.api.dependencies.ballot import get_eligibility_builder
from campus_ballot.api.models.eligibility import (
    EligibilityOperationRequest,
    EligibilityOperationResponse,
    EligibilitySpecModel,
)
from campus_ballot.domain.models.eligibility import EligibilityChange, EligibilitySpec
from campus_ballot.domain.services.eligibility_builder import EligibilityBuilder

router = APIRouter(prefix="/v1/eligibility", tags=["eligibility"])


class EligibilityOperation(str, Enum):
    TOGGLE_DEPARTMENT = "toggle-department"
    TOGGLE_COLLEGE = "toggle-college"
    TOGGLE_LEVEL = "toggle-level"
    SELECT_ALL = "select-all"
    CLEAR = "clear"
    PRUNE_LEVELS = "prune-levels"


_TARGETED = {
    EligibilityOperation.TOGGLE_DEPARTMENT,
    EligibilityOperation.TOGGLE_COLLEGE,
    EligibilityOperation.TOGGLE_LEVEL,
}


def apply_operation(
    builder: EligibilityBuilder,
    operation: EligibilityOperation,
    spec: EligibilitySpec,
    target: str | None,
) -> EligibilityChange:
    """Dispatch one builder operation."""
    if operation == EligibilityOperation.TOGGLE_DEPARTMENT:
        return builder.toggle_department(spec, target)
    if operation == EligibilityOperation.TOGGLE_COLLEGE:
        return builder.toggle_college(spec, target)
    if operation == EligibilityOperation.TOGGLE_LEVEL:
        return builder.toggle_level(spec, target)
    if operation == EligibilityOperation.SELECT_ALL:
        return builder.select_all_departments(spec)
    if operation == EligibilityOperation.CLEAR:
        return builder.clear(spec)
    return builder.prune_levels(spec)


@router.post(
    "/{operation}",
    response_model=EligibilityOperationResponse,
    responses={422: {"description": "Toggle operation without a target"}},
    summary="Apply an eligibility builder operation",
)
async def apply_eligibility_operation(
    operation: EligibilityOperation,
    request_data: EligibilityOperationRequest,
    builder: EligibilityBuilder = Depends(get_eligibility_builder),
) -> EligibilityOperationResponse:
    """Apply one operation and return the new spec with derived state.

    Refused operations (unknown department or college, unavailable
    level) return 200 with ``applied: false`` and the unchanged spec.
    """
    if operation in _TARGETED and not request_data.target:
        raise HTTPException(
            status_code=422,
            detail={
                "type": "urn:campus-ballot:eligibility:missing-target",
                "title": "Missing Target",
                "status": 422,
                "detail": f"Operation {operation.value} requires a target",
            },
        )

    change = apply_operation(
        builder, operation, request_data.spec.to_domain(), request_data.target
    )

    return EligibilityOperationResponse(
        spec=EligibilitySpecModel(**change.spec.to_dict()),
        applied=change.applied,
        issue=change.issue,
        college_states=builder.college_states(change.spec),
        available_levels=sorted(builder.available_levels(change.spec)),
    )
