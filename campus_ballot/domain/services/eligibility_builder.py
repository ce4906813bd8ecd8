"""Eligibility spec builder.

Every operation is pure: it takes a spec value and returns an
EligibilityChange carrying the new spec, or the unchanged spec plus the
issue that prevented the change. The builder never talks to storage;
it only reads the org-unit directory it was created with.

College selection is a derived bulk toggle over departments. The
tri-state shown for a college is recomputed from ``department_ids`` on
every call and is never stored, so it cannot drift from the underlying
set.
"""

from __future__ import annotations

from dataclasses import replace

from campus_ballot.domain.models.eligibility import (
    CollegeSelectionState,
    EligibilityChange,
    EligibilityIssue,
    EligibilitySpec,
)
from campus_ballot.domain.models.org_unit import OrgUnitDirectory


class EligibilityBuilder:
    """Builds EligibilitySpec values against an org-unit directory.

    Example:
        >>> builder = EligibilityBuilder(directory)
        >>> change = builder.toggle_college(EligibilitySpec(), "SCI")
        >>> builder.college_state(change.spec, "SCI")
        <CollegeSelectionState.FULL: 'full'>
    """

    def __init__(self, directory: OrgUnitDirectory) -> None:
        self._directory = directory

    @property
    def directory(self) -> OrgUnitDirectory:
        return self._directory

    def toggle_department(
        self, spec: EligibilitySpec, department_id: str
    ) -> EligibilityChange:
        """Flip membership of one department.

        Levels are left as they are; a level no remaining department
        offers becomes inert and can no longer be toggled. Use
        ``prune_levels`` to drop those.
        """
        if not self._directory.has_department(department_id):
            return EligibilityChange(spec, EligibilityIssue.INVALID_DEPARTMENT)

        departments = set(spec.department_ids)
        departments.symmetric_difference_update({department_id})
        return EligibilityChange(replace(spec, department_ids=frozenset(departments)))

    def toggle_college(
        self, spec: EligibilitySpec, college_id: str
    ) -> EligibilityChange:
        """Select every department of a college, or deselect them all if all are selected."""
        college = self._directory.get_college(college_id)
        if college is None:
            return EligibilityChange(spec, EligibilityIssue.UNKNOWN_COLLEGE)

        college_departments = college.department_ids
        if not college_departments:
            return EligibilityChange(spec)

        if college_departments <= spec.department_ids:
            departments = spec.department_ids - college_departments
        else:
            departments = spec.department_ids | college_departments
        return EligibilityChange(replace(spec, department_ids=departments))

    def college_state(
        self, spec: EligibilitySpec, college_id: str
    ) -> CollegeSelectionState:
        """Derive NONE / PARTIAL / FULL for a college.

        Unknown colleges and colleges without departments are NONE.
        """
        college = self._directory.get_college(college_id)
        if college is None or not college.departments:
            return CollegeSelectionState.NONE

        selected = college.department_ids & spec.department_ids
        if not selected:
            return CollegeSelectionState.NONE
        if selected == college.department_ids:
            return CollegeSelectionState.FULL
        return CollegeSelectionState.PARTIAL

    def college_states(self, spec: EligibilitySpec) -> dict[str, CollegeSelectionState]:
        return {
            college.college_id: self.college_state(spec, college.college_id)
            for college in self._directory.colleges
        }

    def available_levels(self, spec: EligibilitySpec) -> frozenset[str]:
        """Union of levels offered by the currently selected departments."""
        return self._directory.levels_for(spec.department_ids)

    def toggle_level(self, spec: EligibilitySpec, level: str) -> EligibilityChange:
        """Add or remove a level offered by a selected department.

        Levels outside ``available_levels`` are refused in both directions.
        """
        if level not in self.available_levels(spec):
            return EligibilityChange(spec, EligibilityIssue.LEVEL_NOT_AVAILABLE)

        if level in spec.levels:
            return EligibilityChange(replace(spec, levels=spec.levels - {level}))

        return EligibilityChange(replace(spec, levels=spec.levels | {level}))

    def select_all_departments(self, spec: EligibilitySpec) -> EligibilityChange:
        return EligibilityChange(
            replace(spec, department_ids=self._directory.all_department_ids())
        )

    def clear(self, spec: EligibilitySpec) -> EligibilityChange:
        return EligibilityChange(EligibilitySpec())

    def prune_levels(self, spec: EligibilitySpec) -> EligibilityChange:
        """Drop selected levels that no selected department offers."""
        return EligibilityChange(
            replace(spec, levels=spec.levels & self.available_levels(spec))
        )

    def validate(self, spec: EligibilitySpec) -> frozenset[str]:
        """Department ids in the spec that the directory does not know.

        An empty result means every reference resolves.
        """
        return self._directory.unknown_departments(spec.department_ids)
