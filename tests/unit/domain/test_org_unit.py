"""Unit tests for the org-unit directory."""

from __future__ import annotations

import pytest

from campus_ballot.domain.models.org_unit import College, Department, OrgUnitDirectory


class TestOrgUnitDirectory:
    """Tests for directory lookups."""

    def test_lookup_tables(self, directory: OrgUnitDirectory) -> None:
        assert len(directory) == 3
        assert directory.get_college("SCI").name == "College of Science"
        assert directory.get_department("EEE").college_id == "ENG"
        assert directory.get_department("BIO") is None
        assert directory.has_department("MTH")

    def test_all_department_ids(self, directory: OrgUnitDirectory) -> None:
        assert directory.all_department_ids() == frozenset({"CS", "MTH", "EEE"})

    def test_levels_for_ignores_unknown(self, directory: OrgUnitDirectory) -> None:
        assert directory.levels_for({"MTH", "BIO"}) == frozenset({"100", "200", "300"})

    def test_unknown_departments(self, directory: OrgUnitDirectory) -> None:
        assert directory.unknown_departments({"CS", "BIO"}) == frozenset({"BIO"})

    def test_college_department_ids(self, directory: OrgUnitDirectory) -> None:
        assert directory.get_college("SCI").department_ids == frozenset({"CS", "MTH"})
        assert directory.get_college("ARTS").department_ids == frozenset()


class TestOrgUnitValidation:
    """Tests for construction-time checks."""

    def test_duplicate_department_id(self) -> None:
        cs = Department("CS", "CSC", "Computer Science", "SCI")
        cs_eng = Department("CS", "CSE", "Computer Engineering", "ENG")

        with pytest.raises(ValueError, match="Duplicate department"):
            OrgUnitDirectory(
                [College("SCI", "SCI", "Science", (cs,)), College("ENG", "ENG", "Eng", (cs_eng,))]
            )

    def test_duplicate_college_id(self) -> None:
        with pytest.raises(ValueError, match="Duplicate college"):
            OrgUnitDirectory([College("SCI", "S", "A"), College("SCI", "S", "B")])

    def test_department_listed_under_wrong_college(self) -> None:
        with pytest.raises(ValueError, match="declares college"):
            College("SCI", "SCI", "Science", (Department("EEE", "EEE", "EE", "ENG"),))

    def test_levels_are_frozen(self) -> None:
        department = Department("CS", "CSC", "Computer Science", "SCI", ["100", "200"])

        assert department.available_levels == frozenset({"100", "200"})
