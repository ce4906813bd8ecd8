"""Organizational unit directory (college -> department -> level).

The directory is immutable reference data owned by an external
administrative collaborator. The engine only reads it: to validate
eligibility references, to expand a college into its departments, and to
compute which levels the selected departments offer.

The hierarchy is held as explicit lookup tables keyed by string ids, not
as nested dictionaries, so every reference can be checked in O(1).
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Department:
    """A department within a college.

    Attributes:
        department_id: Stable identifier (e.g. "CS").
        code: Short display code.
        name: Human-readable department name.
        college_id: Identifier of the owning college.
        available_levels: Level labels this department offers (e.g. "100").
    """

    department_id: str
    code: str
    name: str
    college_id: str
    available_levels: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.department_id:
            raise ValueError("department_id must be non-empty")
        if not self.college_id:
            raise ValueError(f"Department {self.department_id} has no college_id")
        # Accept any iterable of labels from callers, store a frozenset
        object.__setattr__(self, "available_levels", frozenset(self.available_levels))


@dataclass(frozen=True)
class College:
    """A college and its ordered departments.

    Attributes:
        college_id: Stable identifier.
        code: Short display code (e.g. "COPAS").
        name: Human-readable college name.
        departments: Departments in display order.
    """

    college_id: str
    code: str
    name: str
    departments: tuple[Department, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "departments", tuple(self.departments))
        for department in self.departments:
            if department.college_id != self.college_id:
                raise ValueError(
                    f"Department {department.department_id} declares college "
                    f"{department.college_id} but is listed under {self.college_id}"
                )

    @property
    def department_ids(self) -> frozenset[str]:
        return frozenset(d.department_id for d in self.departments)


class OrgUnitDirectory:
    """Read-only lookup over colleges and departments.

    Example:
        >>> directory = OrgUnitDirectory([
        ...     College("SCI", "SCI", "Science", (
        ...         Department("CS", "CSC", "Computer Science", "SCI", {"100", "200"}),
        ...     )),
        ... ])
        >>> directory.get_department("CS").college_id
        'SCI'
    """

    def __init__(self, colleges: list[College] | tuple[College, ...]) -> None:
        """Build lookup tables from the given colleges.

        Args:
            colleges: Colleges in display order.

        Raises:
            ValueError: If a college or department id is duplicated.
        """
        self._colleges: dict[str, College] = {}
        self._departments: dict[str, Department] = {}

        for college in colleges:
            if college.college_id in self._colleges:
                raise ValueError(f"Duplicate college id: {college.college_id}")
            self._colleges[college.college_id] = college
            for department in college.departments:
                if department.department_id in self._departments:
                    raise ValueError(
                        f"Duplicate department id: {department.department_id}"
                    )
                self._departments[department.department_id] = department

    @property
    def colleges(self) -> tuple[College, ...]:
        return tuple(self._colleges.values())

    @property
    def departments(self) -> tuple[Department, ...]:
        return tuple(self._departments.values())

    def get_college(self, college_id: str) -> College | None:
        return self._colleges.get(college_id)

    def get_department(self, department_id: str) -> Department | None:
        return self._departments.get(department_id)

    def has_department(self, department_id: str) -> bool:
        return department_id in self._departments

    def all_department_ids(self) -> frozenset[str]:
        return frozenset(self._departments)

    def levels_for(self, department_ids: frozenset[str] | set[str]) -> frozenset[str]:
        """Union of levels offered by the given departments.

        Unknown ids contribute nothing.
        """
        levels: set[str] = set()
        for department_id in department_ids:
            department = self._departments.get(department_id)
            if department is not None:
                levels.update(department.available_levels)
        return frozenset(levels)

    def unknown_departments(
        self, department_ids: frozenset[str] | set[str]
    ) -> frozenset[str]:
        return frozenset(d for d in department_ids if d not in self._departments)

    def __len__(self) -> int:
        return len(self._colleges)

    def __repr__(self) -> str:
        return (
            f"OrgUnitDirectory(colleges={len(self._colleges)}, "
            f"departments={len(self._departments)})"
        )
