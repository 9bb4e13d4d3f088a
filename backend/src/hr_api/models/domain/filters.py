"""Query filters produced by the access policy and consumed by repositories."""

from dataclasses import dataclass
from uuid import UUID

from hr_api.models.domain.status import RecordStatus


@dataclass(frozen=True)
class EmployeeQueryFilter:
    """Conditions an employee row must satisfy; all set conditions are ANDed.

    Attributes:
        status: Only rows with this status
        manager_id: Only direct reports of this employee
        department_id: Only members or the manager of this department
        only_id: Only the row with this id
        self_or_reports_of: Only this employee and their direct reports
        roster_manager_id: Widens ``self_or_reports_of`` to the whole roster of
            ``department_id`` when that department is managed by this employee
        deny_all: Match nothing
    """

    status: RecordStatus | None = None
    manager_id: UUID | None = None
    department_id: UUID | None = None
    only_id: UUID | None = None
    self_or_reports_of: UUID | None = None
    roster_manager_id: UUID | None = None
    deny_all: bool = False


@dataclass(frozen=True)
class DepartmentQueryFilter:
    """Conditions a department row must satisfy.

    Attributes:
        status: Only rows with this status
        member_id: Only departments this employee belongs to
        include_managed: Also match departments managed by ``member_id``
        deny_all: Match nothing
    """

    status: RecordStatus | None = None
    member_id: UUID | None = None
    include_managed: bool = False
    deny_all: bool = False
