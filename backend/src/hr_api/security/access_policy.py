"""Access policy: who may see and change which employees and departments.

Every function here is pure. Callers are passed in explicitly, records are
anything exposing the attributes read (ORM rows, domain models or simple
namespaces), and nothing touches the database. Repositories turn the query
filters built here into SQL; services call the ``authorize_*`` helpers,
which raise ``ForbiddenError`` on denial.

Visibility by role:

- ADMIN sees everything.
- MANAGER sees their own employee record and their direct reports, and the
  departments they manage or belong to.
- EMPLOYEE sees their own employee record and the departments they belong to.
"""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from hr_api.exceptions import ForbiddenError
from hr_api.models.domain.filters import DepartmentQueryFilter, EmployeeQueryFilter
from hr_api.models.domain.status import RecordStatus
from hr_api.models.domain.user import Caller, UserRole


class EmployeeRecord(Protocol):
    """Employee attributes the policy reads."""

    id: UUID
    manager_id: UUID | None


class DepartmentRecord(Protocol):
    """Department attributes the policy reads."""

    id: UUID
    manager_id: UUID


# Employee fields that only an admin may change
ADMIN_ONLY_EMPLOYEE_FIELDS = frozenset({"manager_id", "status"})


# ============================================================
#  Read filters
# ============================================================


def employee_query_filter(
    caller: Caller,
    status: RecordStatus | None = None,
    manager_id: UUID | None = None,
    department_id: UUID | None = None,
) -> EmployeeQueryFilter:
    """Build the employee list filter for a caller.

    Explicit filters are ANDed with the caller's scope, so a filter can
    narrow what a non-admin sees but never widen it. The one exception is a
    manager filtering on a department they manage, who sees its whole roster.
    Employees have no direct-manager filter; ``manager_id`` is ignored for them.

    Args:
        caller: Requesting identity
        status: Optional status filter
        manager_id: Optional direct-manager filter
        department_id: Optional department filter (members and manager)

    Returns:
        EmployeeQueryFilter for the repository
    """
    match caller.role:
        case UserRole.ADMIN:
            return EmployeeQueryFilter(
                status=status,
                manager_id=manager_id,
                department_id=department_id,
            )
        case UserRole.MANAGER:
            if caller.employee_id is None:
                return EmployeeQueryFilter(deny_all=True)
            return EmployeeQueryFilter(
                status=status,
                manager_id=manager_id,
                department_id=department_id,
                self_or_reports_of=caller.employee_id,
                roster_manager_id=caller.employee_id if department_id else None,
            )
        case UserRole.EMPLOYEE:
            if caller.employee_id is None:
                return EmployeeQueryFilter(deny_all=True)
            return EmployeeQueryFilter(
                status=status,
                department_id=department_id,
                only_id=caller.employee_id,
            )


def department_query_filter(
    caller: Caller,
    status: RecordStatus | None = None,
) -> DepartmentQueryFilter:
    """Build the department list filter for a caller.

    Args:
        caller: Requesting identity
        status: Optional status filter

    Returns:
        DepartmentQueryFilter for the repository
    """
    match caller.role:
        case UserRole.ADMIN:
            return DepartmentQueryFilter(status=status)
        case UserRole.MANAGER:
            if caller.employee_id is None:
                return DepartmentQueryFilter(deny_all=True)
            return DepartmentQueryFilter(
                status=status,
                member_id=caller.employee_id,
                include_managed=True,
            )
        case UserRole.EMPLOYEE:
            if caller.employee_id is None:
                return DepartmentQueryFilter(deny_all=True)
            return DepartmentQueryFilter(status=status, member_id=caller.employee_id)


# ============================================================
#  Record predicates
# ============================================================


def can_view_employee(caller: Caller, employee: EmployeeRecord) -> bool:
    """Check the employee visibility predicate against one record."""
    match caller.role:
        case UserRole.ADMIN:
            return True
        case UserRole.MANAGER:
            return caller.employee_id is not None and caller.employee_id in (
                employee.id,
                employee.manager_id,
            )
        case UserRole.EMPLOYEE:
            return caller.employee_id is not None and caller.employee_id == employee.id


def can_view_department(
    caller: Caller,
    department: DepartmentRecord,
    member_ids: Collection[UUID],
) -> bool:
    """Check the department visibility predicate against one record.

    Args:
        caller: Requesting identity
        department: Department record
        member_ids: IDs of the department's member employees
    """
    match caller.role:
        case UserRole.ADMIN:
            return True
        case UserRole.MANAGER:
            return caller.employee_id is not None and (
                department.manager_id == caller.employee_id
                or caller.employee_id in member_ids
            )
        case UserRole.EMPLOYEE:
            return caller.employee_id is not None and caller.employee_id in member_ids


def can_update_employee(caller: Caller, employee: EmployeeRecord) -> bool:
    """Admins edit anyone, everyone edits themselves, managers edit direct reports."""
    if caller.is_admin():
        return True
    if caller.employee_id is None:
        return False
    if caller.employee_id == employee.id:
        return True
    return caller.is_manager() and caller.employee_id == employee.manager_id


def can_change_admin_fields(caller: Caller) -> bool:
    """Only admins may change an employee's manager or status."""
    return caller.is_admin()


def writable_employee_fields(caller: Caller, requested: Collection[str]) -> set[str]:
    """Filter requested update fields down to those the caller may change.

    Admin-only fields are dropped silently for other callers.
    """
    if can_change_admin_fields(caller):
        return set(requested)
    return {field for field in requested if field not in ADMIN_ONLY_EMPLOYEE_FIELDS}


# ============================================================
#  Authorization guards
# ============================================================


def require_admin(caller: Caller, operation: str) -> None:
    """Raise ForbiddenError unless the caller is an admin.

    Args:
        caller: Requesting identity
        operation: Operation name, for the error details

    Raises:
        ForbiddenError: If caller is not an admin
    """
    if not caller.is_admin():
        raise ForbiddenError(details={"operation": operation})


def authorize_employee_read(caller: Caller, employee: EmployeeRecord) -> None:
    """Raise ForbiddenError if the employee is outside the caller's scope."""
    if not can_view_employee(caller, employee):
        raise ForbiddenError("Unauthorized access", {"employee_id": str(employee.id)})


def authorize_department_read(
    caller: Caller,
    department: DepartmentRecord,
    member_ids: Collection[UUID],
) -> None:
    """Raise ForbiddenError if the department is outside the caller's scope."""
    if not can_view_department(caller, department, member_ids):
        raise ForbiddenError("Unauthorized access", {"department_id": str(department.id)})


def authorize_employee_update(caller: Caller, employee: EmployeeRecord) -> None:
    """Raise ForbiddenError if the caller may not edit this employee."""
    if not can_update_employee(caller, employee):
        raise ForbiddenError(details={"employee_id": str(employee.id)})
