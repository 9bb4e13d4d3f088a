"""Management graph planning: role transitions and reporting cycles.

The management graph is the union of direct-report links
(``Employee.manager_id``) and department-manager links
(``Department.manager_id``). A user's role has to follow it: whoever manages
a department is at least a MANAGER, and a MANAGER left with no department
and no direct report goes back to EMPLOYEE. ADMIN is never granted or
revoked here.

Planning is split from storage. ``RoleTransitionService`` takes a fresh
snapshot inside the request transaction, the functions below decide what
changes, and the service applies them.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from uuid import UUID

from hr_api.models.domain.user import UserRole


@dataclass(frozen=True)
class ManagerStanding:
    """Where one employee sits in the management graph.

    Attributes:
        employee_id: Employee UUID
        role: Role of the linked user, None if the employee has no user
        managed_departments: Departments this employee manages (after the
            mutation, and excluding the department being reassigned)
        direct_reports: Employees whose manager is this employee
    """

    employee_id: UUID
    role: UserRole | None
    managed_departments: int = 0
    direct_reports: int = 0

    @property
    def still_manages(self) -> bool:
        """Whether the employee manages anything at all."""
        return self.managed_departments > 0 or self.direct_reports > 0


@dataclass(frozen=True)
class GraphSnapshot:
    """Standings of the employees touched by one mutation."""

    standings: Mapping[UUID, ManagerStanding] = field(default_factory=dict)

    def get(self, employee_id: UUID) -> ManagerStanding | None:
        """Get the standing of an employee, if it was captured."""
        return self.standings.get(employee_id)


@dataclass(frozen=True)
class RoleChange:
    """A role change to apply to the user linked to an employee."""

    employee_id: UUID
    old_role: UserRole
    new_role: UserRole


def _promotion(standing: ManagerStanding | None) -> RoleChange | None:
    """Promote a new manager: EMPLOYEE becomes MANAGER."""
    if standing is None or standing.role is None:
        return None
    match standing.role:
        case UserRole.EMPLOYEE:
            return RoleChange(standing.employee_id, UserRole.EMPLOYEE, UserRole.MANAGER)
        case UserRole.MANAGER | UserRole.ADMIN:
            return None


def _demotion(standing: ManagerStanding | None) -> RoleChange | None:
    """Demote a former manager who no longer manages anything."""
    if standing is None or standing.role is None:
        return None
    match standing.role:
        case UserRole.MANAGER:
            if standing.still_manages:
                return None
            return RoleChange(standing.employee_id, UserRole.MANAGER, UserRole.EMPLOYEE)
        case UserRole.EMPLOYEE | UserRole.ADMIN:
            return None


def plan_department_created(manager_id: UUID, snapshot: GraphSnapshot) -> list[RoleChange]:
    """Plan role changes after a department is created.

    Args:
        manager_id: Manager of the new department
        snapshot: Graph snapshot containing the manager

    Returns:
        Role changes to apply (possibly empty)
    """
    change = _promotion(snapshot.get(manager_id))
    return [change] if change else []


def plan_manager_change(
    old_manager_id: UUID | None,
    new_manager_id: UUID | None,
    snapshot: GraphSnapshot,
) -> list[RoleChange]:
    """Plan role changes after a manager link moves from one employee to another.

    The new manager is promoted if needed; the old manager is demoted if the
    snapshot shows they no longer manage any department or direct report.
    Nothing changes when both ends are the same employee.

    Args:
        old_manager_id: Previous manager, if any
        new_manager_id: New manager, if any
        snapshot: Post-mutation snapshot containing both managers

    Returns:
        Role changes to apply (possibly empty)
    """
    if old_manager_id == new_manager_id:
        return []

    changes: list[RoleChange] = []
    if new_manager_id is not None:
        promotion = _promotion(snapshot.get(new_manager_id))
        if promotion:
            changes.append(promotion)
    if old_manager_id is not None:
        demotion = _demotion(snapshot.get(old_manager_id))
        if demotion:
            changes.append(demotion)
    return changes


def find_manager_cycle(
    manager_index: Mapping[UUID, UUID | None],
    employee_id: UUID,
    new_manager_id: UUID | None,
) -> bool:
    """Check whether making ``new_manager_id`` the manager of ``employee_id`` closes a loop.

    Walks up the manager chain starting at the new manager; reaching the
    employee again means a cycle. Existing cycles elsewhere in the index
    terminate the walk instead of looping forever.

    Args:
        manager_index: Employee ID to manager ID for every employee
        employee_id: Employee being reassigned
        new_manager_id: Proposed manager

    Returns:
        True if the assignment would create a cycle
    """
    visited: set[UUID] = set()
    current = new_manager_id
    while current is not None and current not in visited:
        if current == employee_id:
            return True
        visited.add(current)
        current = manager_index.get(current)
    return False
