"""Management graph planner tests: role transitions and cycle detection."""

from uuid import uuid4

from hr_api.models.domain.user import UserRole
from hr_api.services.management_graph import (
    GraphSnapshot,
    ManagerStanding,
    RoleChange,
    find_manager_cycle,
    plan_department_created,
    plan_manager_change,
)


def snapshot_of(*standings: ManagerStanding) -> GraphSnapshot:
    return GraphSnapshot(standings={s.employee_id: s for s in standings})


class TestDepartmentCreated:
    """Promotion when a department gets its first manager."""

    def test_employee_promoted(self) -> None:
        manager = uuid4()
        snapshot = snapshot_of(ManagerStanding(manager, UserRole.EMPLOYEE, managed_departments=1))

        assert plan_department_created(manager, snapshot) == [
            RoleChange(manager, UserRole.EMPLOYEE, UserRole.MANAGER)
        ]

    def test_manager_and_admin_unchanged(self) -> None:
        for role in (UserRole.MANAGER, UserRole.ADMIN):
            manager = uuid4()
            snapshot = snapshot_of(ManagerStanding(manager, role, managed_departments=1))
            assert plan_department_created(manager, snapshot) == []

    def test_employee_without_user_ignored(self) -> None:
        manager = uuid4()
        snapshot = snapshot_of(ManagerStanding(manager, None))
        assert plan_department_created(manager, snapshot) == []


class TestManagerChange:
    """Promote the new manager, demote the old one when idle."""

    def test_swap_promotes_new_and_demotes_old(self) -> None:
        old, new = uuid4(), uuid4()
        snapshot = snapshot_of(
            ManagerStanding(old, UserRole.MANAGER),
            ManagerStanding(new, UserRole.EMPLOYEE, managed_departments=1),
        )

        assert plan_manager_change(old, new, snapshot) == [
            RoleChange(new, UserRole.EMPLOYEE, UserRole.MANAGER),
            RoleChange(old, UserRole.MANAGER, UserRole.EMPLOYEE),
        ]

    def test_old_manager_with_other_department_kept(self) -> None:
        old, new = uuid4(), uuid4()
        snapshot = snapshot_of(
            ManagerStanding(old, UserRole.MANAGER, managed_departments=1),
            ManagerStanding(new, UserRole.MANAGER),
        )
        assert plan_manager_change(old, new, snapshot) == []

    def test_old_manager_with_direct_reports_kept(self) -> None:
        old, new = uuid4(), uuid4()
        snapshot = snapshot_of(
            ManagerStanding(old, UserRole.MANAGER, direct_reports=2),
            ManagerStanding(new, UserRole.EMPLOYEE),
        )
        assert plan_manager_change(old, new, snapshot) == [
            RoleChange(new, UserRole.EMPLOYEE, UserRole.MANAGER)
        ]

    def test_admin_never_demoted(self) -> None:
        old, new = uuid4(), uuid4()
        snapshot = snapshot_of(
            ManagerStanding(old, UserRole.ADMIN),
            ManagerStanding(new, UserRole.ADMIN),
        )
        assert plan_manager_change(old, new, snapshot) == []

    def test_same_manager_is_a_no_op(self) -> None:
        manager = uuid4()
        snapshot = snapshot_of(ManagerStanding(manager, UserRole.EMPLOYEE))
        assert plan_manager_change(manager, manager, snapshot) == []

    def test_cleared_manager_only_demotes(self) -> None:
        old = uuid4()
        snapshot = snapshot_of(ManagerStanding(old, UserRole.MANAGER))
        assert plan_manager_change(old, None, snapshot) == [
            RoleChange(old, UserRole.MANAGER, UserRole.EMPLOYEE)
        ]


class TestFindManagerCycle:
    """Walking up the manager chain."""

    def test_no_cycle_for_unrelated_manager(self) -> None:
        a, b, c = uuid4(), uuid4(), uuid4()
        index = {a: None, b: a, c: None}
        assert not find_manager_cycle(index, c, b)

    def test_self_assignment_is_a_cycle(self) -> None:
        a = uuid4()
        assert find_manager_cycle({a: None}, a, a)

    def test_indirect_cycle_detected(self) -> None:
        """a manages b, b manages c: making c the manager of a closes a loop."""
        a, b, c = uuid4(), uuid4(), uuid4()
        index = {a: None, b: a, c: b}
        assert find_manager_cycle(index, a, c)

    def test_existing_loop_elsewhere_terminates(self) -> None:
        a, b, c = uuid4(), uuid4(), uuid4()
        index = {a: b, b: a, c: None}
        assert not find_manager_cycle(index, c, a)

    def test_clearing_manager_never_cycles(self) -> None:
        a = uuid4()
        assert not find_manager_cycle({a: None}, a, None)
