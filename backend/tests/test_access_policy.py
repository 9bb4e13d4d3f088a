"""Access policy tests: query filters, record predicates and guards."""

from types import SimpleNamespace
from uuid import uuid4

import pytest

from hr_api.exceptions import ForbiddenError
from hr_api.models.domain.filters import DepartmentQueryFilter, EmployeeQueryFilter
from hr_api.models.domain.status import RecordStatus
from hr_api.models.domain.user import Caller, UserRole
from hr_api.security import access_policy


def make_caller(role: UserRole, employee_id=None) -> Caller:
    return Caller(user_id=uuid4(), role=role, employee_id=employee_id)


def make_employee(manager_id=None):
    return SimpleNamespace(id=uuid4(), manager_id=manager_id)


class TestEmployeeQueryFilter:
    """Employee list filters per role."""

    def test_admin_has_no_scope(self) -> None:
        manager_id = uuid4()
        caller = make_caller(UserRole.ADMIN)

        result = access_policy.employee_query_filter(
            caller, status=RecordStatus.ACTIVE, manager_id=manager_id
        )

        assert result == EmployeeQueryFilter(status=RecordStatus.ACTIVE, manager_id=manager_id)

    def test_manager_scoped_to_self_and_reports(self) -> None:
        me = uuid4()
        caller = make_caller(UserRole.MANAGER, me)

        result = access_policy.employee_query_filter(caller)

        assert result.self_or_reports_of == me
        assert result.only_id is None
        assert not result.deny_all

    def test_manager_filter_narrows_scope(self) -> None:
        """An explicit manager filter is ANDed with the manager's own scope."""
        me, other = uuid4(), uuid4()
        caller = make_caller(UserRole.MANAGER, me)

        result = access_policy.employee_query_filter(caller, manager_id=other)

        assert result.manager_id == other
        assert result.self_or_reports_of == me

    def test_employee_scoped_to_self(self) -> None:
        me = uuid4()
        department_id = uuid4()
        caller = make_caller(UserRole.EMPLOYEE, me)

        result = access_policy.employee_query_filter(caller, department_id=department_id)

        assert result.only_id == me
        assert result.department_id == department_id

    def test_manager_department_filter_allows_managed_roster(self) -> None:
        me, department_id = uuid4(), uuid4()
        caller = make_caller(UserRole.MANAGER, me)

        with_department = access_policy.employee_query_filter(caller, department_id=department_id)
        without_department = access_policy.employee_query_filter(caller)

        assert with_department.roster_manager_id == me
        assert with_department.self_or_reports_of == me
        assert without_department.roster_manager_id is None

    def test_employee_manager_filter_ignored(self) -> None:
        me = uuid4()
        caller = make_caller(UserRole.EMPLOYEE, me)

        result = access_policy.employee_query_filter(caller, manager_id=uuid4())

        assert result == EmployeeQueryFilter(only_id=me)

    @pytest.mark.parametrize("role", [UserRole.MANAGER, UserRole.EMPLOYEE])
    def test_caller_without_employee_sees_nothing(self, role: UserRole) -> None:
        result = access_policy.employee_query_filter(make_caller(role))
        assert result.deny_all


class TestDepartmentQueryFilter:
    """Department list filters per role."""

    def test_admin_has_no_scope(self) -> None:
        result = access_policy.department_query_filter(
            make_caller(UserRole.ADMIN), status=RecordStatus.INACTIVE
        )
        assert result == DepartmentQueryFilter(status=RecordStatus.INACTIVE)

    def test_manager_sees_managed_and_member_departments(self) -> None:
        me = uuid4()
        result = access_policy.department_query_filter(make_caller(UserRole.MANAGER, me))
        assert result == DepartmentQueryFilter(member_id=me, include_managed=True)

    def test_employee_sees_member_departments(self) -> None:
        me = uuid4()
        result = access_policy.department_query_filter(make_caller(UserRole.EMPLOYEE, me))
        assert result == DepartmentQueryFilter(member_id=me)

    def test_caller_without_employee_sees_nothing(self) -> None:
        result = access_policy.department_query_filter(make_caller(UserRole.EMPLOYEE))
        assert result.deny_all


class TestEmployeeVisibility:
    """Read-by-id predicate and guard."""

    def test_admin_sees_anyone(self) -> None:
        assert access_policy.can_view_employee(make_caller(UserRole.ADMIN), make_employee())

    def test_manager_sees_self_and_direct_reports(self) -> None:
        me = uuid4()
        caller = make_caller(UserRole.MANAGER, me)

        assert access_policy.can_view_employee(caller, SimpleNamespace(id=me, manager_id=None))
        assert access_policy.can_view_employee(caller, make_employee(manager_id=me))
        assert not access_policy.can_view_employee(caller, make_employee(manager_id=uuid4()))

    def test_employee_cannot_read_others(self) -> None:
        """An employee reading someone outside their scope is forbidden."""
        me = uuid4()
        caller = make_caller(UserRole.EMPLOYEE, me)
        other = make_employee(manager_id=uuid4())

        with pytest.raises(ForbiddenError):
            access_policy.authorize_employee_read(caller, other)

    def test_employee_cannot_read_own_reports(self) -> None:
        """Direct reports are visible only to callers holding the manager role."""
        me = uuid4()
        caller = make_caller(UserRole.EMPLOYEE, me)
        assert not access_policy.can_view_employee(caller, make_employee(manager_id=me))


class TestDepartmentVisibility:
    """Department read predicate."""

    def test_member_sees_department(self) -> None:
        me = uuid4()
        department = SimpleNamespace(id=uuid4(), manager_id=uuid4())
        caller = make_caller(UserRole.EMPLOYEE, me)

        assert access_policy.can_view_department(caller, department, {me})
        assert not access_policy.can_view_department(caller, department, set())

    def test_manager_sees_managed_department_without_membership(self) -> None:
        me = uuid4()
        department = SimpleNamespace(id=uuid4(), manager_id=me)

        assert access_policy.can_view_department(make_caller(UserRole.MANAGER, me), department, set())

    def test_authorize_department_read_raises(self) -> None:
        department = SimpleNamespace(id=uuid4(), manager_id=uuid4())
        with pytest.raises(ForbiddenError) as exc_info:
            access_policy.authorize_department_read(
                make_caller(UserRole.MANAGER, uuid4()), department, set()
            )
        assert exc_info.value.details == {"department_id": str(department.id)}


class TestEmployeeUpdateAuthorization:
    """Write authorization for employee updates."""

    def test_self_edit_allowed_for_any_role(self) -> None:
        me = uuid4()
        target = SimpleNamespace(id=me, manager_id=None)
        assert access_policy.can_update_employee(make_caller(UserRole.EMPLOYEE, me), target)

    def test_manager_edits_direct_report(self) -> None:
        me = uuid4()
        assert access_policy.can_update_employee(
            make_caller(UserRole.MANAGER, me), make_employee(manager_id=me)
        )

    def test_employee_cannot_edit_report_without_manager_role(self) -> None:
        me = uuid4()
        with pytest.raises(ForbiddenError):
            access_policy.authorize_employee_update(
                make_caller(UserRole.EMPLOYEE, me), make_employee(manager_id=me)
            )

    def test_manager_cannot_edit_unrelated_employee(self) -> None:
        with pytest.raises(ForbiddenError):
            access_policy.authorize_employee_update(
                make_caller(UserRole.MANAGER, uuid4()), make_employee(manager_id=uuid4())
            )

    def test_admin_only_fields_dropped_for_non_admin(self) -> None:
        requested = {"first_name", "email_address", "manager_id", "status"}

        assert access_policy.writable_employee_fields(
            make_caller(UserRole.MANAGER, uuid4()), requested
        ) == {"first_name", "email_address"}
        assert access_policy.writable_employee_fields(
            make_caller(UserRole.ADMIN), requested
        ) == requested


class TestRequireAdmin:
    """Admin-only operations."""

    @pytest.mark.parametrize("role", [UserRole.MANAGER, UserRole.EMPLOYEE])
    def test_non_admin_forbidden(self, role: UserRole) -> None:
        with pytest.raises(ForbiddenError) as exc_info:
            access_policy.require_admin(make_caller(role, uuid4()), "department.create")
        assert exc_info.value.message == "Unauthorized operation"

    def test_admin_allowed(self) -> None:
        access_policy.require_admin(make_caller(UserRole.ADMIN), "department.create")
