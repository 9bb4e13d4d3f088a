"""Employee repository."""

from uuid import UUID

from sqlalchemy import Select, false, func, or_, select
from sqlalchemy.orm import aliased

from hr_api.models.domain.filters import EmployeeQueryFilter
from hr_api.models.domain.status import RecordStatus
from hr_api.models.domain.user import UserRole
from hr_api.models.orm.department import DepartmentORM
from hr_api.models.orm.employee import EmployeeORM
from hr_api.models.orm.membership import DepartmentMembershipORM
from hr_api.models.orm.user import UserORM
from hr_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def get_by_ids(self, ids: list[UUID]) -> dict[UUID, EmployeeORM]:
        """Get multiple employees by their IDs in a single query.

        Args:
            ids: List of employee UUIDs

        Returns:
            Dict mapping employee ID to EmployeeORM
        """
        if not ids:
            return {}
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.id.in_(set(ids)))
        )
        return {emp.id: emp for emp in result.scalars().all()}

    async def get_by_email(self, email: str) -> EmployeeORM | None:
        """Get employee by email address.

        Args:
            email: Employee email address

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.email_address == email.lower())
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _apply_filter(query: Select, query_filter: EmployeeQueryFilter) -> Select:
        """Translate an access-policy filter into WHERE clauses."""
        if query_filter.deny_all:
            return query.where(false())

        if query_filter.status is not None:
            query = query.where(EmployeeORM.status == query_filter.status)

        if query_filter.manager_id is not None:
            query = query.where(EmployeeORM.manager_id == query_filter.manager_id)

        if query_filter.only_id is not None:
            query = query.where(EmployeeORM.id == query_filter.only_id)

        if query_filter.self_or_reports_of is not None:
            scope = or_(
                EmployeeORM.id == query_filter.self_or_reports_of,
                EmployeeORM.manager_id == query_filter.self_or_reports_of,
            )
            if query_filter.roster_manager_id is not None and query_filter.department_id is not None:
                manages_department = (
                    select(DepartmentORM.id)
                    .where(
                        DepartmentORM.id == query_filter.department_id,
                        DepartmentORM.manager_id == query_filter.roster_manager_id,
                    )
                    .exists()
                )
                scope = or_(scope, manages_department)
            query = query.where(scope)

        if query_filter.department_id is not None:
            # Members of the department, plus its manager
            is_member = (
                select(DepartmentMembershipORM.id)
                .where(
                    DepartmentMembershipORM.employee_id == EmployeeORM.id,
                    DepartmentMembershipORM.department_id == query_filter.department_id,
                )
                .exists()
            )
            is_manager = (
                select(DepartmentORM.id)
                .where(
                    DepartmentORM.id == query_filter.department_id,
                    DepartmentORM.manager_id == EmployeeORM.id,
                )
                .exists()
            )
            query = query.where(or_(is_member, is_manager))

        return query

    async def list_filtered(self, query_filter: EmployeeQueryFilter) -> list[EmployeeORM]:
        """Get employees matching an access-policy filter.

        Args:
            query_filter: Filter built by the access policy

        Returns:
            Employees ordered by first and last name
        """
        query = self._apply_filter(select(EmployeeORM), query_filter)
        query = query.order_by(EmployeeORM.first_name.asc(), EmployeeORM.last_name.asc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_direct_reports(self, employee_id: UUID) -> int:
        """Count employees whose direct manager is this employee."""
        result = await self.session.execute(
            select(func.count())
            .select_from(EmployeeORM)
            .where(EmployeeORM.manager_id == employee_id)
        )
        return result.scalar_one()

    async def get_manager_index(self) -> dict[UUID, UUID | None]:
        """Get the manager of every employee, keyed by employee ID."""
        result = await self.session.execute(
            select(EmployeeORM.id, EmployeeORM.manager_id)
        )
        return {row.id: row.manager_id for row in result.all()}

    async def get_managers(self) -> list[EmployeeORM]:
        """Get employees eligible to be picked as someone's manager.

        An employee qualifies if they have at least one direct report, their
        user holds the MANAGER or ADMIN role, or they manage a department.

        Returns:
            Employees ordered by first name
        """
        subordinate = aliased(EmployeeORM)
        has_reports = select(subordinate.id).where(subordinate.manager_id == EmployeeORM.id).exists()
        has_manager_role = (
            select(UserORM.id)
            .where(
                UserORM.employee_id == EmployeeORM.id,
                UserORM.role.in_([UserRole.MANAGER, UserRole.ADMIN]),
            )
            .exists()
        )
        manages_department = (
            select(DepartmentORM.id).where(DepartmentORM.manager_id == EmployeeORM.id).exists()
        )

        result = await self.session.execute(
            select(EmployeeORM)
            .where(or_(has_reports, has_manager_role, manages_department))
            .order_by(EmployeeORM.first_name.asc())
        )
        return list(result.scalars().all())

    async def get_active(self) -> list[EmployeeORM]:
        """Get all active employees ordered by first name."""
        result = await self.session.execute(
            select(EmployeeORM)
            .where(EmployeeORM.status == RecordStatus.ACTIVE)
            .order_by(EmployeeORM.first_name.asc())
        )
        return list(result.scalars().all())
