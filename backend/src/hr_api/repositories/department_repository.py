"""Department repository."""

from collections import defaultdict
from uuid import UUID

from sqlalchemy import Select, delete, false, func, or_, select

from hr_api.models.domain.filters import DepartmentQueryFilter
from hr_api.models.orm.department import DepartmentORM
from hr_api.models.orm.employee import EmployeeORM
from hr_api.models.orm.membership import DepartmentMembershipORM
from hr_api.repositories.base import BaseRepository


class DepartmentRepository(BaseRepository[DepartmentORM]):
    """Repository for department and membership operations."""

    model = DepartmentORM

    @staticmethod
    def _apply_filter(query: Select, query_filter: DepartmentQueryFilter) -> Select:
        """Translate an access-policy filter into WHERE clauses."""
        if query_filter.deny_all:
            return query.where(false())

        if query_filter.status is not None:
            query = query.where(DepartmentORM.status == query_filter.status)

        if query_filter.member_id is not None:
            is_member = (
                select(DepartmentMembershipORM.id)
                .where(
                    DepartmentMembershipORM.department_id == DepartmentORM.id,
                    DepartmentMembershipORM.employee_id == query_filter.member_id,
                )
                .exists()
            )
            if query_filter.include_managed:
                query = query.where(
                    or_(is_member, DepartmentORM.manager_id == query_filter.member_id)
                )
            else:
                query = query.where(is_member)

        return query

    async def list_filtered(self, query_filter: DepartmentQueryFilter) -> list[DepartmentORM]:
        """Get departments matching an access-policy filter, ordered by name."""
        query = self._apply_filter(select(DepartmentORM), query_filter)
        result = await self.session.execute(query.order_by(DepartmentORM.name.asc()))
        return list(result.scalars().all())

    async def count_managed_by(
        self,
        employee_id: UUID,
        exclude_department_id: UUID | None = None,
    ) -> int:
        """Count departments managed by an employee.

        Args:
            employee_id: Employee UUID
            exclude_department_id: Department to leave out of the count

        Returns:
            Number of managed departments
        """
        query = (
            select(func.count())
            .select_from(DepartmentORM)
            .where(DepartmentORM.manager_id == employee_id)
        )
        if exclude_department_id is not None:
            query = query.where(DepartmentORM.id != exclude_department_id)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def get_members(self, department_id: UUID) -> list[EmployeeORM]:
        """Get the member employees of a department, ordered by first name."""
        result = await self.session.execute(
            select(EmployeeORM)
            .join(DepartmentMembershipORM, DepartmentMembershipORM.employee_id == EmployeeORM.id)
            .where(DepartmentMembershipORM.department_id == department_id)
            .order_by(EmployeeORM.first_name.asc())
        )
        return list(result.scalars().all())

    async def add_member(self, department_id: UUID, employee_id: UUID) -> DepartmentMembershipORM:
        """Add an employee to a department.

        Raises:
            IntegrityError: If the employee is already a member
        """
        membership = DepartmentMembershipORM(
            department_id=department_id,
            employee_id=employee_id,
        )
        self.session.add(membership)
        await self.session.flush()
        return membership

    async def remove_member(self, department_id: UUID, employee_id: UUID) -> bool:
        """Remove an employee from a department.

        Returns:
            True if a membership was deleted
        """
        result = await self.session.execute(
            delete(DepartmentMembershipORM).where(
                DepartmentMembershipORM.department_id == department_id,
                DepartmentMembershipORM.employee_id == employee_id,
            )
        )
        return result.rowcount > 0

    async def get_for_employees(
        self,
        employee_ids: list[UUID],
    ) -> dict[UUID, list[DepartmentORM]]:
        """Get the departments each employee belongs to, in one query.

        Args:
            employee_ids: Employee UUIDs

        Returns:
            Dict mapping employee ID to their departments, ordered by name
        """
        if not employee_ids:
            return {}
        result = await self.session.execute(
            select(DepartmentMembershipORM.employee_id, DepartmentORM)
            .join(DepartmentORM, DepartmentORM.id == DepartmentMembershipORM.department_id)
            .where(DepartmentMembershipORM.employee_id.in_(set(employee_ids)))
            .order_by(DepartmentORM.name.asc())
        )
        by_employee: dict[UUID, list[DepartmentORM]] = defaultdict(list)
        for employee_id, department in result.all():
            by_employee[employee_id].append(department)
        return dict(by_employee)
