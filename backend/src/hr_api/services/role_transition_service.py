"""Role transition service: keeps user roles in line with the management graph."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.repositories.department_repository import DepartmentRepository
from hr_api.repositories.employee_repository import EmployeeRepository
from hr_api.repositories.user_repository import UserRepository
from hr_api.services.management_graph import (
    GraphSnapshot,
    ManagerStanding,
    RoleChange,
    plan_department_created,
    plan_manager_change,
)

logger = logging.getLogger(__name__)


class RoleTransitionService:
    """Applies role transitions inside the caller's transaction.

    Must run on the same session as the mutation that triggered it, after
    that mutation has been flushed, so the snapshot reflects the new state.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.department_repo = DepartmentRepository(session)
        self.user_repo = UserRepository(session)

    async def snapshot(
        self,
        employee_ids: list[UUID | None],
        exclude_department_id: UUID | None = None,
    ) -> GraphSnapshot:
        """Read the current standing of some employees from the database.

        Args:
            employee_ids: Employees to capture (None entries are skipped)
            exclude_department_id: Department left out of managed counts

        Returns:
            GraphSnapshot for the planner
        """
        ids = [employee_id for employee_id in dict.fromkeys(employee_ids) if employee_id is not None]
        users = await self.user_repo.get_by_employee_ids(ids)

        standings: dict[UUID, ManagerStanding] = {}
        for employee_id in ids:
            user = users.get(employee_id)
            standings[employee_id] = ManagerStanding(
                employee_id=employee_id,
                role=user.role if user else None,
                managed_departments=await self.department_repo.count_managed_by(
                    employee_id, exclude_department_id=exclude_department_id
                ),
                direct_reports=await self.employee_repo.count_direct_reports(employee_id),
            )
        return GraphSnapshot(standings=standings)

    async def apply(self, changes: list[RoleChange]) -> list[RoleChange]:
        """Write planned role changes.

        A change is skipped if the user's role moved since the snapshot.

        Args:
            changes: Planned role changes

        Returns:
            The changes actually applied
        """
        applied: list[RoleChange] = []
        for change in changes:
            user = await self.user_repo.get_by_employee_id(change.employee_id)
            if user is None or user.role != change.old_role:
                continue
            await self.user_repo.set_role(user, change.new_role)
            logger.info(
                "Role of employee %s changed from %s to %s",
                change.employee_id,
                change.old_role.value,
                change.new_role.value,
            )
            applied.append(change)
        return applied

    async def on_department_created(self, manager_id: UUID) -> list[RoleChange]:
        """Promote the manager of a newly created department."""
        snapshot = await self.snapshot([manager_id])
        return await self.apply(plan_department_created(manager_id, snapshot))

    async def on_department_manager_changed(
        self,
        department_id: UUID,
        old_manager_id: UUID,
        new_manager_id: UUID,
    ) -> list[RoleChange]:
        """Promote the new department manager and re-evaluate the old one.

        Args:
            department_id: Department whose manager changed
            old_manager_id: Previous manager
            new_manager_id: New manager

        Returns:
            Applied role changes
        """
        if old_manager_id == new_manager_id:
            return []
        snapshot = await self.snapshot(
            [new_manager_id, old_manager_id],
            exclude_department_id=department_id,
        )
        return await self.apply(plan_manager_change(old_manager_id, new_manager_id, snapshot))

    async def on_direct_manager_changed(
        self,
        old_manager_id: UUID | None,
        new_manager_id: UUID | None,
    ) -> list[RoleChange]:
        """Promote the new direct manager and re-evaluate the old one.

        Only used when ``role_sync_on_report_change`` is enabled.
        """
        if old_manager_id == new_manager_id:
            return []
        snapshot = await self.snapshot([new_manager_id, old_manager_id])
        return await self.apply(plan_manager_change(old_manager_id, new_manager_id, snapshot))
