"""User repository."""

from uuid import UUID

from sqlalchemy import select

from hr_api.models.domain.user import UserRole
from hr_api.models.orm.user import UserORM
from hr_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserORM]):
    """Repository for login accounts."""

    model = UserORM

    async def get_by_email(self, email: str) -> UserORM | None:
        """Get user by email.

        Args:
            email: User email address

        Returns:
            UserORM or None if not found
        """
        result = await self.session.execute(
            select(UserORM).where(UserORM.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_by_employee_id(self, employee_id: UUID) -> UserORM | None:
        """Get the user linked to an employee.

        Args:
            employee_id: Employee UUID

        Returns:
            UserORM or None if the employee has no account
        """
        result = await self.session.execute(
            select(UserORM).where(UserORM.employee_id == employee_id)
        )
        return result.scalar_one_or_none()

    async def get_by_employee_ids(self, employee_ids: list[UUID]) -> dict[UUID, UserORM]:
        """Get the users linked to several employees, keyed by employee ID."""
        if not employee_ids:
            return {}
        result = await self.session.execute(
            select(UserORM).where(UserORM.employee_id.in_(set(employee_ids)))
        )
        return {user.employee_id: user for user in result.scalars().all()}

    async def set_role(self, user: UserORM, role: UserRole) -> UserORM:
        """Change a user's role.

        Args:
            user: User to update
            role: New role

        Returns:
            Updated UserORM
        """
        return await self.update(user, role=role)
