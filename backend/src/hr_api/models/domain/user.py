"""User and caller domain models."""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserRole(StrEnum):
    """Closed set of user roles."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class Caller(BaseModel):
    """The authenticated identity making a request.

    Passed explicitly to every service operation; nothing reads the
    identity from ambient request state.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    user_id: UUID
    role: UserRole
    employee_id: UUID | None = None
    email: str | None = None
    name: str | None = None

    def is_admin(self) -> bool:
        """Check if caller is an admin."""
        return self.role == UserRole.ADMIN

    def is_manager(self) -> bool:
        """Check if caller holds the manager role."""
        return self.role == UserRole.MANAGER
