"""User ORM model."""

from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.models.domain.user import UserRole
from hr_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class UserORM(Base, UUIDMixin, TimestampMixin):
    """Login account, linked to at most one employee."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", native_enum=False, length=20),
        default=UserRole.EMPLOYEE,
        nullable=False,
    )
    employee_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )

    employee: Mapped["EmployeeORM | None"] = relationship(
        "EmployeeORM",
        back_populates="user",
        lazy="raise",
    )


from hr_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
