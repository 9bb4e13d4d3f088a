"""Employee-Department membership junction table ORM model."""

from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class DepartmentMembershipORM(Base, UUIDMixin, TimestampMixin):
    """Employee-Department membership."""

    __tablename__ = "department_memberships"

    employee_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    department_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("departments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    employee: Mapped["EmployeeORM"] = relationship(
        "EmployeeORM",
        back_populates="memberships",
        lazy="raise",
    )
    department: Mapped["DepartmentORM"] = relationship(
        "DepartmentORM",
        back_populates="memberships",
        lazy="raise",
    )

    __table_args__ = (
        UniqueConstraint("employee_id", "department_id", name="uq_membership_employee_department"),
    )


from hr_api.models.orm.department import DepartmentORM  # noqa: E402, F401
from hr_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
