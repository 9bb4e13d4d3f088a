"""Employee ORM model."""

from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.models.domain.status import RecordStatus
from hr_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class EmployeeORM(Base, UUIDMixin, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    telephone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    email_address: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus, name="record_status", native_enum=False, length=20),
        default=RecordStatus.ACTIVE,
        nullable=False,
    )

    # Direct manager (self-referential)
    manager_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships - lazy="raise" so that nothing is loaded implicitly
    # inside async code; use selectinload() or explicit queries
    manager: Mapped["EmployeeORM | None"] = relationship(
        "EmployeeORM",
        remote_side="EmployeeORM.id",
        foreign_keys=[manager_id],
        back_populates="subordinates",
        lazy="raise",
    )
    subordinates: Mapped[list["EmployeeORM"]] = relationship(
        "EmployeeORM",
        back_populates="manager",
        foreign_keys=[manager_id],
        lazy="raise",
    )
    user: Mapped["UserORM | None"] = relationship(
        "UserORM",
        back_populates="employee",
        uselist=False,
        lazy="raise",
    )
    memberships: Mapped[list["DepartmentMembershipORM"]] = relationship(
        "DepartmentMembershipORM",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )
    managed_departments: Mapped[list["DepartmentORM"]] = relationship(
        "DepartmentORM",
        back_populates="manager",
        lazy="raise",
    )

    __table_args__ = (
        Index("idx_employees_status", "status"),
        Index("idx_employees_manager_id", "manager_id"),
    )

    @property
    def full_name(self) -> str:
        """First and last name joined."""
        return f"{self.first_name} {self.last_name}"


# Import here to avoid circular import
from hr_api.models.orm.department import DepartmentORM  # noqa: E402, F401
from hr_api.models.orm.membership import DepartmentMembershipORM  # noqa: E402, F401
from hr_api.models.orm.user import UserORM  # noqa: E402, F401
