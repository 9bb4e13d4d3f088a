"""Department ORM model."""

from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.models.domain.status import RecordStatus
from hr_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class DepartmentORM(Base, UUIDMixin, TimestampMixin):
    """Department database model."""

    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus, name="record_status", native_enum=False, length=20),
        default=RecordStatus.ACTIVE,
        nullable=False,
    )
    # A department without a manager is invalid
    manager_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="RESTRICT"),
        nullable=False,
    )

    manager: Mapped["EmployeeORM"] = relationship(
        "EmployeeORM",
        back_populates="managed_departments",
        foreign_keys=[manager_id],
        lazy="raise",
    )
    memberships: Mapped[list["DepartmentMembershipORM"]] = relationship(
        "DepartmentMembershipORM",
        back_populates="department",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    __table_args__ = (
        Index("idx_departments_manager_id", "manager_id"),
        Index("idx_departments_status", "status"),
    )


from hr_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
from hr_api.models.orm.membership import DepartmentMembershipORM  # noqa: E402, F401
