"""Employee DTOs."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hr_api.models.domain.status import RecordStatus


class EmployeeSummary(BaseModel):
    """Short employee reference (manager, member, select option)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str


class DepartmentRef(BaseModel):
    """Department an employee belongs to."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    telephone_number: str
    email_address: EmailStr
    status: RecordStatus
    manager_id: UUID | None = None
    manager: EmployeeSummary | None = None
    departments: list[DepartmentRef] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class EmployeeBase(BaseModel):
    """Fields shared by employee create and update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(min_length=1, max_length=100, description="First name is required")
    last_name: str = Field(min_length=1, max_length=100, description="Last name is required")
    telephone_number: str = Field(
        min_length=1,
        max_length=30,
        pattern=r"^\d+$",
        description="Telephone number, digits only",
    )
    email_address: EmailStr = Field(description="Employee email address")


class EmployeeCreate(EmployeeBase):
    """DTO for creating an employee."""

    manager_id: UUID | None = Field(default=None, description="Direct manager")
    status: RecordStatus = Field(default=RecordStatus.ACTIVE, description="Employee status")


class EmployeeUpdate(EmployeeBase):
    """DTO for updating an employee.

    ``manager_id`` and ``status`` are applied only for admins. Sending
    ``manager_id: null`` clears the manager; omitting it leaves it unchanged.
    """

    manager_id: UUID | None = Field(default=None, description="Direct manager")
    status: RecordStatus | None = Field(default=None, description="Employee status")


class StatusUpdate(BaseModel):
    """DTO for toggling the status of an employee or department."""

    status: RecordStatus
