"""Department DTOs."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from hr_api.models.domain.status import RecordStatus
from hr_api.models.dto.employee import EmployeeSummary


class DepartmentResponse(BaseModel):
    """Department response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    status: RecordStatus
    manager_id: UUID
    manager: EmployeeSummary | None = None
    created_at: datetime
    updated_at: datetime


class DepartmentDetailResponse(DepartmentResponse):
    """Department with its member roster."""

    members: list[EmployeeSummary] = Field(default_factory=list)


class DepartmentCreate(BaseModel):
    """DTO for creating a department."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255, description="Department name is required")
    manager_id: UUID = Field(description="Manager is required")
    status: RecordStatus = Field(default=RecordStatus.ACTIVE, description="Department status")


class DepartmentUpdate(BaseModel):
    """DTO for updating a department."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255, description="Department name is required")
    manager_id: UUID = Field(description="Manager is required")
    status: RecordStatus | None = Field(default=None, description="Department status")


class MembershipCreate(BaseModel):
    """DTO for adding an employee to a department."""

    employee_id: UUID
