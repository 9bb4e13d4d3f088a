"""Data Transfer Objects package."""

from hr_api.models.dto.auth import CallerInfo, LoginRequest, TokenResponse
from hr_api.models.dto.department import (
    DepartmentCreate,
    DepartmentDetailResponse,
    DepartmentResponse,
    DepartmentUpdate,
    MembershipCreate,
)
from hr_api.models.dto.employee import (
    DepartmentRef,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeSummary,
    EmployeeUpdate,
    StatusUpdate,
)

__all__ = [
    "CallerInfo",
    "DepartmentCreate",
    "DepartmentDetailResponse",
    "DepartmentRef",
    "DepartmentResponse",
    "DepartmentUpdate",
    "EmployeeCreate",
    "EmployeeResponse",
    "EmployeeSummary",
    "EmployeeUpdate",
    "LoginRequest",
    "MembershipCreate",
    "StatusUpdate",
    "TokenResponse",
]
