"""Domain models package."""

from hr_api.models.domain.filters import DepartmentQueryFilter, EmployeeQueryFilter
from hr_api.models.domain.status import RecordStatus, StatusFilter
from hr_api.models.domain.user import Caller, UserRole

__all__ = [
    "Caller",
    "DepartmentQueryFilter",
    "EmployeeQueryFilter",
    "RecordStatus",
    "StatusFilter",
    "UserRole",
]
