"""Services package."""

from hr_api.services.auth_service import AuthService
from hr_api.services.department_service import DepartmentService
from hr_api.services.employee_service import EmployeeService
from hr_api.services.role_transition_service import RoleTransitionService

__all__ = [
    "AuthService",
    "DepartmentService",
    "EmployeeService",
    "RoleTransitionService",
]
