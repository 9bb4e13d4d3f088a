"""Repositories package."""

from hr_api.repositories.base import BaseRepository
from hr_api.repositories.department_repository import DepartmentRepository
from hr_api.repositories.employee_repository import EmployeeRepository
from hr_api.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "DepartmentRepository",
    "EmployeeRepository",
    "UserRepository",
]
