"""Centralized dependency injection factories for FastAPI."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.database import get_db
from hr_api.services.auth_service import AuthService
from hr_api.services.department_service import DepartmentService
from hr_api.services.employee_service import EmployeeService


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db)


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db)


def get_department_service(db: AsyncSession = Depends(get_db)) -> DepartmentService:
    """Get DepartmentService instance."""
    return DepartmentService(db)
