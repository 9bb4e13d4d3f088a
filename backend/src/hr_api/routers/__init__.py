"""API routers package."""

from hr_api.routers import auth, departments, employees

__all__ = [
    "auth",
    "departments",
    "employees",
]
