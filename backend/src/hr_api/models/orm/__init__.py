"""SQLAlchemy ORM models package."""

from hr_api.models.orm.base import Base
from hr_api.models.orm.department import DepartmentORM
from hr_api.models.orm.employee import EmployeeORM
from hr_api.models.orm.membership import DepartmentMembershipORM
from hr_api.models.orm.user import UserORM

__all__ = [
    "Base",
    "DepartmentMembershipORM",
    "DepartmentORM",
    "EmployeeORM",
    "UserORM",
]
