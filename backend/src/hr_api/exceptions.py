"""Domain-specific exceptions for the HR API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses. Each kind carries a stable ``code`` and a human-readable
message; the error handler maps the kind to a status code.
"""

from typing import Any
from uuid import UUID


class HRAPIError(Exception):
    """Base exception for all HR API errors."""

    code = "error"

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Authentication Errors (401)
# =============================================================================


class UnauthenticatedError(HRAPIError):
    """Raised when no caller can be resolved for the request."""

    code = "unauthenticated"

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


# =============================================================================
# Permission Errors (403)
# =============================================================================


class ForbiddenError(HRAPIError):
    """Raised when the caller lacks authority over a record or operation."""

    code = "forbidden"

    def __init__(self, message: str = "Unauthorized operation", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(HRAPIError):
    """Base class for resource not found errors."""

    code = "not_found"


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: UUID | None = None) -> None:
        details = {"employee_id": str(employee_id)} if employee_id else {}
        super().__init__("Employee not found", details)


class DepartmentNotFoundError(NotFoundError):
    """Raised when a department cannot be found."""

    def __init__(self, department_id: UUID | None = None) -> None:
        details = {"department_id": str(department_id)} if department_id else {}
        super().__init__("Department not found", details)


class MembershipNotFoundError(NotFoundError):
    """Raised when an employee is not a member of a department."""

    def __init__(self, department_id: UUID, employee_id: UUID) -> None:
        super().__init__(
            "Membership not found",
            {"department_id": str(department_id), "employee_id": str(employee_id)},
        )


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(HRAPIError):
    """Base class for unique constraint conflicts."""

    code = "conflict"


class EmailAlreadyExistsError(ConflictError):
    """Raised when an employee or user email is already taken."""

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("Email address already exists", details)


class DepartmentNameExistsError(ConflictError):
    """Raised when a department name is already taken."""

    def __init__(self, name: str | None = None) -> None:
        details = {"name": name} if name else {}
        super().__init__("Department name already exists", details)


class MembershipExistsError(ConflictError):
    """Raised when an employee is already a member of a department."""

    def __init__(self) -> None:
        super().__init__("Employee is already a member of this department")


# =============================================================================
# Validation Errors (422)
# =============================================================================


class ValidationError(HRAPIError):
    """Base class for validation errors."""

    code = "validation_error"


class InvalidManagerError(ValidationError):
    """Raised when a manager reference does not resolve to an employee."""

    def __init__(self, manager_id: UUID) -> None:
        super().__init__("Manager does not exist", {"manager_id": str(manager_id)})


class InvalidEmployeeReferenceError(ValidationError):
    """Raised when an employee reference does not resolve."""

    def __init__(self, employee_id: UUID) -> None:
        super().__init__("Employee does not exist", {"employee_id": str(employee_id)})


class ManagerCycleError(ValidationError):
    """Raised when a manager assignment would create a reporting cycle."""

    def __init__(self, employee_id: UUID, manager_id: UUID) -> None:
        message = (
            "An employee cannot be their own manager"
            if employee_id == manager_id
            else "Manager assignment would create a reporting cycle"
        )
        super().__init__(
            message,
            {"employee_id": str(employee_id), "manager_id": str(manager_id)},
        )
