"""Employee service: scoped reads and atomic employee mutations."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.config import get_settings
from hr_api.exceptions import (
    EmailAlreadyExistsError,
    EmployeeNotFoundError,
    InvalidManagerError,
    ManagerCycleError,
)
from hr_api.models.domain.status import RecordStatus, StatusFilter
from hr_api.models.domain.user import Caller, UserRole
from hr_api.models.dto.employee import (
    DepartmentRef,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeSummary,
    EmployeeUpdate,
)
from hr_api.models.orm.employee import EmployeeORM
from hr_api.repositories.base import is_unique_violation
from hr_api.repositories.department_repository import DepartmentRepository
from hr_api.repositories.employee_repository import EmployeeRepository
from hr_api.repositories.user_repository import UserRepository
from hr_api.security.access_policy import (
    authorize_employee_read,
    authorize_employee_update,
    employee_query_filter,
    require_admin,
    writable_employee_fields,
)
from hr_api.security.password import get_password_service
from hr_api.services.management_graph import find_manager_cycle
from hr_api.services.role_transition_service import RoleTransitionService

logger = logging.getLogger(__name__)

# Fields of EmployeeUpdate that map one-to-one onto EmployeeORM columns
EMPLOYEE_PROFILE_FIELDS = ("first_name", "last_name", "telephone_number", "email_address")


class EmployeeService:
    """Service for employee reads and mutations.

    Every operation takes the calling identity explicitly and runs inside the
    session's transaction; the ``get_db`` dependency commits or rolls back.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.department_repo = DepartmentRepository(session)
        self.user_repo = UserRepository(session)
        self.role_transitions = RoleTransitionService(session)
        self.password_service = get_password_service()
        self.settings = get_settings()

    async def _build_responses(self, employees: list[EmployeeORM]) -> list[EmployeeResponse]:
        """Build EmployeeResponses with managers and departments in batch."""
        if not employees:
            return []

        manager_ids = [emp.manager_id for emp in employees if emp.manager_id is not None]
        managers = await self.employee_repo.get_by_ids(manager_ids)
        departments = await self.department_repo.get_for_employees([emp.id for emp in employees])

        responses = []
        for emp in employees:
            manager = managers.get(emp.manager_id) if emp.manager_id else None
            responses.append(
                EmployeeResponse(
                    id=emp.id,
                    first_name=emp.first_name,
                    last_name=emp.last_name,
                    telephone_number=emp.telephone_number,
                    email_address=emp.email_address,
                    status=emp.status,
                    manager_id=emp.manager_id,
                    manager=EmployeeSummary.model_validate(manager) if manager else None,
                    departments=[
                        DepartmentRef.model_validate(dept) for dept in departments.get(emp.id, [])
                    ],
                    created_at=emp.created_at,
                    updated_at=emp.updated_at,
                )
            )
        return responses

    async def _build_response(self, employee: EmployeeORM) -> EmployeeResponse:
        """Build a single EmployeeResponse."""
        responses = await self._build_responses([employee])
        return responses[0]

    async def _get_or_raise(self, employee_id: UUID) -> EmployeeORM:
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def _check_manager_assignment(self, employee_id: UUID, manager_id: UUID) -> None:
        """Validate a new manager for an existing employee.

        Raises:
            ManagerCycleError: If the employee would manage themselves, directly or not
            InvalidManagerError: If the manager does not exist
        """
        if manager_id == employee_id:
            raise ManagerCycleError(employee_id, manager_id)
        if not await self.employee_repo.exists(manager_id):
            raise InvalidManagerError(manager_id)
        manager_index = await self.employee_repo.get_manager_index()
        if find_manager_cycle(manager_index, employee_id, manager_id):
            raise ManagerCycleError(employee_id, manager_id)

    async def list_employees(
        self,
        caller: Caller,
        status: StatusFilter = StatusFilter.ALL,
        manager_id: UUID | None = None,
        department_id: UUID | None = None,
    ) -> list[EmployeeResponse]:
        """List the employees visible to the caller.

        Args:
            caller: Requesting identity
            status: Status filter (ALL for no filtering)
            manager_id: Only direct reports of this employee
            department_id: Only members or the manager of this department

        Returns:
            Visible employees ordered by name
        """
        query_filter = employee_query_filter(
            caller,
            status=status.as_status(),
            manager_id=manager_id,
            department_id=department_id,
        )
        employees = await self.employee_repo.list_filtered(query_filter)
        return await self._build_responses(employees)

    async def get_employee(self, caller: Caller, employee_id: UUID) -> EmployeeResponse:
        """Get one employee if the caller may see it.

        Args:
            caller: Requesting identity
            employee_id: Employee UUID

        Returns:
            EmployeeResponse

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            ForbiddenError: If the employee is outside the caller's scope
        """
        employee = await self._get_or_raise(employee_id)
        authorize_employee_read(caller, employee)
        return await self._build_response(employee)

    async def create_employee(self, caller: Caller, data: EmployeeCreate) -> EmployeeResponse:
        """Create an employee together with their login account.

        The employee and the user are written in the same transaction, so a
        failure on either leaves nothing behind.

        Args:
            caller: Requesting identity
            data: Employee creation data

        Returns:
            Created EmployeeResponse

        Raises:
            InvalidManagerError: If the manager does not exist
            EmailAlreadyExistsError: If the email is taken by an employee or user
        """
        email = str(data.email_address).lower()
        if data.manager_id is not None and not await self.employee_repo.exists(data.manager_id):
            raise InvalidManagerError(data.manager_id)

        password_hash = self.password_service.hash_password(self.settings.default_employee_password)
        try:
            employee = await self.employee_repo.create(
                first_name=data.first_name,
                last_name=data.last_name,
                telephone_number=data.telephone_number,
                email_address=email,
                status=data.status,
                manager_id=data.manager_id,
            )
            await self.user_repo.create(
                email=email,
                password_hash=password_hash,
                name=f"{data.first_name} {data.last_name}",
                role=UserRole.EMPLOYEE,
                employee_id=employee.id,
            )
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                logger.warning("Employee creation rejected: email already exists")
                raise EmailAlreadyExistsError(email) from e
            raise

        logger.info("Employee %s created by user %s", employee.id, caller.user_id)
        if self.settings.role_sync_on_report_change and data.manager_id is not None:
            await self.role_transitions.on_direct_manager_changed(None, data.manager_id)
        return await self._build_response(employee)

    async def update_employee(
        self,
        caller: Caller,
        employee_id: UUID,
        data: EmployeeUpdate,
    ) -> EmployeeResponse:
        """Update an employee and mirror the change onto their user.

        ``manager_id`` and ``status`` are applied only for admins and are
        dropped silently for anyone else.

        Args:
            caller: Requesting identity
            employee_id: Employee UUID
            data: Employee update data

        Returns:
            Updated EmployeeResponse

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            ForbiddenError: If the caller may not edit this employee
            InvalidManagerError: If the new manager does not exist
            ManagerCycleError: If the new manager would create a reporting cycle
            EmailAlreadyExistsError: If the new email is taken
        """
        employee = await self._get_or_raise(employee_id)
        authorize_employee_update(caller, employee)

        allowed = writable_employee_fields(caller, data.model_fields_set)
        ignored = data.model_fields_set - allowed
        if ignored:
            logger.warning(
                "Ignoring admin-only fields %s in update of employee %s by user %s",
                sorted(ignored),
                employee_id,
                caller.user_id,
            )

        update_data: dict = {
            field: getattr(data, field) for field in EMPLOYEE_PROFILE_FIELDS if field in allowed
        }
        if "email_address" in update_data:
            update_data["email_address"] = str(update_data["email_address"]).lower()
        if "status" in allowed and data.status is not None:
            update_data["status"] = data.status

        old_manager_id = employee.manager_id
        if "manager_id" in allowed and data.manager_id != old_manager_id:
            if data.manager_id is not None:
                await self._check_manager_assignment(employee_id, data.manager_id)
            update_data["manager_id"] = data.manager_id

        try:
            employee = await self.employee_repo.update(employee, **update_data)
            user = await self.user_repo.get_by_employee_id(employee_id)
            if user is not None:
                await self.user_repo.update(
                    user,
                    email=employee.email_address,
                    name=employee.full_name,
                )
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                logger.warning("Update of employee %s rejected: email already exists", employee_id)
                raise EmailAlreadyExistsError(update_data.get("email_address")) from e
            raise

        if self.settings.role_sync_on_report_change and "manager_id" in update_data:
            await self.role_transitions.on_direct_manager_changed(
                old_manager_id, update_data["manager_id"]
            )
        return await self._build_response(employee)

    async def toggle_status(
        self,
        caller: Caller,
        employee_id: UUID,
        status: RecordStatus,
    ) -> EmployeeResponse:
        """Set an employee's status.

        Args:
            caller: Requesting identity (must be admin)
            employee_id: Employee UUID
            status: New status

        Returns:
            Updated EmployeeResponse

        Raises:
            ForbiddenError: If the caller is not an admin
            EmployeeNotFoundError: If the employee does not exist
        """
        require_admin(caller, "employee.toggle_status")
        employee = await self._get_or_raise(employee_id)
        employee = await self.employee_repo.update(employee, status=status)
        logger.info("Employee %s set to %s by user %s", employee_id, status.value, caller.user_id)
        return await self._build_response(employee)

    async def get_managers(self, caller: Caller) -> list[EmployeeSummary]:
        """Get employees eligible to be picked as a direct manager."""
        managers = await self.employee_repo.get_managers()
        return [EmployeeSummary.model_validate(emp) for emp in managers]

    async def get_manager_candidates(self, caller: Caller) -> list[EmployeeSummary]:
        """Get active employees eligible to manage a department."""
        employees = await self.employee_repo.get_active()
        return [EmployeeSummary.model_validate(emp) for emp in employees]
