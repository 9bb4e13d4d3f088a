"""Department service: scoped reads, admin mutations and memberships."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.exceptions import (
    DepartmentNameExistsError,
    DepartmentNotFoundError,
    InvalidEmployeeReferenceError,
    InvalidManagerError,
    MembershipExistsError,
    MembershipNotFoundError,
)
from hr_api.models.domain.status import RecordStatus, StatusFilter
from hr_api.models.domain.user import Caller
from hr_api.models.dto.department import (
    DepartmentCreate,
    DepartmentDetailResponse,
    DepartmentResponse,
    DepartmentUpdate,
)
from hr_api.models.dto.employee import EmployeeSummary
from hr_api.models.orm.department import DepartmentORM
from hr_api.repositories.base import is_unique_violation
from hr_api.repositories.department_repository import DepartmentRepository
from hr_api.repositories.employee_repository import EmployeeRepository
from hr_api.security.access_policy import (
    authorize_department_read,
    department_query_filter,
    require_admin,
)
from hr_api.services.role_transition_service import RoleTransitionService

logger = logging.getLogger(__name__)


class DepartmentService:
    """Service for department reads and mutations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.department_repo = DepartmentRepository(session)
        self.employee_repo = EmployeeRepository(session)
        self.role_transitions = RoleTransitionService(session)

    async def _build_responses(self, departments: list[DepartmentORM]) -> list[DepartmentResponse]:
        """Build DepartmentResponses with their managers in one query."""
        managers = await self.employee_repo.get_by_ids([dept.manager_id for dept in departments])
        responses = []
        for dept in departments:
            manager = managers.get(dept.manager_id)
            responses.append(
                DepartmentResponse(
                    id=dept.id,
                    name=dept.name,
                    status=dept.status,
                    manager_id=dept.manager_id,
                    manager=EmployeeSummary.model_validate(manager) if manager else None,
                    created_at=dept.created_at,
                    updated_at=dept.updated_at,
                )
            )
        return responses

    async def _build_response(self, department: DepartmentORM) -> DepartmentResponse:
        responses = await self._build_responses([department])
        return responses[0]

    async def _get_or_raise(self, department_id: UUID) -> DepartmentORM:
        department = await self.department_repo.get_by_id(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)
        return department

    async def _ensure_manager_exists(self, manager_id: UUID) -> None:
        if not await self.employee_repo.exists(manager_id):
            raise InvalidManagerError(manager_id)

    async def list_departments(
        self,
        caller: Caller,
        status: StatusFilter = StatusFilter.ALL,
    ) -> list[DepartmentResponse]:
        """List the departments visible to the caller.

        Args:
            caller: Requesting identity
            status: Status filter (ALL for no filtering)

        Returns:
            Visible departments ordered by name
        """
        query_filter = department_query_filter(caller, status=status.as_status())
        departments = await self.department_repo.list_filtered(query_filter)
        return await self._build_responses(departments)

    async def get_department(self, caller: Caller, department_id: UUID) -> DepartmentDetailResponse:
        """Get one department with its manager and members.

        Args:
            caller: Requesting identity
            department_id: Department UUID

        Returns:
            DepartmentDetailResponse

        Raises:
            DepartmentNotFoundError: If the department does not exist
            ForbiddenError: If the department is outside the caller's scope
        """
        department = await self._get_or_raise(department_id)
        members = await self.department_repo.get_members(department_id)
        authorize_department_read(caller, department, {member.id for member in members})

        response = await self._build_response(department)
        return DepartmentDetailResponse(
            **response.model_dump(),
            members=[EmployeeSummary.model_validate(member) for member in members],
        )

    async def create_department(self, caller: Caller, data: DepartmentCreate) -> DepartmentResponse:
        """Create a department and promote its manager.

        Args:
            caller: Requesting identity (must be admin)
            data: Department creation data

        Returns:
            Created DepartmentResponse

        Raises:
            ForbiddenError: If the caller is not an admin
            InvalidManagerError: If the manager does not exist
            DepartmentNameExistsError: If the name is taken
        """
        require_admin(caller, "department.create")
        await self._ensure_manager_exists(data.manager_id)

        try:
            department = await self.department_repo.create(
                name=data.name,
                manager_id=data.manager_id,
                status=data.status,
            )
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                logger.warning("Department creation rejected: name already exists")
                raise DepartmentNameExistsError(data.name) from e
            raise

        logger.info("Department %s created by user %s", department.id, caller.user_id)
        await self.role_transitions.on_department_created(department.manager_id)
        return await self._build_response(department)

    async def update_department(
        self,
        caller: Caller,
        department_id: UUID,
        data: DepartmentUpdate,
    ) -> DepartmentResponse:
        """Update a department and re-evaluate manager roles if the manager changed.

        Args:
            caller: Requesting identity (must be admin)
            department_id: Department UUID
            data: Department update data

        Returns:
            Updated DepartmentResponse

        Raises:
            ForbiddenError: If the caller is not an admin
            DepartmentNotFoundError: If the department does not exist
            InvalidManagerError: If the new manager does not exist
            DepartmentNameExistsError: If the new name is taken
        """
        require_admin(caller, "department.update")
        department = await self._get_or_raise(department_id)
        old_manager_id = department.manager_id
        if data.manager_id != old_manager_id:
            await self._ensure_manager_exists(data.manager_id)

        update_data: dict = {"name": data.name, "manager_id": data.manager_id}
        if data.status is not None:
            update_data["status"] = data.status

        try:
            department = await self.department_repo.update(department, **update_data)
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                logger.warning("Update of department %s rejected: name already exists", department_id)
                raise DepartmentNameExistsError(data.name) from e
            raise

        if old_manager_id != data.manager_id:
            await self.role_transitions.on_department_manager_changed(
                department_id, old_manager_id, data.manager_id
            )
        return await self._build_response(department)

    async def toggle_status(
        self,
        caller: Caller,
        department_id: UUID,
        status: RecordStatus,
    ) -> DepartmentResponse:
        """Set a department's status.

        Raises:
            ForbiddenError: If the caller is not an admin
            DepartmentNotFoundError: If the department does not exist
        """
        require_admin(caller, "department.toggle_status")
        department = await self._get_or_raise(department_id)
        department = await self.department_repo.update(department, status=status)
        logger.info("Department %s set to %s by user %s", department_id, status.value, caller.user_id)
        return await self._build_response(department)

    async def add_member(
        self,
        caller: Caller,
        department_id: UUID,
        employee_id: UUID,
    ) -> DepartmentDetailResponse:
        """Add an employee to a department.

        Args:
            caller: Requesting identity (must be admin)
            department_id: Department UUID
            employee_id: Employee UUID

        Returns:
            Department with its updated members

        Raises:
            ForbiddenError: If the caller is not an admin
            DepartmentNotFoundError: If the department does not exist
            InvalidEmployeeReferenceError: If the employee does not exist
            MembershipExistsError: If the employee is already a member
        """
        require_admin(caller, "department.add_member")
        await self._get_or_raise(department_id)
        if not await self.employee_repo.exists(employee_id):
            raise InvalidEmployeeReferenceError(employee_id)

        try:
            await self.department_repo.add_member(department_id, employee_id)
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                raise MembershipExistsError() from e
            raise

        return await self.get_department(caller, department_id)

    async def remove_member(
        self,
        caller: Caller,
        department_id: UUID,
        employee_id: UUID,
    ) -> None:
        """Remove an employee from a department.

        Raises:
            ForbiddenError: If the caller is not an admin
            DepartmentNotFoundError: If the department does not exist
            MembershipNotFoundError: If the employee is not a member
        """
        require_admin(caller, "department.remove_member")
        await self._get_or_raise(department_id)
        if not await self.department_repo.remove_member(department_id, employee_id):
            raise MembershipNotFoundError(department_id, employee_id)
        logger.info("Employee %s removed from department %s", employee_id, department_id)
