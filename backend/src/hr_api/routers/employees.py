"""Employees router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from hr_api.dependencies import get_employee_service
from hr_api.models.domain.status import StatusFilter
from hr_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeSummary,
    EmployeeUpdate,
    StatusUpdate,
)
from hr_api.security.auth import CurrentCaller
from hr_api.security.rate_limit import API_DEFAULT_LIMIT, limiter
from hr_api.services.employee_service import EmployeeService

router = APIRouter()


@router.get("", response_model=list[EmployeeResponse])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_employees(
    request: Request,
    caller: CurrentCaller,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    status: StatusFilter = StatusFilter.ALL,
    manager_id: UUID | None = None,
    department_id: UUID | None = None,
) -> list[EmployeeResponse]:
    """List the employees visible to the caller."""
    return await service.list_employees(
        caller,
        status=status,
        manager_id=manager_id,
        department_id=department_id,
    )


@router.get("/managers", response_model=list[EmployeeSummary])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_managers(
    request: Request,
    caller: CurrentCaller,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> list[EmployeeSummary]:
    """List employees eligible to be someone's direct manager."""
    return await service.get_managers(caller)


@router.get("/manager-candidates", response_model=list[EmployeeSummary])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_manager_candidates(
    request: Request,
    caller: CurrentCaller,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> list[EmployeeSummary]:
    """List active employees that can be picked as a department manager."""
    return await service.get_manager_candidates(caller)


@router.get("/{employee_id}", response_model=EmployeeResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employee(
    request: Request,
    employee_id: UUID,
    caller: CurrentCaller,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get one employee."""
    return await service.get_employee(caller, employee_id)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(API_DEFAULT_LIMIT)
async def create_employee(
    request: Request,
    body: EmployeeCreate,
    caller: CurrentCaller,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Create an employee and their login account."""
    return await service.create_employee(caller, body)


@router.put("/{employee_id}", response_model=EmployeeResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def update_employee(
    request: Request,
    employee_id: UUID,
    body: EmployeeUpdate,
    caller: CurrentCaller,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Update an employee. Manager and status changes require an admin."""
    return await service.update_employee(caller, employee_id, body)


@router.patch("/{employee_id}/status", response_model=EmployeeResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def toggle_employee_status(
    request: Request,
    employee_id: UUID,
    body: StatusUpdate,
    caller: CurrentCaller,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Activate or deactivate an employee. Admin only."""
    return await service.toggle_status(caller, employee_id, body.status)
