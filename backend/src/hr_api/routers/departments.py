"""Departments router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from hr_api.dependencies import get_department_service
from hr_api.models.domain.status import StatusFilter
from hr_api.models.dto.department import (
    DepartmentCreate,
    DepartmentDetailResponse,
    DepartmentResponse,
    DepartmentUpdate,
    MembershipCreate,
)
from hr_api.models.dto.employee import StatusUpdate
from hr_api.security.auth import CurrentCaller
from hr_api.security.rate_limit import API_DEFAULT_LIMIT, limiter
from hr_api.services.department_service import DepartmentService

router = APIRouter()


@router.get("", response_model=list[DepartmentResponse])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_departments(
    request: Request,
    caller: CurrentCaller,
    service: Annotated[DepartmentService, Depends(get_department_service)],
    status: StatusFilter = StatusFilter.ALL,
) -> list[DepartmentResponse]:
    """List the departments visible to the caller."""
    return await service.list_departments(caller, status=status)


@router.get("/{department_id}", response_model=DepartmentDetailResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_department(
    request: Request,
    department_id: UUID,
    caller: CurrentCaller,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentDetailResponse:
    """Get one department with its manager and members."""
    return await service.get_department(caller, department_id)


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(API_DEFAULT_LIMIT)
async def create_department(
    request: Request,
    body: DepartmentCreate,
    caller: CurrentCaller,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Create a department. Admin only."""
    return await service.create_department(caller, body)


@router.put("/{department_id}", response_model=DepartmentResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def update_department(
    request: Request,
    department_id: UUID,
    body: DepartmentUpdate,
    caller: CurrentCaller,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Update a department. Admin only."""
    return await service.update_department(caller, department_id, body)


@router.patch("/{department_id}/status", response_model=DepartmentResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def toggle_department_status(
    request: Request,
    department_id: UUID,
    body: StatusUpdate,
    caller: CurrentCaller,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Activate or deactivate a department. Admin only."""
    return await service.toggle_status(caller, department_id, body.status)


@router.post(
    "/{department_id}/members",
    response_model=DepartmentDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(API_DEFAULT_LIMIT)
async def add_department_member(
    request: Request,
    department_id: UUID,
    body: MembershipCreate,
    caller: CurrentCaller,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentDetailResponse:
    """Add an employee to a department. Admin only."""
    return await service.add_member(caller, department_id, body.employee_id)


@router.delete("/{department_id}/members/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(API_DEFAULT_LIMIT)
async def remove_department_member(
    request: Request,
    department_id: UUID,
    employee_id: UUID,
    caller: CurrentCaller,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> Response:
    """Remove an employee from a department. Admin only."""
    await service.remove_member(caller, department_id, employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
