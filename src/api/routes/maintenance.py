"""
Maintenance Project API Routes
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.tenant_auth import get_tenant_approver, get_tenant_user
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.maintenance import (
    ArchiveMaintenanceProjectUseCase,
    CreateMaintenanceProjectCommand,
    CreateMaintenanceProjectUseCase,
    DeleteMaintenanceProjectUseCase,
    GetMaintenanceProjectUseCase,
    ListMaintenanceProjectsUseCase,
    ProjectTransitionCommand,
    TransitionMaintenanceProjectUseCase,
    UnarchiveMaintenanceProjectUseCase,
)
from src.depends import get_unit_of_work
from src.domain.entities import MaintenanceProject, ProjectStatus

router = APIRouter(prefix="/tenants/{tenant_id}/maintenance-projects", tags=["Maintenance"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MaintenanceProject)
async def create_maintenance_project(
    tenant_id: str,
    request: CreateMaintenanceProjectCommand,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = CreateMaintenanceProjectUseCase(uow)
    result = await use_case.execute(tenant_id, current_user["user_id"], request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", response_model=List[MaintenanceProject])
async def list_maintenance_projects(
    tenant_id: str,
    status: Optional[ProjectStatus] = None,
    include_archived: bool = False,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ListMaintenanceProjectsUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(tenant_id, status=status, include_archived=include_archived)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{project_id}", response_model=MaintenanceProject)
async def get_maintenance_project(
    tenant_id: str,
    project_id: str,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetMaintenanceProjectUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(tenant_id, project_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{project_id}/transition", response_model=MaintenanceProject)
async def transition_maintenance_project(
    tenant_id: str,
    project_id: str,
    request: ProjectTransitionCommand,
    current_user: dict = Depends(get_tenant_approver),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change the status of a maintenance project

    Raises:
        - 403 Forbidden: FORBIDDEN (role may not manage projects)
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION, NO_OP_TRANSITION, CONCURRENT_MODIFICATION
    """
    use_case = TransitionMaintenanceProjectUseCase(uow)
    result = await use_case.execute(tenant_id, project_id, current_user["user_id"], request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{project_id}/archive", response_model=MaintenanceProject)
async def archive_maintenance_project(
    tenant_id: str,
    project_id: str,
    current_user: dict = Depends(get_tenant_approver),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Archive a completed or cancelled project

    Raises:
        - 409 Conflict: INVALID_STATUS (project still active)
    """
    use_case = ArchiveMaintenanceProjectUseCase(uow)
    result = await use_case.execute(tenant_id, project_id, current_user["user_id"])
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{project_id}/unarchive", response_model=MaintenanceProject)
async def unarchive_maintenance_project(
    tenant_id: str,
    project_id: str,
    current_user: dict = Depends(get_tenant_approver),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = UnarchiveMaintenanceProjectUseCase(uow)
    result = await use_case.execute(tenant_id, project_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_maintenance_project(
    tenant_id: str,
    project_id: str,
    current_user: dict = Depends(get_tenant_approver),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Permanently delete a project"""
    use_case = DeleteMaintenanceProjectUseCase(uow)
    result = await use_case.execute(tenant_id, project_id)
    if result.is_err():
        raise_for_error(result.error)
