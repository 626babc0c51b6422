"""
Tenant Access API Routes

Who can see a tenant, and in which role.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.tenant_auth import get_tenant_user
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.tenants import (
    AssignAccessCommand,
    AssignUserAccessUseCase,
    ChangeAccessCommand,
    ChangeAccessRoleUseCase,
    ListTenantAccessUseCase,
    RemoveUserAccessUseCase,
)
from src.depends import get_unit_of_work
from src.domain.entities import UserTenantAccess

router = APIRouter(prefix="/tenants/{tenant_id}/access", tags=["Access"])


@router.get("", response_model=List[UserTenantAccess])
async def list_access(
    tenant_id: str,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ListTenantAccessUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserTenantAccess)
async def assign_access(
    tenant_id: str,
    request: AssignAccessCommand,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Grant a user access to the tenant

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND, USER_NOT_FOUND
        - 409 Conflict: ALREADY_ASSIGNED
    """
    use_case = AssignUserAccessUseCase(uow)
    result = await use_case.execute(tenant_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/{access_id}", response_model=UserTenantAccess)
async def change_access_role(
    tenant_id: str,
    access_id: str,
    request: ChangeAccessCommand,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ChangeAccessRoleUseCase(uow)
    result = await use_case.execute(tenant_id, access_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{access_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_access(
    tenant_id: str,
    access_id: str,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = RemoveUserAccessUseCase(uow)
    result = await use_case.execute(tenant_id, access_id)
    if result.is_err():
        raise_for_error(result.error)
