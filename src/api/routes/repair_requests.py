"""
Repair Request API Routes

Residents suggest repairs; administrators move them through the workflow
and convert approved ones into maintenance projects.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.tenant_auth import get_tenant_approver, get_tenant_user
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.repairs import (
    ConvertRepairRequestResponse,
    ConvertRepairRequestUseCase,
    CreateRepairRequestCommand,
    CreateRepairRequestUseCase,
    GetRepairRequestStatsUseCase,
    GetRepairRequestUseCase,
    ListRepairRequestsUseCase,
    RepairRequestStats,
    TransitionCommand,
    TransitionRepairRequestUseCase,
)
from src.depends import get_notification_dispatcher, get_unit_of_work
from src.domain.entities import (
    RepairRequest,
    RepairRequestArea,
    RepairRequestSeverity,
    RepairRequestStatus,
)

router = APIRouter(prefix="/tenants/{tenant_id}/repair-requests", tags=["Repair Requests"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RepairRequest)
async def create_repair_request(
    tenant_id: str,
    request: CreateRepairRequestCommand,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: Optional[NotificationDispatcher] = Depends(get_notification_dispatcher),
):
    """
    Suggest a repair

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 503 Service Unavailable: TRANSPORT_ERROR
    """
    use_case = CreateRepairRequestUseCase(uow, dispatcher)
    result = await use_case.execute(tenant_id, current_user["user_id"], request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", response_model=List[RepairRequest])
async def list_repair_requests(
    tenant_id: str,
    status: Optional[RepairRequestStatus] = None,
    severity: Optional[RepairRequestSeverity] = None,
    area: Optional[RepairRequestArea] = None,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ListRepairRequestsUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(tenant_id, status=status, severity=severity, area=area)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/stats", response_model=RepairRequestStats)
async def repair_request_stats(
    tenant_id: str,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetRepairRequestStatsUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{request_id}", response_model=RepairRequest)
async def get_repair_request(
    tenant_id: str,
    request_id: str,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetRepairRequestUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(tenant_id, request_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{request_id}/transition", response_model=RepairRequest)
async def transition_repair_request(
    tenant_id: str,
    request_id: str,
    request: TransitionCommand,
    current_user: dict = Depends(get_tenant_approver),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: Optional[NotificationDispatcher] = Depends(get_notification_dispatcher),
):
    """
    Change the status of a repair request

    Raises:
        - 403 Forbidden: FORBIDDEN (role may not approve)
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION, NO_OP_TRANSITION, CONCURRENT_MODIFICATION
        - 422 Unprocessable Entity: VALIDATION_ERROR (rejection without reason)
    """
    use_case = TransitionRepairRequestUseCase(uow, dispatcher)
    result = await use_case.execute(tenant_id, request_id, current_user["user_id"], request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{request_id}/convert", response_model=ConvertRepairRequestResponse)
async def convert_repair_request(
    tenant_id: str,
    request_id: str,
    current_user: dict = Depends(get_tenant_approver),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: Optional[NotificationDispatcher] = Depends(get_notification_dispatcher),
):
    """
    Convert an approved repair request into a maintenance project

    Raises:
        - 403 Forbidden: FORBIDDEN (role may not approve)
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: ALREADY_CONVERTED, INVALID_STATUS, CONCURRENT_MODIFICATION
    """
    use_case = ConvertRepairRequestUseCase(uow, dispatcher)
    result = await use_case.execute(tenant_id, request_id, current_user["user_id"])
    if result.is_err():
        raise_for_error(result.error)
    return result.value
