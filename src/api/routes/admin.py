"""
Admin API Routes - System Administration Endpoints

Back-office operations: onboarding decisions, tenant deletion and the email
dead-letter queue. Authentication is via Admin API Key, not user JWTs.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ServerError, raise_for_error
from src.api.utils.admin_auth import get_admin_actor, verify_admin_api_key
from src.app.services.notification_dispatcher import DeadLetter, NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    ApproveRegistrationCommand,
    ApproveRegistrationResponse,
    ApproveRegistrationUseCase,
    ListRegistrationsUseCase,
    RejectRegistrationCommand,
    RejectRegistrationUseCase,
)
from src.app.use_cases.tenants import DeleteTenantResponse, DeleteTenantUseCase
from src.depends import get_notification_dispatcher, get_unit_of_work
from src.domain.entities import PendingRegistration, RegistrationStatus

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(verify_admin_api_key)],
)


class RedeliverResponse(BaseModel):
    attempted: int
    still_failing: int


@router.get("/registrations", response_model=List[PendingRegistration])
async def list_registrations(
    status: Optional[RegistrationStatus] = RegistrationStatus.pending,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ListRegistrationsUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(status)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/registrations/{registration_id}/approve", response_model=ApproveRegistrationResponse)
async def approve_registration(
    registration_id: str,
    request: ApproveRegistrationCommand,
    admin_id: str = Depends(get_admin_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Approve a pending registration, creating its tenant

    Requires: X-Admin-API-Key header; X-Admin-User names the approver

    Raises:
        - 404 Not Found: REGISTRATION_NOT_FOUND
        - 409 Conflict: INVALID_STATUS (already decided)
    """
    use_case = ApproveRegistrationUseCase(
        uow,
        trial_days=ApplicationConfig.TRIAL_DAYS,
        default_monthly_rate=ApplicationConfig.DEFAULT_MONTHLY_RATE,
    )
    result = await use_case.execute(registration_id, admin_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/registrations/{registration_id}/reject", response_model=PendingRegistration)
async def reject_registration(
    registration_id: str,
    request: RejectRegistrationCommand,
    admin_id: str = Depends(get_admin_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = RejectRegistrationUseCase(uow)
    result = await use_case.execute(registration_id, admin_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/tenants/{tenant_id}", response_model=DeleteTenantResponse)
async def delete_tenant(
    tenant_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete a tenant and everything it owns

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 500 Internal Server Error: PARTIAL_FAILURE (details carry deleted / remaining)
        - 503 Service Unavailable: TRANSPORT_ERROR
    """
    use_case = DeleteTenantUseCase(
        uow,
        batch_size=ApplicationConfig.MAX_BATCH_SIZE,
        read_attempts=ApplicationConfig.READ_RETRY_ATTEMPTS,
    )
    result = await use_case.execute(tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


def _require_dispatcher(dispatcher: Optional[NotificationDispatcher]) -> NotificationDispatcher:
    if dispatcher is None:
        raise ServerError(Error("DISPATCHER_UNAVAILABLE", "Notification dispatcher is not running"))
    return dispatcher


@router.get("/notifications/dead-letters", response_model=List[DeadLetter])
async def list_dead_letters(
    dispatcher: Optional[NotificationDispatcher] = Depends(get_notification_dispatcher),
):
    """Notification emails that exhausted their delivery attempts"""
    return list(_require_dispatcher(dispatcher).dead_letters)


@router.post(
    "/notifications/dead-letters/redeliver",
    status_code=status.HTTP_200_OK,
    response_model=RedeliverResponse,
)
async def redeliver_dead_letters(
    dispatcher: Optional[NotificationDispatcher] = Depends(get_notification_dispatcher),
):
    dispatcher = _require_dispatcher(dispatcher)
    attempted = len(dispatcher.dead_letters)
    still_failing = await dispatcher.redeliver()
    return RedeliverResponse(attempted=attempted, still_failing=len(still_failing))
