"""
Notification API Routes

Users read and dismiss their own notifications. Creating one also queues the
email hand-off.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.api.utils.tenant_auth import PLATFORM_ROLES
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.notifications import (
    CreateNotificationCommand,
    CreateNotificationUseCase,
    DismissNotificationUseCase,
    ListNotificationsUseCase,
    MarkNotificationReadUseCase,
)
from src.app.use_cases.notifications.list_notifications_use_case import DEFAULT_LIMIT
from src.depends import get_current_user, get_notification_dispatcher, get_unit_of_work
from src.domain.entities import Notification
from src.domain.errors import ErrorCode

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Notification)
async def create_notification(
    request: CreateNotificationCommand,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: Optional[NotificationDispatcher] = Depends(get_notification_dispatcher),
):
    """
    Notify a member of the caller's tenant

    Raises:
        - 403 Forbidden: FORBIDDEN (other tenant, or recipient not a member)
        - 404 Not Found: TENANT_NOT_FOUND, USER_NOT_FOUND
    """
    if request.tenant_id != current_user.get("tenant_id") and current_user.get("role") not in PLATFORM_ROLES:
        raise ClientError(
            Error(ErrorCode.FORBIDDEN, "Token is not valid for this tenant"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    use_case = CreateNotificationUseCase(uow, dispatcher)
    result = await use_case.execute(request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", response_model=List[Notification])
async def list_notifications(
    tenant_id: Optional[str] = None,
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=DEFAULT_LIMIT),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Current user's notifications, newest first"""
    use_case = ListNotificationsUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(current_user["user_id"], tenant_id=tenant_id, limit=limit)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{notification_id}/read", response_model=Notification)
async def mark_notification_read(
    notification_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Raises:
        - 403 Forbidden: FORBIDDEN (not the recipient)
        - 404 Not Found: NOT_FOUND
    """
    use_case = MarkNotificationReadUseCase(uow)
    result = await use_case.execute(current_user["user_id"], notification_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{notification_id}/dismiss", response_model=Notification)
async def dismiss_notification(
    notification_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = DismissNotificationUseCase(uow)
    result = await use_case.execute(current_user["user_id"], notification_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
