"""Helpers for use cases that notify people as a side effect"""

from typing import Any, Dict, Iterable, List, Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ADMIN_ROLES, Notification, NotificationType


async def tenant_admin_ids(uow: UnitOfWork, tenant_id: str) -> List[str]:
    """IDs of users holding an administrative role in the tenant"""
    access_records = await uow.user_tenant_access.list_by_tenant(tenant_id, order_by=None)
    seen = []
    for access in access_records:
        if access.role in ADMIN_ROLES and access.user_id not in seen:
            seen.append(access.user_id)
    return seen


async def notify_users(
    uow: UnitOfWork,
    tenant_id: str,
    user_ids: Iterable[str],
    type: NotificationType,
    title: str,
    message: str,
    related_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
) -> List[Notification]:
    """Create one notification per recipient; caller commits and dispatches"""
    created = []
    for user_id in user_ids:
        notification = Notification(
            user_id=user_id,
            tenant_id=tenant_id,
            type=type,
            title=title,
            message=message,
            related_id=related_id,
            context=context or {},
        )
        created.append(await uow.notifications.create(notification))
    return created
