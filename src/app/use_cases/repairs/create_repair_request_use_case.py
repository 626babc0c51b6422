"""
Use Case: Create Repair Request

A resident suggests a repair. The request starts in ``suggested`` with a
matching first history entry, and the tenant's administrators are notified.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.notifications.recipients import notify_users, tenant_admin_ids
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.base import now_iso
from src.domain.entities import (
    NotificationType,
    RepairRequest,
    RepairRequestStatus,
    StatusChange,
    Submitter,
)
from src.domain.errors import ErrorCode

from .dtos import CreateRepairRequestCommand


class CreateRepairRequestUseCase:
    def __init__(self, uow: UnitOfWork, dispatcher: Optional[NotificationDispatcher] = None):
        self.uow = uow
        self.dispatcher = dispatcher

    async def execute(
        self, tenant_id: str, actor_id: str, command: CreateRepairRequestCommand
    ) -> Result[RepairRequest]:
        async with self.uow:
            try:
                tenant = await self.uow.tenants.get(tenant_id)
                if tenant is None:
                    return Return.err(Error(ErrorCode.TENANT_NOT_FOUND, "Tenant not found"))

                user = await self.uow.users.get(actor_id)
                submitter = Submitter(
                    user_id=actor_id,
                    name=user.display_name if user else None,
                    email=user.email if user else None,
                    unit_number=command.unit_number,
                )

                request = await self.uow.repair_requests.create(
                    RepairRequest(
                        tenant_id=tenant_id,
                        title=command.title,
                        description=command.description,
                        area=command.area,
                        severity=command.severity,
                        estimated_cost=command.estimated_cost,
                        photos=command.photos,
                        submitted_by=submitter,
                        status=RepairRequestStatus.suggested,
                        status_history=[
                            StatusChange(
                                status=RepairRequestStatus.suggested.value,
                                changed_by=actor_id,
                                changed_at=now_iso(),
                            )
                        ],
                    )
                )

                admins = [uid for uid in await tenant_admin_ids(self.uow, tenant_id) if uid != actor_id]
                notifications = await notify_users(
                    self.uow,
                    tenant_id,
                    admins,
                    type=NotificationType.repair_request,
                    title="New repair request",
                    message=f"{submitter.name or 'A resident'} suggested a repair: {request.title}",
                    related_id=request.id,
                    context={"severity": request.severity.value, "area": request.area.value},
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        if self.dispatcher is not None:
            self.dispatcher.enqueue(notifications)
        return Return.ok(request)
