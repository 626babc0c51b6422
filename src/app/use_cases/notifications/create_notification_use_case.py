"""
Use Case: Create Notification

Stores an in-app notification for a member of the tenant and hands it to the
email dispatcher once the record is committed.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.entities import Notification
from src.domain.errors import ErrorCode

from .dtos import CreateNotificationCommand
from .recipients import notify_users


class CreateNotificationUseCase:
    def __init__(self, uow: UnitOfWork, dispatcher: Optional[NotificationDispatcher] = None):
        self.uow = uow
        self.dispatcher = dispatcher

    async def execute(self, command: CreateNotificationCommand) -> Result[Notification]:
        async with self.uow:
            try:
                tenant = await self.uow.tenants.get(command.tenant_id)
                if tenant is None:
                    return Return.err(Error(ErrorCode.TENANT_NOT_FOUND, "Tenant not found"))

                user = await self.uow.users.get(command.user_id)
                if user is None:
                    return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

                access = await self.uow.user_tenant_access.list_by_tenant(
                    command.tenant_id, filters={"user_id": command.user_id}, limit=1
                )
                if not access:
                    return Return.err(
                        Error(ErrorCode.FORBIDDEN, "User has no access to this tenant")
                    )

                created = await notify_users(
                    self.uow,
                    command.tenant_id,
                    [command.user_id],
                    type=command.type,
                    title=command.title,
                    message=command.message,
                    related_id=command.related_id,
                    context=command.context,
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        if self.dispatcher is not None:
            self.dispatcher.enqueue(created)
        return Return.ok(created[0])
