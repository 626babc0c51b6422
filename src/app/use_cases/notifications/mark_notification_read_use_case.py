from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.base import now_iso
from src.domain.entities import Notification
from src.domain.errors import ErrorCode


class MarkNotificationReadUseCase:
    """
    Mark a notification as read.

    Only the recipient may do this. Marking an already read notification
    returns it unchanged.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, notification_id: str) -> Result[Notification]:
        async with self.uow:
            try:
                notification = await self.uow.notifications.get(notification_id)
                if notification is None:
                    return Return.err(Error(ErrorCode.NOT_FOUND, "Notification not found"))
                if notification.user_id != user_id:
                    return Return.err(
                        Error(ErrorCode.FORBIDDEN, "Only the recipient can update a notification")
                    )
                if notification.is_read:
                    return Return.ok(notification)

                updated = await self.uow.notifications.update(
                    notification_id,
                    {"is_read": True, "read_at": now_iso()},
                    expected_version=notification.version,
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(updated)
