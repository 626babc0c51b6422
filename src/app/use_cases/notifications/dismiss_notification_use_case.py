from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.base import now_iso
from src.domain.entities import DismissedNotification, Notification
from src.domain.errors import ErrorCode


class DismissNotificationUseCase:
    """
    Dismiss a notification for its recipient.

    Sets the dismissed flag and records the dismissal so it survives a
    later re-send of the same notification.
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
                        Error(ErrorCode.FORBIDDEN, "Only the recipient can dismiss a notification")
                    )
                if notification.dismissed:
                    return Return.ok(notification)

                dismissed_at = now_iso()
                updated = await self.uow.notifications.update(
                    notification_id,
                    {"dismissed": True},
                    expected_version=notification.version,
                )
                await self.uow.dismissed_notifications.create(
                    DismissedNotification(
                        user_id=user_id,
                        tenant_id=notification.tenant_id,
                        notification_id=notification_id,
                        notification_type=notification.type.value,
                        dismissed_at=dismissed_at,
                    )
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(updated)
