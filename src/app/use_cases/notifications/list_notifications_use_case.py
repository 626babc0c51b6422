from typing import List, Optional

from libs.result import Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.entities import Notification

DEFAULT_LIMIT = 20


class ListNotificationsUseCase:
    """Newest-first notifications of one user, dismissed ones excluded"""

    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(
        self,
        user_id: str,
        tenant_id: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> Result[List[Notification]]:
        filters = {"user_id": user_id, "dismissed": False}
        limit = max(1, min(limit, DEFAULT_LIMIT))

        async with self.uow:
            try:
                if tenant_id is not None:
                    notifications = await read_with_retry(
                        lambda: self.uow.notifications.list_by_tenant(
                            tenant_id, filters=filters, limit=limit
                        ),
                        self.read_attempts,
                    )
                else:
                    notifications = await read_with_retry(
                        lambda: self.uow.notifications.list_where(filters),
                        self.read_attempts,
                    )
                    notifications = notifications[:limit]
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(notifications)
