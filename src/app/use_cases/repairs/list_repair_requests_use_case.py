from typing import List, Optional

from libs.result import Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.entities import (
    RepairRequest,
    RepairRequestArea,
    RepairRequestSeverity,
    RepairRequestStatus,
)


class ListRepairRequestsUseCase:
    """Newest-first repair requests of a tenant, optionally filtered"""

    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(
        self,
        tenant_id: str,
        status: Optional[RepairRequestStatus] = None,
        severity: Optional[RepairRequestSeverity] = None,
        area: Optional[RepairRequestArea] = None,
    ) -> Result[List[RepairRequest]]:
        filters = {
            key: value
            for key, value in (("status", status), ("severity", severity), ("area", area))
            if value is not None
        }
        async with self.uow:
            try:
                requests = await read_with_retry(
                    lambda: self.uow.repair_requests.list_by_tenant(tenant_id, filters=filters),
                    self.read_attempts,
                )
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))
        return Return.ok(requests)
