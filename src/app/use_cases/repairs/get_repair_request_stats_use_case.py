from collections import Counter

from libs.result import Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.entities import RepairRequestSeverity, RepairRequestStatus

from .dtos import RepairRequestStats


class GetRepairRequestStatsUseCase:
    """Counts per status and severity plus cost totals for one tenant"""

    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(self, tenant_id: str) -> Result[RepairRequestStats]:
        async with self.uow:
            try:
                requests = await read_with_retry(
                    lambda: self.uow.repair_requests.list_by_tenant(tenant_id, order_by=None),
                    self.read_attempts,
                )
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        by_status = Counter(r.status.value for r in requests)
        by_severity = Counter(r.severity.value for r in requests)
        return Return.ok(
            RepairRequestStats(
                total=len(requests),
                by_status={s.value: by_status.get(s.value, 0) for s in RepairRequestStatus},
                by_severity={s.value: by_severity.get(s.value, 0) for s in RepairRequestSeverity},
                total_estimated_cost=sum(r.estimated_cost or 0.0 for r in requests),
                total_actual_cost=sum(r.actual_cost or 0.0 for r in requests),
            )
        )
