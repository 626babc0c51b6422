from libs.result import Error, Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.entities import RepairRequest
from src.domain.errors import ErrorCode


class GetRepairRequestUseCase:
    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(self, tenant_id: str, request_id: str) -> Result[RepairRequest]:
        async with self.uow:
            try:
                request = await read_with_retry(
                    lambda: self.uow.repair_requests.get(request_id), self.read_attempts
                )
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        # Records of other tenants are reported as missing
        if request is None or request.tenant_id != tenant_id:
            return Return.err(Error(ErrorCode.NOT_FOUND, "Repair request not found"))
        return Return.ok(request)
