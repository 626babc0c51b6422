from libs.result import Error, Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.entities import MaintenanceProject
from src.domain.errors import ErrorCode


class GetMaintenanceProjectUseCase:
    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(self, tenant_id: str, project_id: str) -> Result[MaintenanceProject]:
        async with self.uow:
            try:
                project = await read_with_retry(
                    lambda: self.uow.maintenance_projects.get(project_id), self.read_attempts
                )
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        if project is None or project.tenant_id != tenant_id:
            return Return.err(Error(ErrorCode.NOT_FOUND, "Maintenance project not found"))
        return Return.ok(project)
