from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.errors import ErrorCode


class DeleteMaintenanceProjectUseCase:
    """Permanently delete a project, whatever its status"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: str, project_id: str) -> Result[None]:
        async with self.uow:
            try:
                project = await self.uow.maintenance_projects.get(project_id)
                if project is None or project.tenant_id != tenant_id:
                    return Return.err(Error(ErrorCode.NOT_FOUND, "Maintenance project not found"))

                await self.uow.maintenance_projects.delete(project_id)
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(None)
