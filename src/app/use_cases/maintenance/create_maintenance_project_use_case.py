from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.base import now_iso
from src.domain.entities import MaintenanceProject, ProjectStatus, StatusChange
from src.domain.errors import ErrorCode

from .dtos import CreateMaintenanceProjectCommand


class CreateMaintenanceProjectUseCase:
    """Create a project in ``planned`` with its first history entry"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: str, actor_id: str, command: CreateMaintenanceProjectCommand
    ) -> Result[MaintenanceProject]:
        async with self.uow:
            try:
                tenant = await self.uow.tenants.get(tenant_id)
                if tenant is None:
                    return Return.err(Error(ErrorCode.TENANT_NOT_FOUND, "Tenant not found"))

                project = await self.uow.maintenance_projects.create(
                    MaintenanceProject(
                        tenant_id=tenant_id,
                        **command.model_dump(),
                        status=ProjectStatus.planned,
                        status_history=[
                            StatusChange(
                                status=ProjectStatus.planned.value,
                                changed_by=actor_id,
                                changed_at=now_iso(),
                            )
                        ],
                    )
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(project)
