from typing import List, Optional

from libs.result import Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.entities import MaintenanceProject, ProjectStatus


class ListMaintenanceProjectsUseCase:
    """Newest-first projects of a tenant; archived ones only on request"""

    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(
        self,
        tenant_id: str,
        status: Optional[ProjectStatus] = None,
        include_archived: bool = False,
    ) -> Result[List[MaintenanceProject]]:
        filters = {}
        if status is not None:
            filters["status"] = status
        if not include_archived:
            filters["archived"] = False

        async with self.uow:
            try:
                projects = await read_with_retry(
                    lambda: self.uow.maintenance_projects.list_by_tenant(tenant_id, filters=filters),
                    self.read_attempts,
                )
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))
        return Return.ok(projects)
