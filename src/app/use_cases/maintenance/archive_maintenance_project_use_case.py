"""
Use Cases: Archive / Unarchive Maintenance Project

Archiving is a reversible soft delete, allowed once a project is completed
or cancelled. Neither operation touches the status or its history.
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.base import now_iso
from src.domain.entities import MaintenanceProject
from src.domain.errors import ErrorCode
from src.domain.lifecycle import ARCHIVABLE


class ArchiveMaintenanceProjectUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: str, project_id: str, actor_id: str) -> Result[MaintenanceProject]:
        async with self.uow:
            try:
                project = await self.uow.maintenance_projects.get(project_id)
                if project is None or project.tenant_id != tenant_id:
                    return Return.err(Error(ErrorCode.NOT_FOUND, "Maintenance project not found"))
                if project.status not in ARCHIVABLE:
                    return Return.err(
                        Error(
                            ErrorCode.INVALID_STATUS,
                            f"Only completed or cancelled projects can be archived (status is {project.status.value})",
                        )
                    )
                if project.archived:
                    return Return.ok(project)

                updated = await self.uow.maintenance_projects.update(
                    project_id,
                    {"archived": True, "archived_by": actor_id, "archived_at": now_iso()},
                    expected_version=project.version,
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(updated)


class UnarchiveMaintenanceProjectUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: str, project_id: str) -> Result[MaintenanceProject]:
        async with self.uow:
            try:
                project = await self.uow.maintenance_projects.get(project_id)
                if project is None or project.tenant_id != tenant_id:
                    return Return.err(Error(ErrorCode.NOT_FOUND, "Maintenance project not found"))
                if not project.archived:
                    return Return.ok(project)

                updated = await self.uow.maintenance_projects.update(
                    project_id,
                    {"archived": False, "archived_by": None, "archived_at": None},
                    expected_version=project.version,
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(updated)
