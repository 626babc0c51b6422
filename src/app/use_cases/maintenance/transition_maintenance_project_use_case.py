"""
Use Case: Transition Maintenance Project

    planned -> scheduled -> in-progress -> completed
    any non-terminal status -> cancelled

Moves are one step at a time. Archiving is a separate flag and does not go
through here.
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.app.use_cases.transitions import check_transition, version_mismatch
from src.domain.base import now_iso
from src.domain.entities import MaintenanceProject, StatusChange
from src.domain.errors import ErrorCode
from src.domain.lifecycle import can_transition_project, project_side_fields

from .dtos import ProjectTransitionCommand


class TransitionMaintenanceProjectUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: str,
        project_id: str,
        actor_id: str,
        command: ProjectTransitionCommand,
    ) -> Result[MaintenanceProject]:
        new_status = command.status

        async with self.uow:
            try:
                project = await self.uow.maintenance_projects.get(project_id)
                if project is None or project.tenant_id != tenant_id:
                    return Return.err(Error(ErrorCode.NOT_FOUND, "Maintenance project not found"))

                error = version_mismatch(command.expected_version, project.version)
                if error:
                    return Return.err(error)

                error = check_transition(
                    project.status,
                    new_status,
                    can_transition_project(project.status, new_status),
                    command.force,
                )
                if error:
                    return Return.err(error)

                changed_at = now_iso()
                updated = await self.uow.maintenance_projects.append_history(
                    project_id,
                    StatusChange(
                        status=new_status.value,
                        changed_by=actor_id,
                        changed_at=changed_at,
                        reason=(command.reason or "").strip() or None,
                    ),
                    patch=project_side_fields(new_status, actor_id, changed_at),
                    expected_version=project.version,
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(updated)
