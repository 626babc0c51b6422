"""
Use Case: Convert Repair Request

Turns an approved repair request into a maintenance project. The request
moves to the terminal ``converted`` status and points at the new project;
the tenant's administrators are told. All writes commit together.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.notifications.recipients import notify_users, tenant_admin_ids
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.base import now_iso
from src.domain.entities import (
    MaintenanceProject,
    NotificationType,
    ProjectStatus,
    RepairRequestStatus,
    StatusChange,
)
from src.domain.errors import ErrorCode
from src.domain.lifecycle import SEVERITY_PRIORITY

from .dtos import ConvertRepairRequestResponse


class ConvertRepairRequestUseCase:
    def __init__(self, uow: UnitOfWork, dispatcher: Optional[NotificationDispatcher] = None):
        self.uow = uow
        self.dispatcher = dispatcher

    async def execute(
        self, tenant_id: str, request_id: str, actor_id: str
    ) -> Result[ConvertRepairRequestResponse]:
        """
        Execute conversion.

        Errors:
            - NOT_FOUND: request does not exist in this tenant
            - ALREADY_CONVERTED: request was converted before
            - INVALID_STATUS: request is not approved
            - CONCURRENT_MODIFICATION: request changed during conversion
        """
        async with self.uow:
            try:
                request = await self.uow.repair_requests.get(request_id)
                if request is None or request.tenant_id != tenant_id:
                    return Return.err(Error(ErrorCode.NOT_FOUND, "Repair request not found"))

                if request.status == RepairRequestStatus.converted:
                    return Return.err(
                        Error(
                            ErrorCode.ALREADY_CONVERTED,
                            "Repair request was already converted",
                            details={"project_id": request.converted_project_id},
                        )
                    )
                if request.status != RepairRequestStatus.approved:
                    return Return.err(
                        Error(
                            ErrorCode.INVALID_STATUS,
                            f"Only approved repair requests can be converted (status is {request.status.value})",
                        )
                    )

                changed_at = now_iso()
                priority = SEVERITY_PRIORITY[request.severity]
                project = await self.uow.maintenance_projects.create(
                    MaintenanceProject(
                        tenant_id=tenant_id,
                        title=request.title,
                        description=request.description,
                        category="other",
                        priority=priority,
                        estimated_cost=request.estimated_cost or 0.0,
                        source_repair_request_id=request.id,
                        status=ProjectStatus.planned,
                        status_history=[
                            StatusChange(
                                status=ProjectStatus.planned.value,
                                changed_by=actor_id,
                                changed_at=changed_at,
                                reason=f"Converted from repair request {request.id}",
                            )
                        ],
                    )
                )

                await self.uow.repair_requests.append_history(
                    request.id,
                    StatusChange(
                        status=RepairRequestStatus.converted.value,
                        changed_by=actor_id,
                        changed_at=changed_at,
                    ),
                    patch={
                        "converted_project_id": project.id,
                        "converted_by": actor_id,
                        "converted_at": changed_at,
                    },
                    expected_version=request.version,
                )

                admins = await tenant_admin_ids(self.uow, tenant_id)
                notifications = await notify_users(
                    self.uow,
                    tenant_id,
                    admins,
                    type=NotificationType.maintenance,
                    title="Repair request converted",
                    message=f"'{request.title}' is now a maintenance project",
                    related_id=project.id,
                    context={"repair_request_id": request.id, "priority": priority.value},
                )

                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        if self.dispatcher is not None:
            self.dispatcher.enqueue(notifications)
        return Return.ok(
            ConvertRepairRequestResponse(
                repair_request_id=request.id,
                project_id=project.id,
                priority=priority,
                admins_notified=len(notifications),
            )
        )
