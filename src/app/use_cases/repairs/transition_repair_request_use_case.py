"""
Use Case: Transition Repair Request

Moves a repair request along its workflow:

    suggested -> approved -> planned -> scheduled -> in-progress -> completed
    suggested | approved -> rejected (reason required)

Each move is one step along the path, so nothing is planned before it is
approved; nothing moves backwards and terminal statuses have no exits. The status change, its history entry and
its side fields are written together, guarded by the record version.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.notifications.recipients import notify_users
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.app.use_cases.transitions import check_transition, version_mismatch
from src.domain.base import now_iso
from src.domain.entities import NotificationType, RepairRequest, RepairRequestStatus, StatusChange
from src.domain.errors import ErrorCode
from src.domain.lifecycle import (
    CONVERSION_ONLY,
    SUBMITTER_NOTIFIED,
    can_transition_repair,
    repair_side_fields,
)

from .dtos import TransitionCommand


class TransitionRepairRequestUseCase:
    def __init__(self, uow: UnitOfWork, dispatcher: Optional[NotificationDispatcher] = None):
        self.uow = uow
        self.dispatcher = dispatcher

    async def execute(
        self,
        tenant_id: str,
        request_id: str,
        actor_id: str,
        command: TransitionCommand,
    ) -> Result[RepairRequest]:
        """
        Execute repair request transition.

        Errors:
            - NOT_FOUND: request does not exist in this tenant
            - NO_OP_TRANSITION: already in the target status (unless forced)
            - INVALID_TRANSITION: edge not allowed, or target is "converted"
            - VALIDATION_ERROR: rejection without a reason
            - CONCURRENT_MODIFICATION: record changed since it was read
        """
        new_status = command.status
        notifications = []

        async with self.uow:
            try:
                request = await self.uow.repair_requests.get(request_id)
                if request is None or request.tenant_id != tenant_id:
                    return Return.err(Error(ErrorCode.NOT_FOUND, "Repair request not found"))

                error = version_mismatch(command.expected_version, request.version)
                if error:
                    return Return.err(error)

                if new_status in CONVERSION_ONLY:
                    return Return.err(
                        Error(
                            ErrorCode.INVALID_TRANSITION,
                            "Repair requests are converted through the conversion endpoint",
                        )
                    )

                error = check_transition(
                    request.status,
                    new_status,
                    can_transition_repair(request.status, new_status),
                    command.force,
                )
                if error:
                    return Return.err(error)

                reason = (command.reason or "").strip() or None
                if new_status == RepairRequestStatus.rejected and reason is None:
                    return Return.err(
                        Error(ErrorCode.VALIDATION_ERROR, "A reason is required to reject a repair request")
                    )

                changed_at = now_iso()
                updated = await self.uow.repair_requests.append_history(
                    request_id,
                    StatusChange(
                        status=new_status.value,
                        changed_by=actor_id,
                        changed_at=changed_at,
                        reason=reason,
                    ),
                    patch=repair_side_fields(new_status, actor_id, changed_at, reason),
                    expected_version=request.version,
                )

                submitter_id = request.submitted_by.user_id if request.submitted_by else None
                if new_status in SUBMITTER_NOTIFIED and submitter_id and submitter_id != actor_id:
                    message = f"Your repair request '{request.title}' was {new_status.value}"
                    if reason:
                        message = f"{message}: {reason}"
                    notifications = await notify_users(
                        self.uow,
                        tenant_id,
                        [submitter_id],
                        type=NotificationType.repair_request,
                        title=f"Repair request {new_status.value}",
                        message=message,
                        related_id=request_id,
                        context={"status": new_status.value},
                    )

                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        if notifications and self.dispatcher is not None:
            self.dispatcher.enqueue(notifications)
        return Return.ok(updated)
