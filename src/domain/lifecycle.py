"""
Repair request and maintenance project state machines.

Both follow a happy path one step at a time: a status moves only to the
next status on its path, never skipping ahead and never moving back, so a
repair request cannot be planned without first being approved. Terminal
statuses have no exits.
"""

from typing import Dict, FrozenSet, Optional, Sequence

from src.domain.entities import (
    ProjectPriority,
    ProjectStatus,
    RepairRequestSeverity,
    RepairRequestStatus,
)

REPAIR_HAPPY_PATH: Sequence[RepairRequestStatus] = (
    RepairRequestStatus.suggested,
    RepairRequestStatus.approved,
    RepairRequestStatus.planned,
    RepairRequestStatus.scheduled,
    RepairRequestStatus.in_progress,
    RepairRequestStatus.completed,
)

PROJECT_HAPPY_PATH: Sequence[ProjectStatus] = (
    ProjectStatus.planned,
    ProjectStatus.scheduled,
    ProjectStatus.in_progress,
    ProjectStatus.completed,
)

REPAIR_TERMINAL: FrozenSet[RepairRequestStatus] = frozenset(
    {
        RepairRequestStatus.completed,
        RepairRequestStatus.rejected,
        RepairRequestStatus.converted,
    }
)

PROJECT_TERMINAL: FrozenSet[ProjectStatus] = frozenset(
    {ProjectStatus.completed, ProjectStatus.cancelled}
)

# Statuses a project must be in before it can be archived
ARCHIVABLE: FrozenSet[ProjectStatus] = PROJECT_TERMINAL


def _next_step_edges(path: Sequence) -> Dict:
    edges = {status: frozenset({nxt}) for status, nxt in zip(path, path[1:])}
    edges[path[-1]] = frozenset()
    return edges


def _build_repair_transitions() -> Dict[RepairRequestStatus, FrozenSet[RepairRequestStatus]]:
    edges = _next_step_edges(REPAIR_HAPPY_PATH)
    edges[RepairRequestStatus.suggested] |= {RepairRequestStatus.rejected}
    edges[RepairRequestStatus.approved] |= {RepairRequestStatus.rejected}
    edges[RepairRequestStatus.rejected] = frozenset()
    edges[RepairRequestStatus.converted] = frozenset()
    return edges


def _build_project_transitions() -> Dict[ProjectStatus, FrozenSet[ProjectStatus]]:
    edges = _next_step_edges(PROJECT_HAPPY_PATH)
    for status in PROJECT_HAPPY_PATH:
        if status not in PROJECT_TERMINAL:
            edges[status] |= {ProjectStatus.cancelled}
    edges[ProjectStatus.cancelled] = frozenset()
    return edges


REPAIR_TRANSITIONS = _build_repair_transitions()
PROJECT_TRANSITIONS = _build_project_transitions()

# Reached only through the conversion use case, never a plain transition
CONVERSION_ONLY: FrozenSet[RepairRequestStatus] = frozenset({RepairRequestStatus.converted})

# Repair request severity to the priority of the project it converts into
SEVERITY_PRIORITY: Dict[RepairRequestSeverity, ProjectPriority] = {
    RepairRequestSeverity.low: ProjectPriority.low,
    RepairRequestSeverity.medium: ProjectPriority.medium,
    RepairRequestSeverity.high: ProjectPriority.high,
    RepairRequestSeverity.emergency: ProjectPriority.urgent,
}

# Statuses the submitter of a repair request hears about
SUBMITTER_NOTIFIED: FrozenSet[RepairRequestStatus] = frozenset(
    {
        RepairRequestStatus.approved,
        RepairRequestStatus.rejected,
        RepairRequestStatus.completed,
    }
)


def can_transition_repair(
    current: RepairRequestStatus, new: RepairRequestStatus
) -> bool:
    if new in CONVERSION_ONLY:
        return False
    return new in REPAIR_TRANSITIONS.get(current, frozenset())


def can_transition_project(current: ProjectStatus, new: ProjectStatus) -> bool:
    return new in PROJECT_TRANSITIONS.get(current, frozenset())


def repair_side_fields(
    new_status: RepairRequestStatus,
    actor_id: str,
    changed_at: str,
    reason: Optional[str] = None,
) -> dict:
    """Fields stamped alongside a repair request status change"""
    if new_status == RepairRequestStatus.approved:
        return {"approved_by": actor_id, "approved_at": changed_at}
    if new_status == RepairRequestStatus.rejected:
        return {
            "rejected_by": actor_id,
            "rejected_at": changed_at,
            "rejection_reason": reason,
        }
    if new_status == RepairRequestStatus.completed:
        return {"completed_date": changed_at}
    return {}


def project_side_fields(new_status: ProjectStatus, actor_id: str, changed_at: str) -> dict:
    """Fields stamped alongside a maintenance project status change"""
    if new_status == ProjectStatus.completed:
        return {"completed_date": changed_at}
    if new_status == ProjectStatus.cancelled:
        return {"cancelled_by": actor_id, "cancelled_at": changed_at}
    return {}
