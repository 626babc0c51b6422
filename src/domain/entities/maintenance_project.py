"""
MaintenanceProject Entity

Planned maintenance work, created directly or from an approved repair request.
"""

from typing import ClassVar, List, Optional

from sqlmodel import Field

from .document import Document, StatusChange
from .enums import ProjectPriority, ProjectStatus


class MaintenanceProject(Document):
    """
    MaintenanceProject entity.

    Business Rules:
    - status_history is append-only
    - archived is a reversible soft delete, allowed once completed or cancelled
    - Hard delete is separate and permanent
    """

    collection_name: ClassVar[str] = "maintenance_projects"

    tenant_id: str
    title: str = Field(max_length=255)
    description: Optional[str] = None
    category: str = "other"
    priority: ProjectPriority = ProjectPriority.medium

    status: ProjectStatus = ProjectStatus.planned
    status_history: List[StatusChange] = Field(default_factory=list)

    estimated_cost: float = 0.0
    actual_cost: Optional[float] = None
    scheduled_date: Optional[str] = None
    completed_date: Optional[str] = None
    next_service_date: Optional[str] = None
    contractor: Optional[str] = None
    warranty: Optional[str] = None
    notes: Optional[str] = None

    cancelled_by: Optional[str] = None
    cancelled_at: Optional[str] = None

    archived: bool = False
    archived_by: Optional[str] = None
    archived_at: Optional[str] = None

    source_repair_request_id: Optional[str] = None
