"""
RepairRequest Entity

A repair suggested by a resident, moving through an approval workflow.
"""

from typing import ClassVar, List, Optional

from sqlmodel import Field, SQLModel

from .document import Document, StatusChange
from .enums import RepairRequestArea, RepairRequestSeverity, RepairRequestStatus


class Submitter(SQLModel):
    """Denormalized snapshot of the submitting user"""

    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    unit_number: Optional[str] = None


class RepairRequest(Document):
    """
    RepairRequest entity.

    Business Rules:
    - status_history is append-only; its last entry always matches status
    - Rejection requires a reason
    - An approved request can be converted into one MaintenanceProject
    """

    collection_name: ClassVar[str] = "repair_requests"

    tenant_id: str
    title: str = Field(max_length=255)
    description: str
    area: RepairRequestArea = RepairRequestArea.other
    severity: RepairRequestSeverity = RepairRequestSeverity.medium
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    photos: List[str] = Field(default_factory=list)
    submitted_by: Optional[Submitter] = None

    status: RepairRequestStatus = RepairRequestStatus.suggested
    status_history: List[StatusChange] = Field(default_factory=list)

    # Transition side fields
    approved_by: Optional[str] = None
    approved_at: Optional[str] = None
    rejected_by: Optional[str] = None
    rejected_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    scheduled_date: Optional[str] = None
    completed_date: Optional[str] = None

    # Conversion
    converted_project_id: Optional[str] = None
    converted_by: Optional[str] = None
    converted_at: Optional[str] = None

    notes: Optional[str] = None
