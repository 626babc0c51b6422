"""
Repair Request Use Case DTOs

Commands and responses for the repair request workflow.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities import (
    ProjectPriority,
    RepairRequestArea,
    RepairRequestSeverity,
    RepairRequestStatus,
)

# ============================================================================
# Commands
# ============================================================================


class CreateRepairRequestCommand(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    area: RepairRequestArea = RepairRequestArea.other
    severity: RepairRequestSeverity = RepairRequestSeverity.medium
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    photos: List[str] = Field(default_factory=list)
    unit_number: Optional[str] = None


class TransitionCommand(BaseModel):
    status: RepairRequestStatus
    reason: Optional[str] = None
    force: bool = False
    expected_version: Optional[int] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RepairRequestStats(BaseModel):
    """Per-tenant repair request totals"""

    total: int
    by_status: Dict[str, int]
    by_severity: Dict[str, int]
    total_estimated_cost: float
    total_actual_cost: float


class ConvertRepairRequestResponse(BaseModel):
    repair_request_id: str
    project_id: str
    priority: ProjectPriority
    admins_notified: int
