"""
Maintenance Project Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.domain.entities import ProjectPriority, ProjectStatus


class CreateMaintenanceProjectCommand(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: str = "other"
    priority: ProjectPriority = ProjectPriority.medium
    estimated_cost: float = Field(default=0.0, ge=0)
    scheduled_date: Optional[str] = None
    next_service_date: Optional[str] = None
    contractor: Optional[str] = None
    warranty: Optional[str] = None
    notes: Optional[str] = None


class ProjectTransitionCommand(BaseModel):
    status: ProjectStatus
    reason: Optional[str] = None
    force: bool = False
    expected_version: Optional[int] = None
