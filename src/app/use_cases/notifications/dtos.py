"""
Notification Use Case DTOs

Commands for creating notifications.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from src.domain.entities import NotificationType


class CreateNotificationCommand(BaseModel):
    tenant_id: str
    user_id: str
    type: NotificationType = NotificationType.system
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    related_id: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)
