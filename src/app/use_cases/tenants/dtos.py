"""
Tenant Use Case DTOs (Data Transfer Objects)

Commands for managing who can access a tenant.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import AccessRole


class AssignAccessCommand(BaseModel):
    user_id: str
    role: AccessRole = AccessRole.resident
    can_post_announcements: bool = False


class ChangeAccessCommand(BaseModel):
    role: AccessRole
    can_post_announcements: Optional[bool] = None
