"""
Admin Use Case DTOs

Commands and responses for onboarding decisions.
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.domain.entities import SubscriptionTier, Tenant


class ApproveRegistrationCommand(BaseModel):
    subscription_tier: SubscriptionTier = SubscriptionTier.trial
    is_free_forever: bool = False
    monthly_rate: Optional[float] = Field(default=None, ge=0)


class RejectRegistrationCommand(BaseModel):
    reason: str


class ApproveRegistrationResponse(BaseModel):
    registration_id: str
    tenant: Tenant
    admin_user_id: str
    access_id: str
    user_created: bool
