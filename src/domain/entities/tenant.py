"""
Tenant Entity

A strata corporation: the root partition owning every other record.
"""

from typing import ClassVar, Optional

from sqlmodel import Field

from .document import Document
from .enums import SubscriptionStatus, SubscriptionTier, TenantStatus


class Tenant(Document):
    """
    Tenant entity - root partition.

    Business Rules:
    - Every other tenant-scoped record carries this tenant's id
    - Created by approving a pending registration
    - Destroyed only by the cascading tenant deletion
    """

    collection_name: ClassVar[str] = "tenants"
    tenant_field: ClassVar[Optional[str]] = "id"

    name: str = Field(max_length=255)
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    country: str = "Canada"
    phone_number: Optional[str] = None
    email: Optional[str] = None
    unit_count: int = 0
    management_company: Optional[str] = None

    status: TenantStatus = TenantStatus.active

    # Subscription
    subscription_status: SubscriptionStatus = SubscriptionStatus.trial
    subscription_tier: SubscriptionTier = SubscriptionTier.standard
    monthly_rate: Optional[float] = None
    is_free_forever: bool = False
    trial_start_date: Optional[str] = None
    trial_end_date: Optional[str] = None

    created_by: Optional[str] = None
