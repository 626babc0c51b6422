"""
PendingRegistration Entity

A request to onboard a new strata; global until approved.
"""

from typing import ClassVar, Optional

from .document import Document
from .enums import RegistrationStatus


class PendingRegistration(Document):
    collection_name: ClassVar[str] = "pending_registrations"
    tenant_field: ClassVar[Optional[str]] = None

    strata_name: str
    address: str
    city: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    unit_count: int = 0
    admin_first_name: str
    admin_last_name: str
    admin_email: str
    admin_phone: Optional[str] = None
    management_type: str = "self_managed"
    management_company: Optional[str] = None
    description: Optional[str] = None

    status: RegistrationStatus = RegistrationStatus.pending
    approved_by: Optional[str] = None
    approved_at: Optional[str] = None
    rejected_by: Optional[str] = None
    rejected_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_tenant_id: Optional[str] = None
