"""
UserTenantAccess Entity

Links a User to a Tenant with a role.
"""

from typing import ClassVar

from .document import Document
from .enums import AccessRole


class UserTenantAccess(Document):
    """
    UserTenantAccess entity - user role within a tenant.

    Business Rules:
    - At most one record per (user_id, tenant_id), enforced by the
      assignment use case rather than the store
    - Deleted individually or with the tenant
    """

    collection_name: ClassVar[str] = "user_tenant_access"

    user_id: str
    tenant_id: str
    role: AccessRole = AccessRole.resident
    can_post_announcements: bool = False
