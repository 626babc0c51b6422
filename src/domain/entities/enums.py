"""
Strata Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant (strata) status"""

    active = "active"
    inactive = "inactive"
    archived = "archived"


class SubscriptionStatus(str, Enum):
    """Tenant subscription state"""

    trial = "trial"
    active = "active"
    cancelled = "cancelled"
    expired = "expired"
    free = "free"


class SubscriptionTier(str, Enum):
    """Tenant subscription tier"""

    trial = "trial"
    standard = "standard"
    premium = "premium"
    free = "free"


class AccessRole(str, Enum):
    """User role within a tenant"""

    chairperson = "chairperson"
    treasurer = "treasurer"
    secretary = "secretary"
    council_member = "council_member"
    property_manager = "property_manager"
    resident = "resident"
    admin = "admin"


# Roles that receive administrative notifications for a tenant
ADMIN_ROLES = frozenset(
    {
        AccessRole.chairperson,
        AccessRole.treasurer,
        AccessRole.secretary,
        AccessRole.property_manager,
        AccessRole.admin,
    }
)


class RepairRequestStatus(str, Enum):
    """Repair request lifecycle status"""

    suggested = "suggested"
    approved = "approved"
    planned = "planned"
    scheduled = "scheduled"
    in_progress = "in-progress"
    completed = "completed"
    rejected = "rejected"
    converted = "converted"


class RepairRequestSeverity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    emergency = "emergency"


class RepairRequestArea(str, Enum):
    common_areas = "common-areas"
    exterior = "exterior"
    unit_specific = "unit-specific"
    parking = "parking"
    landscaping = "landscaping"
    utilities_hvac = "utilities-hvac"
    roof_structure = "roof-structure"
    other = "other"


class ProjectStatus(str, Enum):
    """Maintenance project lifecycle status"""

    planned = "planned"
    scheduled = "scheduled"
    in_progress = "in-progress"
    completed = "completed"
    cancelled = "cancelled"


class ProjectPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class ExpenseStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class QuoteStatus(str, Enum):
    submitted = "submitted"
    under_review = "under_review"
    approved = "approved"
    rejected = "rejected"


class MeetingStatus(str, Enum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"


class ReminderStatus(str, Enum):
    active = "active"
    paused = "paused"
    completed = "completed"
    cancelled = "cancelled"


class RegistrationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class NotificationType(str, Enum):
    message = "message"
    announcement = "announcement"
    meeting = "meeting"
    quote = "quote"
    maintenance = "maintenance"
    repair_request = "repair_request"
    system = "system"
