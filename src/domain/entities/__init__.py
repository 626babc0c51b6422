"""
Strata Domain Entities

All record kinds organized by model.
Each entity family in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ADMIN_ROLES,
    AccessRole,
    ExpenseStatus,
    MeetingStatus,
    NotificationType,
    ProjectPriority,
    ProjectStatus,
    QuoteStatus,
    RegistrationStatus,
    ReminderStatus,
    RepairRequestArea,
    RepairRequestSeverity,
    RepairRequestStatus,
    SubscriptionStatus,
    SubscriptionTier,
    TenantStatus,
)

# Export all entities
from .document import SERVER_FIELDS, Document, StatusChange
from .stored_document import StoredDocument
from .tenant import Tenant
from .user import User
from .user_tenant_access import UserTenantAccess
from .repair_request import RepairRequest, Submitter
from .maintenance_project import MaintenanceProject
from .notification import DismissedNotification, Notification
from .finance import Expense, Fund, FundTransaction, PaymentReminder
from .vendor import Quote, Vendor, VendorContract, VendorHistory
from .records import Announcement, DocumentFolder, Meeting, Message, StrataDocument, Unit
from .registration import PendingRegistration
from .mail import MailMessage

__all__ = [
    # Enums
    "ADMIN_ROLES",
    "AccessRole",
    "ExpenseStatus",
    "MeetingStatus",
    "NotificationType",
    "ProjectPriority",
    "ProjectStatus",
    "QuoteStatus",
    "RegistrationStatus",
    "ReminderStatus",
    "RepairRequestArea",
    "RepairRequestSeverity",
    "RepairRequestStatus",
    "SubscriptionStatus",
    "SubscriptionTier",
    "TenantStatus",
    # Base
    "SERVER_FIELDS",
    "Document",
    "StatusChange",
    "StoredDocument",
    # Entities
    "Tenant",
    "User",
    "UserTenantAccess",
    "RepairRequest",
    "Submitter",
    "MaintenanceProject",
    "Notification",
    "DismissedNotification",
    "Expense",
    "Fund",
    "FundTransaction",
    "PaymentReminder",
    "Quote",
    "Vendor",
    "VendorContract",
    "VendorHistory",
    "Announcement",
    "DocumentFolder",
    "Meeting",
    "Message",
    "StrataDocument",
    "Unit",
    "PendingRegistration",
    "MailMessage",
]
