"""
Tenant ownership table.

Every record kind a tenant owns, paired with the field holding the tenant
key. The cascading tenant deletion walks exactly this table; a new
tenant-scoped kind must be added here and to the UnitOfWork together.
"""

from typing import Tuple

from src.domain.entities import (
    Announcement,
    DismissedNotification,
    DocumentFolder,
    Expense,
    Fund,
    FundTransaction,
    MaintenanceProject,
    Meeting,
    Message,
    Notification,
    PaymentReminder,
    Quote,
    RepairRequest,
    StrataDocument,
    Unit,
    UserTenantAccess,
    Vendor,
    VendorContract,
    VendorHistory,
)

TENANT_DEPENDENTS: Tuple[Tuple[str, str], ...] = (
    (Unit.collection_name, "tenant_id"),
    (Expense.collection_name, "tenant_id"),
    (Vendor.collection_name, "tenant_id"),
    (VendorContract.collection_name, "tenant_id"),
    (VendorHistory.collection_name, "tenant_id"),
    (Quote.collection_name, "tenant_id"),
    (Meeting.collection_name, "tenant_id"),
    (StrataDocument.collection_name, "tenant_id"),
    (DocumentFolder.collection_name, "tenant_id"),
    (RepairRequest.collection_name, "tenant_id"),
    (MaintenanceProject.collection_name, "tenant_id"),
    (Announcement.collection_name, "tenant_id"),
    (Message.collection_name, "tenant_id"),
    (Notification.collection_name, "tenant_id"),
    (DismissedNotification.collection_name, "tenant_id"),
    (Fund.collection_name, "tenant_id"),
    (FundTransaction.collection_name, "tenant_id"),
    (PaymentReminder.collection_name, "tenant_id"),
    (UserTenantAccess.collection_name, "tenant_id"),
)
