from abc import ABC, abstractmethod
from typing import Dict, NamedTuple, Sequence, Type

from src.app.repositories.document_repository import IDocumentRepository
from src.domain.entities import (
    Announcement,
    DismissedNotification,
    Document,
    DocumentFolder,
    Expense,
    Fund,
    FundTransaction,
    MailMessage,
    MaintenanceProject,
    Meeting,
    Message,
    Notification,
    PaymentReminder,
    PendingRegistration,
    Quote,
    RepairRequest,
    StrataDocument,
    Tenant,
    Unit,
    User,
    UserTenantAccess,
    Vendor,
    VendorContract,
    VendorHistory,
)

# Every record kind, keyed by collection; each is exposed on the UnitOfWork
# under an attribute of the same name.
RECORD_KINDS: Dict[str, Type[Document]] = {
    model.collection_name: model
    for model in (
        Tenant,
        User,
        UserTenantAccess,
        Unit,
        Expense,
        Vendor,
        VendorContract,
        VendorHistory,
        Quote,
        Meeting,
        StrataDocument,
        DocumentFolder,
        RepairRequest,
        MaintenanceProject,
        Announcement,
        Message,
        Notification,
        DismissedNotification,
        Fund,
        FundTransaction,
        PaymentReminder,
        PendingRegistration,
        MailMessage,
    )
}


class DocumentRef(NamedTuple):
    collection: str
    id: str


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    tenants: IDocumentRepository[Tenant]
    users: IDocumentRepository[User]
    user_tenant_access: IDocumentRepository[UserTenantAccess]
    units: IDocumentRepository[Unit]
    expenses: IDocumentRepository[Expense]
    vendors: IDocumentRepository[Vendor]
    vendor_contracts: IDocumentRepository[VendorContract]
    vendor_history: IDocumentRepository[VendorHistory]
    quotes: IDocumentRepository[Quote]
    meetings: IDocumentRepository[Meeting]
    documents: IDocumentRepository[StrataDocument]
    document_folders: IDocumentRepository[DocumentFolder]
    repair_requests: IDocumentRepository[RepairRequest]
    maintenance_projects: IDocumentRepository[MaintenanceProject]
    announcements: IDocumentRepository[Announcement]
    messages: IDocumentRepository[Message]
    notifications: IDocumentRepository[Notification]
    dismissed_notifications: IDocumentRepository[DismissedNotification]
    funds: IDocumentRepository[Fund]
    fund_transactions: IDocumentRepository[FundTransaction]
    payment_reminders: IDocumentRepository[PaymentReminder]
    pending_registrations: IDocumentRepository[PendingRegistration]
    mail: IDocumentRepository[MailMessage]

    def repository_for(self, collection: str) -> IDocumentRepository:
        """Repository for a collection name"""
        if collection not in RECORD_KINDS:
            raise KeyError(f"Unknown collection: {collection}")
        return getattr(self, collection)

    @abstractmethod
    async def delete_batch(self, refs: Sequence[DocumentRef]) -> int:
        """Delete many records across collections in one statement group; returns count"""
        pass

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
