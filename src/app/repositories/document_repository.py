from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from src.domain.entities import Document, StatusChange

T = TypeVar("T", bound=Document)


class IDocumentRepository(ABC, Generic[T]):
    """
    Tenant-scoped document repository interface - application layer

    One instance per record kind. Reads return records with canonical ISO
    timestamps; writes stamp server time and bump the record version.
    """

    model: Type[T]

    @property
    def collection(self) -> str:
        return self.model.collection_name

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Persist a new record and return it as re-read from the store"""
        pass

    @abstractmethod
    async def get(self, doc_id: str) -> Optional[T]:
        """Get record by ID, None if absent"""
        pass

    @abstractmethod
    async def list_by_tenant(
        self,
        tenant_id: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = "created_at",
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[T]:
        """
        List a tenant's records.

        Only collection and tenant equality reach the store; extra equality
        filters, ordering and limit are applied in memory. Tenant-scoped sets
        are small, and this is the single place an indexed query would go if
        that stops holding.
        """
        pass

    @abstractmethod
    async def list_where(
        self,
        filters: Dict[str, Any],
        order_by: Optional[str] = "created_at",
        descending: bool = True,
    ) -> List[T]:
        """List records of a global kind matching equality filters"""
        pass

    @abstractmethod
    async def list_ids_by_tenant(self, tenant_id: str) -> List[str]:
        """IDs of every record of this kind owned by the tenant"""
        pass

    @abstractmethod
    async def update(
        self,
        doc_id: str,
        patch: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> T:
        """
        Merge patch onto an existing record.

        Raises:
            DocumentNotFound: record is absent
            VersionConflict: expected_version does not match, or a concurrent
                writer got there first
            InvalidPatch: patch touches server fields, the tenant key, the
                status history or unknown fields
        """
        pass

    @abstractmethod
    async def append_history(
        self,
        doc_id: str,
        change: StatusChange,
        patch: Optional[Dict[str, Any]] = None,
        expected_version: Optional[int] = None,
    ) -> T:
        """Append one status change, set status and apply side fields in one write"""
        pass

    @abstractmethod
    async def delete(self, doc_id: str) -> None:
        """Delete record; deleting an absent record is not an error"""
        pass
