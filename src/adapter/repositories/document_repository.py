import functools
import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type

from sqlalchemy import delete, update
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.document_repository import IDocumentRepository, T
from src.domain.base import generate_id, utcnow
from src.domain.entities import SERVER_FIELDS, StatusChange, StoredDocument
from src.domain.errors import (
    DocumentNotFound,
    InvalidFilter,
    InvalidPatch,
    StoreUnavailable,
    VersionConflict,
)
from src.domain.timestamps import normalize_timestamps

logger = logging.getLogger(__name__)

HISTORY_FIELDS = frozenset({"status", "status_history"})

# Faults of the store itself, as opposed to bad statements
TRANSPORT_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, OSError)


def translate_store_errors(method):
    """Re-raise transport faults as StoreUnavailable"""

    @functools.wraps(method)
    async def wrapper(*args, **kwargs):
        try:
            return await method(*args, **kwargs)
        except TRANSPORT_ERRORS as exc:
            logger.error(f"Document store unavailable in {method.__qualname__}: {exc}")
            raise StoreUnavailable(str(exc)) from exc

    return wrapper


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _sorted(records: List[T], order_by: Optional[str], descending: bool) -> List[T]:
    """Sort by a field in memory; records missing the field go last"""
    if order_by is None:
        return records
    present = [r for r in records if getattr(r, order_by, None) is not None]
    missing = [r for r in records if getattr(r, order_by, None) is None]
    present.sort(key=lambda r: _plain(getattr(r, order_by)), reverse=descending)
    return present + missing


class DocumentRepository(IDocumentRepository[T]):
    """Document repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @translate_store_errors
    async def get(self, doc_id: str) -> Optional[T]:
        """Get record by ID"""
        row = await self._get_row(doc_id)
        return self._to_entity(row) if row is not None else None

    @translate_store_errors
    async def list_by_tenant(
        self,
        tenant_id: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = "created_at",
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[T]:
        """List a tenant's records, filtering and ordering in memory"""
        stmt = select(StoredDocument).where(
            StoredDocument.collection == self.collection,
            StoredDocument.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        records = self._select(result.scalars().all(), filters or {}, order_by, descending)
        return records[:limit] if limit is not None else records

    @translate_store_errors
    async def list_where(
        self,
        filters: Dict[str, Any],
        order_by: Optional[str] = "created_at",
        descending: bool = True,
    ) -> List[T]:
        """List records of any tenant matching equality filters"""
        stmt = select(StoredDocument).where(StoredDocument.collection == self.collection)
        result = await self.session.execute(stmt)
        return self._select(result.scalars().all(), filters, order_by, descending)

    @translate_store_errors
    async def list_ids_by_tenant(self, tenant_id: str) -> List[str]:
        """IDs of a tenant's records"""
        stmt = select(StoredDocument.id).where(
            StoredDocument.collection == self.collection,
            StoredDocument.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @translate_store_errors
    async def create(self, entity: T) -> T:
        """Create a new record"""
        doc_id = entity.id or generate_id()
        if self.model.tenant_field == "id":
            tenant_id = doc_id
        else:
            tenant_id = entity.tenant_key()
        if self.model.tenant_field is not None and not tenant_id:
            raise InvalidPatch(f"{self.collection} records require a tenant id")

        now = utcnow()
        row = StoredDocument(
            id=doc_id,
            collection=self.collection,
            tenant_id=tenant_id,
            data=self._dump(entity),
            version=1,
            created_at=now,
            updated_at=now,
        )
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        return self._to_entity(row)

    @translate_store_errors
    async def update(
        self,
        doc_id: str,
        patch: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> T:
        """Merge patch onto existing record"""
        self._check_patch(patch)
        row = await self._get_row(doc_id)
        if row is None:
            raise DocumentNotFound(self.collection, doc_id)
        self._check_version(row, expected_version)

        data = {**row.data, **normalize_timestamps(patch)}
        return await self._write(row, data)

    @translate_store_errors
    async def append_history(
        self,
        doc_id: str,
        change: StatusChange,
        patch: Optional[Dict[str, Any]] = None,
        expected_version: Optional[int] = None,
    ) -> T:
        """Append a status change together with its side fields"""
        if "status_history" not in self.model.model_fields:
            raise InvalidPatch(f"{self.collection} records have no status history")
        patch = patch or {}
        self._check_patch(patch)
        row = await self._get_row(doc_id)
        if row is None:
            raise DocumentNotFound(self.collection, doc_id)
        self._check_version(row, expected_version)

        history = list(row.data.get("status_history") or [])
        history.append(change.model_dump(mode="json"))
        data = {
            **row.data,
            **normalize_timestamps(patch),
            "status": change.status,
            "status_history": history,
        }
        return await self._write(row, data)

    @translate_store_errors
    async def delete(self, doc_id: str) -> None:
        """Delete record if present"""
        stmt = delete(StoredDocument).where(
            StoredDocument.id == doc_id,
            StoredDocument.collection == self.collection,
        )
        await self.session.execute(stmt)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_row(self, doc_id: str) -> Optional[StoredDocument]:
        stmt = select(StoredDocument).where(
            StoredDocument.id == doc_id,
            StoredDocument.collection == self.collection,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _write(self, row: StoredDocument, data: Dict[str, Any]) -> T:
        # Validate the merged record before anything reaches the store
        entity = self.model.model_validate({**data, "id": row.id})
        stmt = (
            update(StoredDocument)
            .where(StoredDocument.id == row.id, StoredDocument.version == row.version)
            .values(data=self._dump(entity), version=row.version + 1, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            await self._raise_lost_write(row)
        await self.session.refresh(row)
        return self._to_entity(row)

    async def _raise_lost_write(self, row: StoredDocument) -> None:
        stmt = select(StoredDocument.version).where(StoredDocument.id == row.id)
        result = await self.session.execute(stmt)
        current = result.scalar_one_or_none()
        if current is None:
            raise DocumentNotFound(self.collection, row.id)
        raise VersionConflict(self.collection, row.id, row.version, current)

    def _check_version(self, row: StoredDocument, expected_version: Optional[int]) -> None:
        if expected_version is not None and row.version != expected_version:
            raise VersionConflict(self.collection, row.id, expected_version, row.version)

    def _check_patch(self, patch: Dict[str, Any]) -> None:
        fields = set(patch)
        if fields & SERVER_FIELDS:
            raise InvalidPatch(f"Server-managed fields cannot be patched: {sorted(fields & SERVER_FIELDS)}")
        if self.model.tenant_field in fields:
            raise InvalidPatch(f"{self.model.tenant_field} cannot be changed")
        if "status_history" in self.model.model_fields and fields & HISTORY_FIELDS:
            raise InvalidPatch("Status changes must go through the lifecycle transition")
        unknown = fields - set(self.model.model_fields)
        if unknown:
            raise InvalidPatch(f"Unknown fields for {self.collection}: {sorted(unknown)}")

    def _select(
        self,
        rows: Iterable[StoredDocument],
        filters: Dict[str, Any],
        order_by: Optional[str],
        descending: bool,
    ) -> List[T]:
        unknown = set(filters) - set(self.model.model_fields)
        if order_by is not None and order_by not in self.model.model_fields:
            unknown.add(order_by)
        if unknown:
            raise InvalidFilter(f"Unknown fields for {self.collection}: {sorted(unknown)}")

        records = [self._to_entity(row) for row in rows]
        expected = {key: _plain(value) for key, value in filters.items()}
        matching = [
            record
            for record in records
            if all(_plain(getattr(record, key)) == value for key, value in expected.items())
        ]
        return _sorted(matching, order_by, descending)

    def _dump(self, entity: T) -> Dict[str, Any]:
        return entity.model_dump(mode="json", exclude=set(SERVER_FIELDS))

    def _to_entity(self, row: StoredDocument) -> T:
        payload = dict(row.data)
        payload.update(
            id=row.id,
            version=row.version,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
        return self.model.model_validate(payload)
