"""
Document base types

Every record kind is an explicit schema over a stored document. The schema
declares which collection it lives in and which field carries its tenant key.
"""

from typing import ClassVar, Optional

from pydantic import model_validator
from sqlmodel import SQLModel

from src.domain.timestamps import normalize_timestamps

# Fields owned by the store; never written through a patch
SERVER_FIELDS = frozenset({"id", "version", "created_at", "updated_at"})


class Document(SQLModel):
    """
    Base record.

    Timestamps are held as canonical ISO-8601 strings. Any input (a store
    row, a request body, a patch) is normalized before field validation, so a
    ``datetime`` or a ``{"seconds", "nanoseconds"}`` map is accepted anywhere
    a timestamp is expected.
    """

    collection_name: ClassVar[str] = ""
    # None for global kinds (users, registrations, mail)
    tenant_field: ClassVar[Optional[str]] = "tenant_id"

    id: Optional[str] = None
    version: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_timestamps(cls, values):
        return normalize_timestamps(values)

    def tenant_key(self) -> Optional[str]:
        if self.tenant_field is None:
            return None
        return getattr(self, self.tenant_field)


class StatusChange(SQLModel):
    """One entry of an append-only status history"""

    status: str
    changed_by: str
    changed_at: str
    reason: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_timestamps(cls, values):
        return normalize_timestamps(values)
