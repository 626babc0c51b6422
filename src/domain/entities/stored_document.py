"""
StoredDocument Entity

The physical row behind every record kind: one JSON document per row,
partitioned by collection and tenant.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class StoredDocument(SQLModel, table=True):
    """
    StoredDocument - schemaless record storage.

    Business Rules:
    - (collection, tenant_id) is the only server-side query predicate
    - version increases by one on every write (optimistic concurrency)
    - tenant_id is NULL for global kinds (users, registrations, mail)
    """

    __tablename__ = "documents"

    id: str = Field(primary_key=True, max_length=64)
    collection: str = Field(max_length=64, nullable=False)
    tenant_id: Optional[str] = Field(default=None, max_length=64)

    data: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    version: int = Field(default=1, nullable=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )

    __table_args__ = (
        Index("idx_documents_collection_tenant", "collection", "tenant_id"),
    )
