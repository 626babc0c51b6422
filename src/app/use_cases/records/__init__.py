"""
Record Use Cases

Generic tenant-scoped CRUD for record kinds without workflow rules.
"""

from .kinds import LEAF_KINDS
from .record_use_cases import (
    CreateRecordUseCase,
    DeleteRecordUseCase,
    GetRecordUseCase,
    ListRecordsUseCase,
    UpdateRecordUseCase,
)

__all__ = [
    "LEAF_KINDS",
    "CreateRecordUseCase",
    "DeleteRecordUseCase",
    "GetRecordUseCase",
    "ListRecordsUseCase",
    "UpdateRecordUseCase",
]
