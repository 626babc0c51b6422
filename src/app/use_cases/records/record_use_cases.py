"""
Generic record use cases

Create, read, list, patch and delete for the leaf record kinds. Every
operation is scoped to one tenant: records of another tenant are reported as
missing.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from libs.result import Error, Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.entities import SERVER_FIELDS, Document
from src.domain.errors import ErrorCode

from .kinds import LEAF_KINDS


def _unknown_kind(collection: str) -> Error:
    return Error(ErrorCode.NOT_FOUND, f"Unknown record kind: {collection}")


def _not_found(collection: str) -> Error:
    return Error(ErrorCode.NOT_FOUND, f"Record not found in {collection}")


class CreateRecordUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: str, collection: str, data: Dict[str, Any]) -> Result[Document]:
        model = LEAF_KINDS.get(collection)
        if model is None:
            return Return.err(_unknown_kind(collection))

        blocked = sorted(set(data) & (SERVER_FIELDS | {"tenant_id"}))
        if blocked:
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, f"Fields are set by the server: {blocked}")
            )

        try:
            entity = model.model_validate({**data, "tenant_id": tenant_id})
        except ValidationError as exc:
            return Return.err(store_error(exc))

        async with self.uow:
            try:
                tenant = await self.uow.tenants.get(tenant_id)
                if tenant is None:
                    return Return.err(Error(ErrorCode.TENANT_NOT_FOUND, "Tenant not found"))

                created = await self.uow.repository_for(collection).create(entity)
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(created)


class GetRecordUseCase:
    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(self, tenant_id: str, collection: str, record_id: str) -> Result[Document]:
        if collection not in LEAF_KINDS:
            return Return.err(_unknown_kind(collection))

        async with self.uow:
            try:
                record = await read_with_retry(
                    lambda: self.uow.repository_for(collection).get(record_id),
                    self.read_attempts,
                )
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        if record is None or record.tenant_key() != tenant_id:
            return Return.err(_not_found(collection))
        return Return.ok(record)


class ListRecordsUseCase:
    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(
        self,
        tenant_id: str,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: str = "created_at",
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> Result[List[Document]]:
        if collection not in LEAF_KINDS:
            return Return.err(_unknown_kind(collection))

        async with self.uow:
            try:
                records = await read_with_retry(
                    lambda: self.uow.repository_for(collection).list_by_tenant(
                        tenant_id,
                        filters=filters,
                        order_by=order_by,
                        descending=descending,
                        limit=limit,
                    ),
                    self.read_attempts,
                )
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(records)


class UpdateRecordUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: str,
        collection: str,
        record_id: str,
        patch: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Result[Document]:
        if collection not in LEAF_KINDS:
            return Return.err(_unknown_kind(collection))

        async with self.uow:
            try:
                repository = self.uow.repository_for(collection)
                record = await repository.get(record_id)
                if record is None or record.tenant_key() != tenant_id:
                    return Return.err(_not_found(collection))

                updated = await repository.update(
                    record_id,
                    patch,
                    expected_version=expected_version if expected_version is not None else record.version,
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(updated)


class DeleteRecordUseCase:
    """Delete a record; deleting one that is already gone succeeds"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: str, collection: str, record_id: str) -> Result[None]:
        if collection not in LEAF_KINDS:
            return Return.err(_unknown_kind(collection))

        async with self.uow:
            try:
                repository = self.uow.repository_for(collection)
                record = await repository.get(record_id)
                if record is None:
                    return Return.ok(None)
                if record.tenant_key() != tenant_id:
                    return Return.err(_not_found(collection))

                await repository.delete(record_id)
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(None)
