"""
Use Case: Delete Tenant

Hard-deletes a tenant and every record it owns.

The records to remove come from the ownership table in
``src.domain.cascade``. Dependents go first and the tenant record last, in
batches of at most ``batch_size`` deletes, each committed on its own. A
failure part way leaves the tenant record in place, so the deletion can
simply be run again. User accounts are global and are never deleted here.
"""

import logging
from typing import Dict, List

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import DocumentRef, UnitOfWork
from src.domain.cascade import TENANT_DEPENDENTS
from src.domain.entities import Tenant
from src.domain.errors import ErrorCode, StoreError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500


class DeleteTenantResponse(BaseModel):
    """Response DTO for DeleteTenantUseCase"""

    tenant_id: str
    deleted: Dict[str, int]
    total_deleted: int
    batches_committed: int


class DeleteTenantUseCase:
    """
    Cascading tenant deletion.

    Business Logic:
    1. Verify the tenant exists
    2. Collect the ids of every dependent record, kind by kind
    3. Append the tenant record itself, last
    4. Delete and commit batch by batch

    Errors:
        - TENANT_NOT_FOUND: tenant does not exist
        - TRANSPORT_ERROR: store failed before anything was deleted
        - PARTIAL_FAILURE: store failed after at least one batch committed;
          details carry deleted / remaining counts
    """

    def __init__(self, uow: UnitOfWork, batch_size: int = DEFAULT_BATCH_SIZE, read_attempts: int = 3):
        self.uow = uow
        self.batch_size = max(1, batch_size)
        self.read_attempts = read_attempts

    async def execute(self, tenant_id: str) -> Result[DeleteTenantResponse]:
        async with self.uow:
            try:
                tenant = await read_with_retry(
                    lambda: self.uow.tenants.get(tenant_id), self.read_attempts
                )
                if tenant is None:
                    return Return.err(Error(ErrorCode.TENANT_NOT_FOUND, "Tenant not found"))

                refs, counts = await self._collect(tenant_id)
            except StoreError as exc:
                return Return.err(
                    Error(ErrorCode.TRANSPORT_ERROR, "Failed to read tenant records", reason=str(exc))
                )

            deleted = 0
            batches_committed = 0
            for start in range(0, len(refs), self.batch_size):
                batch = refs[start : start + self.batch_size]
                try:
                    await self.uow.delete_batch(batch)
                    await self.uow.commit()
                except StoreError as exc:
                    await self.uow.rollback()
                    return Return.err(self._failure(tenant_id, exc, deleted, len(refs), batches_committed))

                deleted += len(batch)
                batches_committed += 1
                logger.info(
                    f"Tenant {tenant_id} deletion: batch {batches_committed} committed "
                    f"({deleted}/{len(refs)} records)"
                )

        logger.info(f"Tenant {tenant_id} deleted with {deleted - 1} dependent records")
        return Return.ok(
            DeleteTenantResponse(
                tenant_id=tenant_id,
                deleted=counts,
                total_deleted=deleted,
                batches_committed=batches_committed,
            )
        )

    async def _collect(self, tenant_id: str):
        refs: List[DocumentRef] = []
        counts: Dict[str, int] = {}
        for collection, _tenant_field in TENANT_DEPENDENTS:
            ids = await read_with_retry(
                lambda: self.uow.repository_for(collection).list_ids_by_tenant(tenant_id),
                self.read_attempts,
            )
            counts[collection] = len(ids)
            refs.extend(DocumentRef(collection, doc_id) for doc_id in ids)

        refs.append(DocumentRef(Tenant.collection_name, tenant_id))
        counts[Tenant.collection_name] = 1
        return refs, counts

    def _failure(
        self, tenant_id: str, exc: Exception, deleted: int, total: int, batches_committed: int
    ) -> Error:
        if batches_committed == 0:
            logger.error(f"Tenant {tenant_id} deletion failed before any batch committed: {exc}")
            return Error(ErrorCode.TRANSPORT_ERROR, "Tenant deletion failed", reason=str(exc))

        logger.error(
            f"Tenant {tenant_id} deletion stopped after {batches_committed} batches "
            f"({deleted}/{total} records): {exc}"
        )
        return Error(
            ErrorCode.PARTIAL_FAILURE,
            "Tenant deletion stopped part way; run it again to finish",
            reason=str(exc),
            details={
                "deleted": deleted,
                "remaining": total - deleted,
                "batches_committed": batches_committed,
            },
        )
