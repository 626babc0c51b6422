"""
Generic Record API Routes

CRUD for record kinds without workflow rules (units, expenses, vendors,
meetings, documents, ...). Any query parameter other than ``order_by``,
``descending`` and ``limit`` is an equality filter on a record field.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status
from pydantic import TypeAdapter, ValidationError

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.api.utils.tenant_auth import get_tenant_user
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.records import (
    LEAF_KINDS,
    CreateRecordUseCase,
    DeleteRecordUseCase,
    GetRecordUseCase,
    ListRecordsUseCase,
    UpdateRecordUseCase,
)
from src.depends import get_unit_of_work
from src.domain.errors import ErrorCode

router = APIRouter(prefix="/tenants/{tenant_id}/records/{kind}", tags=["Records"])

LIST_PARAMS = frozenset({"order_by", "descending", "limit"})


def _query_filters(kind: str, request: Request) -> Dict[str, Any]:
    """Coerce query string filters to the field types of the record kind"""
    model = LEAF_KINDS.get(kind)
    filters = {}
    for key, raw in request.query_params.items():
        if key in LIST_PARAMS:
            continue
        field = model.model_fields.get(key) if model else None
        if field is None:
            filters[key] = raw
            continue
        try:
            filters[key] = TypeAdapter(field.annotation).validate_python(raw)
        except ValidationError:
            raise ClientError(
                Error(ErrorCode.VALIDATION_ERROR, f"Invalid value for filter {key}: {raw}"),
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
    return filters


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_record(
    tenant_id: str,
    kind: str,
    payload: Dict[str, Any] = Body(...),
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = CreateRecordUseCase(uow)
    result = await use_case.execute(tenant_id, kind, payload)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("")
async def list_records(
    tenant_id: str,
    kind: str,
    request: Request,
    order_by: str = "created_at",
    descending: bool = True,
    limit: Optional[int] = None,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ListRecordsUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(
        tenant_id,
        kind,
        filters=_query_filters(kind, request),
        order_by=order_by,
        descending=descending,
        limit=limit,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{record_id}")
async def get_record(
    tenant_id: str,
    kind: str,
    record_id: str,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetRecordUseCase(uow, ApplicationConfig.READ_RETRY_ATTEMPTS)
    result = await use_case.execute(tenant_id, kind, record_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/{record_id}")
async def update_record(
    tenant_id: str,
    kind: str,
    record_id: str,
    patch: Dict[str, Any] = Body(...),
    expected_version: Optional[int] = None,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Merge fields into a record

    Raises:
        - 409 Conflict: CONCURRENT_MODIFICATION
        - 422 Unprocessable Entity: VALIDATION_ERROR (server-managed or unknown fields)
    """
    use_case = UpdateRecordUseCase(uow)
    result = await use_case.execute(tenant_id, kind, record_id, patch, expected_version)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    tenant_id: str,
    kind: str,
    record_id: str,
    current_user: dict = Depends(get_tenant_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = DeleteRecordUseCase(uow)
    result = await use_case.execute(tenant_id, kind, record_id)
    if result.is_err():
        raise_for_error(result.error)
