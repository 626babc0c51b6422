import pytest

from src.app.use_cases.records import (
    CreateRecordUseCase,
    DeleteRecordUseCase,
    GetRecordUseCase,
    ListRecordsUseCase,
    UpdateRecordUseCase,
)
from src.domain.entities import Unit
from src.domain.errors import InvalidPatch, StoreUnavailable
from tests.unit.factories import TENANT_ID, make_tenant, patcher


def make_unit(**overrides):
    data = dict(id="unit-1", tenant_id=TENANT_ID, unit_number="101", version=2)
    data.update(overrides)
    return Unit(**data)


@pytest.mark.asyncio
async def test_create_record_sets_tenant(mock_uow):
    mock_uow.tenants.get.return_value = make_tenant()

    result = await CreateRecordUseCase(mock_uow).execute(TENANT_ID, "units", {"unit_number": "101"})

    assert result.is_ok()
    created = mock_uow.units.create.await_args.args[0]
    assert isinstance(created, Unit)
    assert created.tenant_id == TENANT_ID
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_rejects_server_fields(mock_uow):
    result = await CreateRecordUseCase(mock_uow).execute(
        TENANT_ID, "units", {"unit_number": "101", "version": 9}
    )

    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.units.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_rejects_invalid_payload(mock_uow):
    result = await CreateRecordUseCase(mock_uow).execute(TENANT_ID, "units", {"square_footage": "big"})

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_unknown_kind(mock_uow):
    result = await GetRecordUseCase(mock_uow).execute(TENANT_ID, "repair_requests", "rr-1")

    assert result.error.code == "NOT_FOUND"


@pytest.mark.asyncio
async def test_get_hides_other_tenants_records(mock_uow):
    mock_uow.units.get.return_value = make_unit(tenant_id="tenant-2")

    result = await GetRecordUseCase(mock_uow).execute(TENANT_ID, "units", "unit-1")

    assert result.error.code == "NOT_FOUND"


@pytest.mark.asyncio
async def test_get_retries_store_outages(mock_uow):
    mock_uow.units.get.side_effect = [StoreUnavailable("blip"), make_unit()]

    result = await GetRecordUseCase(mock_uow, read_attempts=2).execute(TENANT_ID, "units", "unit-1")

    assert result.value.id == "unit-1"
    assert mock_uow.units.get.await_count == 2


@pytest.mark.asyncio
async def test_list_passes_filters(mock_uow):
    await ListRecordsUseCase(mock_uow).execute(TENANT_ID, "units", filters={"unit_type": "condo"}, limit=5)

    mock_uow.units.list_by_tenant.assert_awaited_once_with(
        TENANT_ID, filters={"unit_type": "condo"}, order_by="created_at", descending=True, limit=5
    )


@pytest.mark.asyncio
async def test_update_is_guarded_by_current_version(mock_uow):
    unit = make_unit()
    mock_uow.units.get.return_value = unit
    mock_uow.units.update.side_effect = patcher(unit)

    result = await UpdateRecordUseCase(mock_uow).execute(TENANT_ID, "units", "unit-1", {"owner_name": "Kim"})

    assert result.value.owner_name == "Kim"
    mock_uow.units.update.assert_awaited_once_with("unit-1", {"owner_name": "Kim"}, expected_version=2)


@pytest.mark.asyncio
async def test_update_with_invalid_patch(mock_uow):
    mock_uow.units.get.return_value = make_unit()
    mock_uow.units.update.side_effect = InvalidPatch("Unknown fields for units: ['colour']")

    result = await UpdateRecordUseCase(mock_uow).execute(TENANT_ID, "units", "unit-1", {"colour": "red"})

    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_is_idempotent(mock_uow):
    result = await DeleteRecordUseCase(mock_uow).execute(TENANT_ID, "units", "gone")

    assert result.is_ok()
    mock_uow.units.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_own_record(mock_uow):
    mock_uow.units.get.return_value = make_unit()

    result = await DeleteRecordUseCase(mock_uow).execute(TENANT_ID, "units", "unit-1")

    assert result.is_ok()
    mock_uow.units.delete.assert_awaited_once_with("unit-1")
    mock_uow.commit.assert_awaited_once()
