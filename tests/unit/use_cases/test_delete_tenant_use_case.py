import pytest

from src.app.services.unit_of_work import DocumentRef
from src.app.use_cases.tenants import DeleteTenantUseCase
from src.domain.cascade import TENANT_DEPENDENTS
from src.domain.errors import StoreUnavailable
from tests.unit.factories import TENANT_ID, make_tenant


@pytest.fixture
def tenant_with_records(mock_uow):
    mock_uow.tenants.get.return_value = make_tenant()
    mock_uow.units.list_ids_by_tenant.return_value = ["u1", "u2", "u3"]
    mock_uow.expenses.list_ids_by_tenant.return_value = ["e1", "e2"]
    return mock_uow


def _deleted_refs(mock_uow):
    return [ref for call in mock_uow.delete_batch.await_args_list for ref in call.args[0]]


@pytest.mark.asyncio
async def test_deletes_dependents_then_tenant(tenant_with_records):
    mock_uow = tenant_with_records
    use_case = DeleteTenantUseCase(mock_uow)

    result = await use_case.execute(TENANT_ID)

    assert result.is_ok()
    refs = _deleted_refs(mock_uow)
    assert refs[-1] == DocumentRef("tenants", TENANT_ID)
    assert set(refs[:-1]) == {
        DocumentRef("units", "u1"),
        DocumentRef("units", "u2"),
        DocumentRef("units", "u3"),
        DocumentRef("expenses", "e1"),
        DocumentRef("expenses", "e2"),
    }
    assert result.value.total_deleted == 6
    assert result.value.batches_committed == 1
    assert result.value.deleted["units"] == 3
    assert result.value.deleted["expenses"] == 2
    assert result.value.deleted["tenants"] == 1
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_every_dependent_kind_is_scanned(tenant_with_records):
    mock_uow = tenant_with_records

    await DeleteTenantUseCase(mock_uow).execute(TENANT_ID)

    for collection, _field in TENANT_DEPENDENTS:
        getattr(mock_uow, collection).list_ids_by_tenant.assert_awaited_once_with(TENANT_ID)


@pytest.mark.asyncio
async def test_users_are_not_deleted(tenant_with_records):
    mock_uow = tenant_with_records

    await DeleteTenantUseCase(mock_uow).execute(TENANT_ID)

    mock_uow.users.list_ids_by_tenant.assert_not_awaited()
    assert all(ref.collection != "users" for ref in _deleted_refs(mock_uow))


@pytest.mark.asyncio
async def test_batches_are_bounded_and_committed_in_order(tenant_with_records):
    mock_uow = tenant_with_records

    result = await DeleteTenantUseCase(mock_uow, batch_size=2).execute(TENANT_ID)

    batches = [call.args[0] for call in mock_uow.delete_batch.await_args_list]
    assert [len(batch) for batch in batches] == [2, 2, 2]
    assert batches[-1][-1] == DocumentRef("tenants", TENANT_ID)
    assert mock_uow.commit.await_count == 3
    assert result.value.batches_committed == 3


@pytest.mark.asyncio
async def test_missing_tenant(mock_uow):
    result = await DeleteTenantUseCase(mock_uow).execute("nope")

    assert result.error.code == "TENANT_NOT_FOUND"
    mock_uow.delete_batch.assert_not_awaited()


@pytest.mark.asyncio
async def test_failure_before_any_commit_is_a_transport_error(tenant_with_records):
    mock_uow = tenant_with_records
    mock_uow.delete_batch.side_effect = StoreUnavailable("connection reset")

    result = await DeleteTenantUseCase(mock_uow, batch_size=2).execute(TENANT_ID)

    assert result.error.code == "TRANSPORT_ERROR"
    mock_uow.commit.assert_not_awaited()
    mock_uow.rollback.assert_awaited()


@pytest.mark.asyncio
async def test_failure_after_a_commit_is_a_partial_failure(tenant_with_records):
    mock_uow = tenant_with_records
    mock_uow.delete_batch.side_effect = [2, StoreUnavailable("connection reset")]

    result = await DeleteTenantUseCase(mock_uow, batch_size=2).execute(TENANT_ID)

    assert result.error.code == "PARTIAL_FAILURE"
    assert result.error.details == {"deleted": 2, "remaining": 4, "batches_committed": 1}
    assert mock_uow.commit.await_count == 1


@pytest.mark.asyncio
async def test_failure_while_collecting_is_a_transport_error(mock_uow):
    mock_uow.tenants.get.return_value = make_tenant()
    mock_uow.units.list_ids_by_tenant.side_effect = StoreUnavailable("timeout")

    result = await DeleteTenantUseCase(mock_uow, read_attempts=1).execute(TENANT_ID)

    assert result.error.code == "TRANSPORT_ERROR"
    mock_uow.delete_batch.assert_not_awaited()
