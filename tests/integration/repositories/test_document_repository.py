import re

import pytest

from src.app.use_cases.repairs import TransitionCommand, TransitionRepairRequestUseCase
from src.app.use_cases.tenants import DeleteTenantUseCase
from src.domain.entities import (
    Expense,
    RepairRequest,
    RepairRequestStatus,
    StatusChange,
    Submitter,
    Tenant,
    Unit,
)
from src.domain.errors import InvalidFilter, InvalidPatch, VersionConflict

ISO = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


async def _seed_tenant(uow, tenant_id="tenant-a"):
    async with uow:
        tenant = await uow.tenants.create(Tenant(id=tenant_id, name=f"Strata {tenant_id}"))
        await uow.commit()
    return tenant


@pytest.mark.asyncio
async def test_create_and_get_round_trip(uow):
    async with uow:
        created = await uow.units.create(Unit(tenant_id="tenant-a", unit_number="101"))
        await uow.commit()

        fetched = await uow.units.get(created.id)

    assert fetched.unit_number == "101"
    assert fetched.version == 1
    assert ISO.match(fetched.created_at)
    assert ISO.match(fetched.updated_at)


@pytest.mark.asyncio
async def test_tenant_listing_is_isolated(uow):
    async with uow:
        await uow.units.create(Unit(tenant_id="tenant-a", unit_number="101"))
        await uow.units.create(Unit(tenant_id="tenant-b", unit_number="201"))
        await uow.commit()

        units = await uow.units.list_by_tenant("tenant-a")

    assert [u.unit_number for u in units] == ["101"]


@pytest.mark.asyncio
async def test_update_bumps_version_and_guards_it(uow):
    async with uow:
        unit = await uow.units.create(Unit(tenant_id="tenant-a", unit_number="101"))
        updated = await uow.units.update(unit.id, {"owner_name": "Kim"}, expected_version=1)
        await uow.commit()

        assert updated.version == 2
        assert updated.owner_name == "Kim"
        assert updated.unit_number == "101"

        with pytest.raises(VersionConflict):
            await uow.units.update(unit.id, {"owner_name": "Lee"}, expected_version=1)


@pytest.mark.asyncio
async def test_patch_cannot_touch_tenant_or_unknown_fields(uow):
    async with uow:
        unit = await uow.units.create(Unit(tenant_id="tenant-a", unit_number="101"))

        with pytest.raises(InvalidPatch):
            await uow.units.update(unit.id, {"tenant_id": "tenant-b"})
        with pytest.raises(InvalidPatch):
            await uow.units.update(unit.id, {"colour": "red"})
        with pytest.raises(InvalidPatch):
            await uow.units.update(unit.id, {"version": 7})


@pytest.mark.asyncio
async def test_filters_and_order_are_applied(uow):
    async with uow:
        for number, unit_type in (("101", "condo"), ("305", "condo"), ("202", "townhouse")):
            await uow.units.create(Unit(tenant_id="tenant-a", unit_number=number, unit_type=unit_type))
        await uow.commit()

        condos = await uow.units.list_by_tenant(
            "tenant-a", filters={"unit_type": "condo"}, order_by="unit_number", descending=False
        )
        first = await uow.units.list_by_tenant("tenant-a", order_by="unit_number", descending=True, limit=1)

        with pytest.raises(InvalidFilter):
            await uow.units.list_by_tenant("tenant-a", filters={"colour": "red"})

    assert [u.unit_number for u in condos] == ["101", "305"]
    assert [u.unit_number for u in first] == ["305"]


@pytest.mark.asyncio
async def test_delete_is_idempotent(uow):
    async with uow:
        unit = await uow.units.create(Unit(tenant_id="tenant-a", unit_number="101"))
        await uow.units.delete(unit.id)
        await uow.units.delete(unit.id)
        await uow.commit()

        assert await uow.units.get(unit.id) is None


@pytest.mark.asyncio
async def test_tenant_deletion_cascades(uow):
    await _seed_tenant(uow, "tenant-a")
    await _seed_tenant(uow, "tenant-b")
    async with uow:
        for number in ("101", "102", "103"):
            await uow.units.create(Unit(tenant_id="tenant-a", unit_number=number))
        for amount in (120.0, 80.5):
            await uow.expenses.create(Expense(tenant_id="tenant-a", description="Snow removal", amount=amount))
        await uow.units.create(Unit(tenant_id="tenant-b", unit_number="900"))
        await uow.commit()

    result = await DeleteTenantUseCase(uow, batch_size=2).execute("tenant-a")

    assert result.is_ok()
    assert result.value.total_deleted == 6
    assert result.value.batches_committed == 3
    async with uow:
        assert await uow.units.list_by_tenant("tenant-a") == []
        assert await uow.expenses.list_by_tenant("tenant-a") == []
        assert await uow.tenants.get("tenant-a") is None
        assert len(await uow.units.list_by_tenant("tenant-b")) == 1


@pytest.mark.asyncio
async def test_rejecting_an_approved_request_appends_history(uow):
    await _seed_tenant(uow, "tenant-a")
    async with uow:
        request = await uow.repair_requests.create(
            RepairRequest(
                tenant_id="tenant-a",
                title="Leaking skylight",
                description="Water on the top floor landing",
                submitted_by=Submitter(user_id="resident-1"),
                status=RepairRequestStatus.suggested,
                status_history=[
                    StatusChange(status="suggested", changed_by="resident-1", changed_at="2024-03-01T10:00:00.000Z")
                ],
            )
        )
        await uow.commit()

    use_case = TransitionRepairRequestUseCase(uow)
    approved = await use_case.execute(
        "tenant-a", request.id, "council-1", TransitionCommand(status=RepairRequestStatus.approved)
    )
    rejected = await use_case.execute(
        "tenant-a",
        request.id,
        "council-1",
        TransitionCommand(status=RepairRequestStatus.rejected, reason="duplicate"),
    )

    assert approved.is_ok()
    assert rejected.is_ok()
    record = rejected.value
    assert record.status == RepairRequestStatus.rejected
    assert [h.status for h in record.status_history] == ["suggested", "approved", "rejected"]
    assert record.status_history[-1].reason == "duplicate"
    assert record.rejection_reason == "duplicate"
    assert record.version == 3
