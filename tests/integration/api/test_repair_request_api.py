import pytest

from tests.integration.api.helpers import auth_headers, seed_tenant

BASE = "/api/tenants/tenant-a/repair-requests"
MEMBERS = [("resident-1", "resident"), ("chair-1", "chairperson"), ("treasurer-1", "treasurer")]


async def _suggest(client, title="Leaking skylight"):
    response = await client.post(
        BASE,
        json={"title": title, "description": "Water on the landing", "severity": "emergency"},
        headers=auth_headers("resident-1", "tenant-a"),
    )
    assert response.status_code == 201
    return response.json()


async def _transition(client, request_id, body, user_id="chair-1"):
    return await client.post(
        f"{BASE}/{request_id}/transition",
        json=body,
        headers=auth_headers(user_id, "tenant-a", "chairperson"),
    )


@pytest.mark.asyncio
async def test_suggest_repair_notifies_admins(client, uow, dispatcher, email_sender):
    await seed_tenant(uow, members=MEMBERS)

    created = await _suggest(client)
    await dispatcher.drain()

    assert created["status"] == "suggested"
    assert created["version"] == 1
    assert created["submitted_by"]["user_id"] == "resident-1"
    assert [h["status"] for h in created["status_history"]] == ["suggested"]
    assert sorted(e.user_email for e in email_sender.sent) == [
        "chair-1@example.com",
        "treasurer-1@example.com",
    ]


@pytest.mark.asyncio
async def test_token_for_other_tenant_is_forbidden(client, uow):
    await seed_tenant(uow, members=MEMBERS)

    response = await client.get(BASE, headers=auth_headers("resident-1", "tenant-b"))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_reject_requires_reason(client, uow):
    await seed_tenant(uow, members=MEMBERS)
    created = await _suggest(client)

    response = await _transition(client, created["id"], {"status": "rejected", "reason": "  "})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_backward_and_repeated_transitions_are_conflicts(client, uow):
    await seed_tenant(uow, members=MEMBERS)
    created = await _suggest(client)

    assert (await _transition(client, created["id"], {"status": "approved"})).status_code == 200

    backward = await _transition(client, created["id"], {"status": "suggested"})
    repeated = await _transition(client, created["id"], {"status": "approved"})
    stale = await _transition(client, created["id"], {"status": "planned", "expected_version": 1})

    assert backward.json()["error"]["code"] == "INVALID_TRANSITION"
    assert repeated.json()["error"]["code"] == "NO_OP_TRANSITION"
    assert stale.json()["error"]["code"] == "CONCURRENT_MODIFICATION"
    assert {backward.status_code, repeated.status_code, stale.status_code} == {409}


@pytest.mark.asyncio
async def test_unapproved_request_cannot_skip_ahead(client, uow):
    await seed_tenant(uow, members=MEMBERS)
    created = await _suggest(client)

    completed = await _transition(client, created["id"], {"status": "completed"})
    planned = await _transition(client, created["id"], {"status": "planned"})

    assert completed.status_code == 409
    assert completed.json()["error"]["code"] == "INVALID_TRANSITION"
    assert planned.json()["error"]["code"] == "INVALID_TRANSITION"
    fetched = await client.get(f"{BASE}/{created['id']}", headers=auth_headers("chair-1", "tenant-a"))
    assert fetched.json()["status"] == "suggested"


@pytest.mark.asyncio
async def test_resident_cannot_transition_or_convert(client, uow):
    await seed_tenant(uow, members=MEMBERS)
    created = await _suggest(client)
    resident = auth_headers("resident-1", "tenant-a", "resident")

    transition = await client.post(
        f"{BASE}/{created['id']}/transition", json={"status": "approved"}, headers=resident
    )
    convert = await client.post(f"{BASE}/{created['id']}/convert", headers=resident)

    assert transition.status_code == 403
    assert transition.json()["error"]["code"] == "FORBIDDEN"
    assert convert.status_code == 403
    fetched = await client.get(f"{BASE}/{created['id']}", headers=resident)
    assert fetched.json()["status"] == "suggested"


@pytest.mark.asyncio
async def test_convert_approved_request(client, uow, dispatcher, email_sender):
    await seed_tenant(uow, members=MEMBERS)
    created = await _suggest(client)
    assert (await _transition(client, created["id"], {"status": "approved"})).status_code == 200
    await dispatcher.drain()
    email_sender.sent.clear()

    response = await client.post(
        f"{BASE}/{created['id']}/convert",
        headers=auth_headers("chair-1", "tenant-a", "chairperson"),
    )
    await dispatcher.drain()

    assert response.status_code == 200
    body = response.json()
    assert body["priority"] == "urgent"
    assert body["admins_notified"] == 2

    converted = (await client.get(f"{BASE}/{created['id']}", headers=auth_headers("chair-1", "tenant-a"))).json()
    assert converted["status"] == "converted"
    assert converted["converted_project_id"] == body["project_id"]

    project = await client.get(
        f"/api/tenants/tenant-a/maintenance-projects/{body['project_id']}",
        headers=auth_headers("chair-1", "tenant-a"),
    )
    assert project.json()["status"] == "planned"
    assert len(email_sender.sent) == 2

    again = await client.post(
        f"{BASE}/{created['id']}/convert",
        headers=auth_headers("chair-1", "tenant-a", "chairperson"),
    )
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ALREADY_CONVERTED"


@pytest.mark.asyncio
async def test_plain_transition_to_converted_is_refused(client, uow):
    await seed_tenant(uow, members=MEMBERS)
    created = await _suggest(client)

    response = await _transition(client, created["id"], {"status": "converted"})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVALID_TRANSITION"


@pytest.mark.asyncio
async def test_stats(client, uow):
    await seed_tenant(uow, members=MEMBERS)
    first = await _suggest(client, "Broken gate")
    await _suggest(client, "Cracked window")
    await _transition(client, first["id"], {"status": "rejected", "reason": "duplicate"})

    response = await client.get(f"{BASE}/stats", headers=auth_headers("chair-1", "tenant-a"))

    assert response.status_code == 200
    stats = response.json()
    assert stats["total"] == 2
    assert stats["by_status"]["rejected"] == 1
    assert stats["by_status"]["suggested"] == 1
