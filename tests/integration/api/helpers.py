"""Seeding and auth helpers for the API tests"""

from src.api.utils.jwt import generate_jwt
from src.domain.entities import AccessRole, PendingRegistration, Tenant, User, UserTenantAccess

ADMIN_HEADERS = {"X-Admin-API-Key": "test-admin-key-12345", "X-Admin-User": "ops-1"}


def auth_headers(user_id, tenant_id, role="resident"):
    return {"Authorization": f"Bearer {generate_jwt(user_id, tenant_id, role)}"}


async def seed_tenant(uow, tenant_id="tenant-a", members=()):
    """Create a tenant with users; ``members`` is a list of (user_id, role)"""
    async with uow:
        await uow.tenants.create(Tenant(id=tenant_id, name="Harbour View Strata"))
        for user_id, role in members:
            await uow.users.create(User(id=user_id, email=f"{user_id}@example.com", first_name=user_id))
            await uow.user_tenant_access.create(
                UserTenantAccess(user_id=user_id, tenant_id=tenant_id, role=AccessRole(role))
            )
        await uow.commit()


async def seed_registration(uow, registration_id="reg-1"):
    async with uow:
        await uow.pending_registrations.create(
            PendingRegistration(
                id=registration_id,
                strata_name="Cedar Court",
                address="12 Cedar Ave",
                city="Victoria",
                unit_count=24,
                admin_first_name="Sam",
                admin_last_name="Ng",
                admin_email="Sam.Ng@Example.com",
            )
        )
        await uow.commit()
