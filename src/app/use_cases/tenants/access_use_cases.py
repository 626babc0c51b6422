"""
User-tenant access use cases

A user holds at most one access record per tenant. Records are created,
re-roled and removed individually; the tenant deletion removes the rest.
"""

from typing import List

from libs.result import Error, Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.entities import UserTenantAccess
from src.domain.errors import ErrorCode

from .dtos import AssignAccessCommand, ChangeAccessCommand


def _access_not_found() -> Error:
    return Error(ErrorCode.NOT_FOUND, "Access record not found")


class AssignUserAccessUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: str, command: AssignAccessCommand) -> Result[UserTenantAccess]:
        """
        Errors:
            - TENANT_NOT_FOUND / USER_NOT_FOUND
            - ALREADY_ASSIGNED: the user already has access to this tenant
        """
        async with self.uow:
            try:
                tenant = await self.uow.tenants.get(tenant_id)
                if tenant is None:
                    return Return.err(Error(ErrorCode.TENANT_NOT_FOUND, "Tenant not found"))

                user = await self.uow.users.get(command.user_id)
                if user is None:
                    return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

                existing = await self.uow.user_tenant_access.list_by_tenant(
                    tenant_id, filters={"user_id": command.user_id}, limit=1
                )
                if existing:
                    return Return.err(
                        Error(
                            ErrorCode.ALREADY_ASSIGNED,
                            "User already has access to this tenant",
                            details={"access_id": existing[0].id, "role": existing[0].role.value},
                        )
                    )

                access = await self.uow.user_tenant_access.create(
                    UserTenantAccess(
                        user_id=command.user_id,
                        tenant_id=tenant_id,
                        role=command.role,
                        can_post_announcements=command.can_post_announcements,
                    )
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(access)


class ChangeAccessRoleUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: str, access_id: str, command: ChangeAccessCommand
    ) -> Result[UserTenantAccess]:
        async with self.uow:
            try:
                access = await self.uow.user_tenant_access.get(access_id)
                if access is None or access.tenant_id != tenant_id:
                    return Return.err(_access_not_found())

                patch = {"role": command.role}
                if command.can_post_announcements is not None:
                    patch["can_post_announcements"] = command.can_post_announcements

                updated = await self.uow.user_tenant_access.update(
                    access_id, patch, expected_version=access.version
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(updated)


class RemoveUserAccessUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: str, access_id: str) -> Result[None]:
        async with self.uow:
            try:
                access = await self.uow.user_tenant_access.get(access_id)
                if access is None or access.tenant_id != tenant_id:
                    return Return.err(_access_not_found())

                await self.uow.user_tenant_access.delete(access_id)
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(None)


class ListTenantAccessUseCase:
    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(self, tenant_id: str) -> Result[List[UserTenantAccess]]:
        async with self.uow:
            try:
                records = await read_with_retry(
                    lambda: self.uow.user_tenant_access.list_by_tenant(tenant_id),
                    self.read_attempts,
                )
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))
        return Return.ok(records)
