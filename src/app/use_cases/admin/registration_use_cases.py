"""
Use Cases: Pending registration decisions

A pending registration becomes a tenant when an administrator approves it.
The registrant is found (or created) by email and gets chairperson access.
Rejection keeps the record with its reason. Only pending registrations can
be decided.
"""

from datetime import timedelta
from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.services.retry import read_with_retry
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.store_errors import STORE_ERRORS, store_error
from src.domain.base import utcnow
from src.domain.entities import (
    AccessRole,
    PendingRegistration,
    RegistrationStatus,
    SubscriptionStatus,
    SubscriptionTier,
    Tenant,
    User,
    UserTenantAccess,
)
from src.domain.errors import ErrorCode
from src.domain.timestamps import to_iso

from .dtos import ApproveRegistrationCommand, ApproveRegistrationResponse, RejectRegistrationCommand

DEFAULT_TRIAL_DAYS = 30
DEFAULT_MONTHLY_RATE = 79.95


def _registration_not_found() -> Error:
    return Error(ErrorCode.REGISTRATION_NOT_FOUND, "Registration not found")


def _not_pending(registration: PendingRegistration) -> Error:
    return Error(
        ErrorCode.INVALID_STATUS,
        f"Registration was already {registration.status.value}",
    )


class ApproveRegistrationUseCase:
    """
    Approve a pending registration.

    Business Logic:
    1. Registration must exist and be pending
    2. Subscription: free-forever -> free, trial tier -> trial ending after
       ``trial_days``, anything else -> active
    3. Create the tenant from the registration details
    4. Find the registrant's user by email or create one
    5. Grant chairperson access
    6. Mark the registration approved with the new tenant id
    """

    def __init__(
        self,
        uow: UnitOfWork,
        trial_days: int = DEFAULT_TRIAL_DAYS,
        default_monthly_rate: float = DEFAULT_MONTHLY_RATE,
    ):
        self.uow = uow
        self.trial_days = trial_days
        self.default_monthly_rate = default_monthly_rate

    async def execute(
        self, registration_id: str, admin_id: str, command: ApproveRegistrationCommand
    ) -> Result[ApproveRegistrationResponse]:
        async with self.uow:
            try:
                registration = await self.uow.pending_registrations.get(registration_id)
                if registration is None:
                    return Return.err(_registration_not_found())
                if registration.status != RegistrationStatus.pending:
                    return Return.err(_not_pending(registration))

                now = utcnow()
                tenant = await self.uow.tenants.create(self._build_tenant(registration, admin_id, command, now))

                email = registration.admin_email.strip().lower()
                matches = await self.uow.users.list_where({"email": email})
                user_created = not matches
                if matches:
                    user = matches[0]
                else:
                    user = await self.uow.users.create(
                        User(
                            email=email,
                            first_name=registration.admin_first_name,
                            last_name=registration.admin_last_name,
                            phone=registration.admin_phone,
                            role=AccessRole.chairperson.value,
                        )
                    )

                access = await self.uow.user_tenant_access.create(
                    UserTenantAccess(
                        user_id=user.id,
                        tenant_id=tenant.id,
                        role=AccessRole.chairperson,
                        can_post_announcements=True,
                    )
                )

                await self.uow.pending_registrations.update(
                    registration_id,
                    {
                        "status": RegistrationStatus.approved,
                        "approved_by": admin_id,
                        "approved_at": now,
                        "created_tenant_id": tenant.id,
                    },
                    expected_version=registration.version,
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(
            ApproveRegistrationResponse(
                registration_id=registration_id,
                tenant=tenant,
                admin_user_id=user.id,
                access_id=access.id,
                user_created=user_created,
            )
        )

    def _build_tenant(
        self,
        registration: PendingRegistration,
        admin_id: str,
        command: ApproveRegistrationCommand,
        now,
    ) -> Tenant:
        trial_start: Optional[str] = None
        trial_end: Optional[str] = None
        if command.is_free_forever:
            subscription_status = SubscriptionStatus.free
            default_rate = 0.0
        elif command.subscription_tier == SubscriptionTier.trial:
            subscription_status = SubscriptionStatus.trial
            trial_start = to_iso(now)
            trial_end = to_iso(now + timedelta(days=self.trial_days))
            default_rate = self.default_monthly_rate
        else:
            subscription_status = SubscriptionStatus.active
            default_rate = self.default_monthly_rate

        return Tenant(
            name=registration.strata_name,
            address=registration.address,
            city=registration.city,
            province=registration.province,
            postal_code=registration.postal_code,
            email=registration.admin_email.strip().lower(),
            phone_number=registration.admin_phone,
            unit_count=registration.unit_count,
            management_company=registration.management_company,
            subscription_status=subscription_status,
            subscription_tier=command.subscription_tier,
            monthly_rate=command.monthly_rate if command.monthly_rate is not None else default_rate,
            is_free_forever=command.is_free_forever,
            trial_start_date=trial_start,
            trial_end_date=trial_end,
            created_by=admin_id,
        )


class RejectRegistrationUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, registration_id: str, admin_id: str, command: RejectRegistrationCommand
    ) -> Result[PendingRegistration]:
        reason = command.reason.strip()
        if not reason:
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, "A reason is required to reject a registration")
            )

        async with self.uow:
            try:
                registration = await self.uow.pending_registrations.get(registration_id)
                if registration is None:
                    return Return.err(_registration_not_found())
                if registration.status != RegistrationStatus.pending:
                    return Return.err(_not_pending(registration))

                updated = await self.uow.pending_registrations.update(
                    registration_id,
                    {
                        "status": RegistrationStatus.rejected,
                        "rejected_by": admin_id,
                        "rejected_at": utcnow(),
                        "rejection_reason": reason,
                    },
                    expected_version=registration.version,
                )
                await self.uow.commit()
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))

        return Return.ok(updated)


class ListRegistrationsUseCase:
    def __init__(self, uow: UnitOfWork, read_attempts: int = 3):
        self.uow = uow
        self.read_attempts = read_attempts

    async def execute(
        self, status: Optional[RegistrationStatus] = RegistrationStatus.pending
    ) -> Result[List[PendingRegistration]]:
        filters = {"status": status} if status is not None else {}
        async with self.uow:
            try:
                registrations = await read_with_retry(
                    lambda: self.uow.pending_registrations.list_where(filters),
                    self.read_attempts,
                )
            except STORE_ERRORS as exc:
                return Return.err(store_error(exc))
        return Return.ok(registrations)
