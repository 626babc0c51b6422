"""
Tenant Management Use Cases

Access assignment and cascading tenant deletion.
"""

from .access_use_cases import (
    AssignUserAccessUseCase,
    ChangeAccessRoleUseCase,
    ListTenantAccessUseCase,
    RemoveUserAccessUseCase,
)
from .delete_tenant_use_case import DeleteTenantResponse, DeleteTenantUseCase
from .dtos import AssignAccessCommand, ChangeAccessCommand

__all__ = [
    "AssignUserAccessUseCase",
    "ChangeAccessRoleUseCase",
    "ListTenantAccessUseCase",
    "RemoveUserAccessUseCase",
    "DeleteTenantUseCase",
    "DeleteTenantResponse",
    "AssignAccessCommand",
    "ChangeAccessCommand",
]
