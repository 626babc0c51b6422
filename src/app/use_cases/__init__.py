"""
Use Cases

Organized into domain folders:
- records/: generic CRUD for leaf record kinds
- repairs/: repair request workflow and conversion
- maintenance/: maintenance project workflow
- notifications/: in-app notifications
- tenants/: access management and cascading deletion
- admin/: registration decisions

Import from subdirectories for better organization.
"""

from .admin import ApproveRegistrationUseCase, RejectRegistrationUseCase
from .maintenance import TransitionMaintenanceProjectUseCase
from .repairs import ConvertRepairRequestUseCase, TransitionRepairRequestUseCase
from .tenants import DeleteTenantUseCase

__all__ = [
    "ApproveRegistrationUseCase",
    "RejectRegistrationUseCase",
    "TransitionMaintenanceProjectUseCase",
    "ConvertRepairRequestUseCase",
    "TransitionRepairRequestUseCase",
    "DeleteTenantUseCase",
]
