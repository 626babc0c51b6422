"""Admin use cases for system administration operations."""

from .dtos import (
    ApproveRegistrationCommand,
    ApproveRegistrationResponse,
    RejectRegistrationCommand,
)
from .registration_use_cases import (
    ApproveRegistrationUseCase,
    ListRegistrationsUseCase,
    RejectRegistrationUseCase,
)

__all__ = [
    "ApproveRegistrationUseCase",
    "ApproveRegistrationCommand",
    "ApproveRegistrationResponse",
    "ListRegistrationsUseCase",
    "RejectRegistrationUseCase",
    "RejectRegistrationCommand",
]
