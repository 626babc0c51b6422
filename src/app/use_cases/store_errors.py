"""
Translation of storage exceptions into use case errors.

Repositories raise; use cases catch ``STORE_ERRORS`` around their store calls
and return ``Return.err(store_error(exc))``.
"""

from pydantic import ValidationError

from libs.result import Error
from src.domain.errors import (
    DocumentNotFound,
    ErrorCode,
    InvalidFilter,
    InvalidPatch,
    StoreError,
    StoreUnavailable,
    VersionConflict,
)

STORE_ERRORS = (StoreError, InvalidPatch, InvalidFilter, ValidationError)


def store_error(exc: Exception) -> Error:
    if isinstance(exc, StoreUnavailable):
        return Error(ErrorCode.TRANSPORT_ERROR, "Document store unavailable", reason=str(exc))
    if isinstance(exc, VersionConflict):
        return Error(
            ErrorCode.CONCURRENT_MODIFICATION,
            "Record was modified by another request",
            reason=str(exc),
            details={"expected_version": exc.expected, "actual_version": exc.actual},
        )
    if isinstance(exc, DocumentNotFound):
        return Error(ErrorCode.NOT_FOUND, "Record not found", reason=str(exc))
    if isinstance(exc, ValidationError):
        return Error(
            ErrorCode.VALIDATION_ERROR,
            "Record failed validation",
            reason=str(exc),
            details={"errors": exc.errors(include_url=False, include_context=False, include_input=False)},
        )
    return Error(ErrorCode.VALIDATION_ERROR, str(exc))
