"""
Storage-level exceptions and the error codes use cases return.

Repositories raise the exceptions below; use cases translate them into
``libs.result.Error`` values so callers can branch on ``error.code``.
"""


class ErrorCode:
    NOT_FOUND = "NOT_FOUND"
    TENANT_NOT_FOUND = "TENANT_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    NO_OP_TRANSITION = "NO_OP_TRANSITION"
    INVALID_STATUS = "INVALID_STATUS"
    ALREADY_CONVERTED = "ALREADY_CONVERTED"
    ALREADY_ASSIGNED = "ALREADY_ASSIGNED"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"
    FORBIDDEN = "FORBIDDEN"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"


# Codes the API reports as 409 Conflict
CONFLICT_CODES = frozenset(
    {
        ErrorCode.INVALID_TRANSITION,
        ErrorCode.NO_OP_TRANSITION,
        ErrorCode.INVALID_STATUS,
        ErrorCode.ALREADY_CONVERTED,
        ErrorCode.ALREADY_ASSIGNED,
        ErrorCode.CONCURRENT_MODIFICATION,
    }
)


class StoreError(Exception):
    """Base class for document store failures"""


class StoreUnavailable(StoreError):
    """The underlying store could not be reached or timed out"""


class DocumentNotFound(StoreError):
    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"{collection}/{doc_id} not found")


class VersionConflict(StoreError):
    def __init__(self, collection: str, doc_id: str, expected: int, actual: int):
        self.collection = collection
        self.doc_id = doc_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{collection}/{doc_id} is at version {actual}, expected {expected}"
        )


class InvalidPatch(ValueError):
    """A patch names fields that cannot be written through a generic update"""


class InvalidFilter(ValueError):
    """A query filter or ordering names a field the record kind does not have"""
