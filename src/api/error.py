from fastapi import status
from libs.result import Error
from src.domain.errors import CONFLICT_CODES, ErrorCode


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Raise the API exception matching a use case error code"""
    code = error.code
    if code == ErrorCode.NOT_FOUND or code.endswith("_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if code in CONFLICT_CODES:
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    if code == ErrorCode.VALIDATION_ERROR:
        raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
    if code == ErrorCode.FORBIDDEN:
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    if code == ErrorCode.TRANSPORT_ERROR:
        raise ServerError(error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    raise ServerError(error)
