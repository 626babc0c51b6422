"""
Admin API Key Authentication

Operator endpoints (registration decisions, tenant deletion, email dead
letters) are called by back-office tooling with a shared key rather than a
user token. The operator names themselves in X-Admin-User; decisions are
stamped with that name.
"""

from fastapi import Depends, Header, status
from libs.result import Error
from src.api.error import ClientError
from config import ApplicationConfig

SYSTEM_ACTOR = "system"


async def verify_admin_api_key(x_admin_api_key: str = Header(None)) -> bool:
    """
    Verify the X-Admin-API-Key header.

    Raises:
        ClientError: 401 if key is missing or invalid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if x_admin_api_key != ApplicationConfig.ADMIN_API_KEY:
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True


async def get_admin_actor(
    x_admin_user: str = Header(SYSTEM_ACTOR),
    _: bool = Depends(verify_admin_api_key),
) -> str:
    """Operator id recorded on registration decisions; blank falls back to ``system``"""
    return x_admin_user.strip() or SYSTEM_ACTOR
