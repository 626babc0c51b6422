from fastapi import Depends, status

from libs.result import Error
from src.api.error import ClientError
from src.depends import get_current_user
from src.domain.errors import ErrorCode

# Platform operators may act on any tenant
PLATFORM_ROLES = frozenset({"master_admin"})


async def get_tenant_user(tenant_id: str, current_user: dict = Depends(get_current_user)) -> dict:
    """
    Current user, provided their token is scoped to the tenant in the path.

    Raises:
        ClientError: 403 for a token scoped to another tenant
    """
    if current_user.get("tenant_id") != tenant_id and current_user.get("role") not in PLATFORM_ROLES:
        raise ClientError(
            Error(ErrorCode.FORBIDDEN, "Token is not valid for this tenant"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return current_user


# Roles allowed to drive the repair and maintenance workflows
APPROVER_ROLES = frozenset({"chairperson", "property_manager", "admin"}) | PLATFORM_ROLES


async def get_tenant_approver(current_user: dict = Depends(get_tenant_user)) -> dict:
    """
    Current tenant user, provided their role may approve and manage work.

    Raises:
        ClientError: 403 for any other role
    """
    if current_user.get("role") not in APPROVER_ROLES:
        raise ClientError(
            Error(ErrorCode.FORBIDDEN, "Role may not manage repair and maintenance work"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return current_user
