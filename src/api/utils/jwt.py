from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig

ACCESS_TOKEN_MINUTES = 60

# Claims every request needs to resolve the caller and their tenant
REQUIRED_CLAIMS = ("user_id", "tenant_id", "role")


def generate_jwt(user_id: str, tenant_id: str, role: str) -> str:
    """
    Generate JWT access token

    Tokens are issued by the identity provider in production; this is used
    by local tooling and tests.

    Args:
        user_id: User ID
        tenant_id: Tenant the token is scoped to
        role: User role within that tenant, or ``master_admin``

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "tenant_id": str(tenant_id),
        "role": role,
        "exp": now + timedelta(minutes=ACCESS_TOKEN_MINUTES),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Returns:
        Decoded payload, or None if the signature, expiry or a required
        claim is missing or invalid
    """
    try:
        payload = jwt.decode(token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"])
    except JWTError:
        return None
    if any(not payload.get(claim) for claim in REQUIRED_CLAIMS):
        return None
    return payload
