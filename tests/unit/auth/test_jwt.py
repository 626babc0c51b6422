from jose import jwt

from config import ApplicationConfig
from src.api.utils.jwt import generate_jwt, verify_jwt


def test_round_trip_claims():
    payload = verify_jwt(generate_jwt("user-1", "tenant-1", "treasurer"))

    assert payload["user_id"] == "user-1"
    assert payload["tenant_id"] == "tenant-1"
    assert payload["role"] == "treasurer"


def test_tampered_token_is_rejected():
    header, _, signature = generate_jwt("user-1", "tenant-1", "resident").split(".")
    _, forged_claims, _ = generate_jwt("user-1", "tenant-2", "master_admin").split(".")

    assert verify_jwt(f"{header}.{forged_claims}.{signature}") is None


def test_token_without_tenant_claim_is_rejected():
    token = jwt.encode({"user_id": "user-1", "role": "resident"}, ApplicationConfig.JWT_SECRET, algorithm="HS256")

    assert verify_jwt(token) is None
