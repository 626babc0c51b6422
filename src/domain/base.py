import uuid
from datetime import UTC, datetime

from src.domain.timestamps import to_iso


def generate_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(UTC)


def now_iso() -> str:
    """Current server time as a canonical ISO timestamp"""
    return to_iso(utcnow())
