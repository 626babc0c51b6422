"""
User Entity

Global account record; outlives any tenant membership.
"""

from typing import ClassVar, Optional

from .document import Document


class User(Document):
    collection_name: ClassVar[str] = "users"
    tenant_field: ClassVar[Optional[str]] = None

    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    role: str = "resident"
    is_active: bool = True
    last_login_at: Optional[str] = None

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or self.email
