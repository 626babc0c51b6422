"""
MailMessage Entity

Outbound email queued for the mail-delivery extension, which watches this
collection and sends whatever lands in it.
"""

from typing import Any, ClassVar, Dict, Optional

from sqlmodel import Field

from .document import Document


class MailMessage(Document):
    collection_name: ClassVar[str] = "mail"
    tenant_field: ClassVar[Optional[str]] = None

    to: str
    subject: str
    text: str
    html: Optional[str] = None
    template: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)
    delivery_state: str = "PENDING"
