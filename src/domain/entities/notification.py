"""
Notification Entities

In-app notifications; each one is also handed to the email dispatcher.
"""

from typing import Any, ClassVar, Dict, Optional

from sqlmodel import Field

from .document import Document
from .enums import NotificationType


class Notification(Document):
    """
    Notification entity.

    Business Rules:
    - Only the recipient marks it read or dismissed
    - Email delivery failures never affect the record
    """

    collection_name: ClassVar[str] = "notifications"

    user_id: str
    tenant_id: str
    type: NotificationType = NotificationType.system
    title: str = Field(max_length=255)
    message: str
    related_id: Optional[str] = None
    # "metadata" is reserved by SQLModel
    context: Dict[str, Any] = Field(default_factory=dict)

    is_read: bool = False
    read_at: Optional[str] = None
    dismissed: bool = False


class DismissedNotification(Document):
    collection_name: ClassVar[str] = "dismissed_notifications"

    user_id: str
    tenant_id: str
    notification_id: str
    notification_type: str
    dismissed_at: Optional[str] = None
