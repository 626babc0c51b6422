from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class NotificationEmail(BaseModel):
    """Payload handed to the email service for one notification"""

    notification_id: Optional[str] = None
    user_id: str
    user_email: str
    user_name: Optional[str] = None
    tenant_id: str
    tenant_name: str
    notification_type: str
    title: str
    message: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class EmailDeliveryError(Exception):
    """The email service refused or could not accept a message"""


class IEmailSender(ABC):
    """Email hand-off interface - application layer"""

    @abstractmethod
    async def send(self, email: NotificationEmail) -> None:
        """Hand one email to the delivery service; raise on failure"""
        pass

    async def close(self) -> None:
        """Release any connection the sender holds"""
        pass
