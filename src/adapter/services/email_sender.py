"""
Email sender implementations.

The default sender writes each message into the global ``mail`` collection,
where the mail-delivery extension picks it up. ``HttpEmailSender`` posts the
payload to an external email service instead.
"""

import html
import logging
from typing import Callable, Optional

import httpx

from src.app.services.email_sender import EmailDeliveryError, IEmailSender, NotificationEmail
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import MailMessage

logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 10.0


def render_mail(email: NotificationEmail) -> MailMessage:
    """Plain and HTML bodies for a notification email"""
    greeting = f"Hello {email.user_name}," if email.user_name else "Hello,"
    text = f"{greeting}\n\n{email.message}\n\n{email.tenant_name}"
    body = (
        f"<p>{html.escape(greeting)}</p>"
        f"<p>{html.escape(email.message)}</p>"
        f"<p>{html.escape(email.tenant_name)}</p>"
    )
    return MailMessage(
        to=email.user_email,
        subject=f"[{email.tenant_name}] {email.title}",
        text=text,
        html=body,
        template=email.notification_type,
        context=email.model_dump(mode="json"),
    )


class MailCollectionEmailSender(IEmailSender):
    """Queue messages in the ``mail`` collection"""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self.uow_factory = uow_factory

    async def send(self, email: NotificationEmail) -> None:
        async with self.uow_factory() as uow:
            await uow.mail.create(render_mail(email))
            await uow.commit()


class HttpEmailSender(IEmailSender):
    """
    POST the notification payload as JSON to an email service.

    Any non-2xx response or transport error raises EmailDeliveryError so the
    dispatcher can retry.
    """

    def __init__(self, url: str, http_client: Optional[httpx.AsyncClient] = None):
        self.url = url
        self._client = http_client or httpx.AsyncClient(timeout=_TIMEOUT_SECONDS)
        self._owns_client = http_client is None

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(self, email: NotificationEmail) -> None:
        try:
            response = await self._client.post(self.url, json=email.model_dump(mode="json"))
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"Email service unreachable: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise EmailDeliveryError(f"Email service returned HTTP {response.status_code}")
        logger.debug(f"Email service accepted message for {email.user_email}")
