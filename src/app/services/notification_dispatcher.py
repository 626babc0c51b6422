"""
Background email hand-off for in-app notifications.

Use cases create Notification records, commit, then ``enqueue`` them here.
``enqueue`` never blocks and never raises; a worker task drains the queue,
resolves recipient and tenant details through its own unit of work and
hands the email to an ``IEmailSender`` with retries. Failures, including a
failed recipient lookup, are logged and parked in a bounded dead-letter list
keyed by notification id; they never reach the caller that created the
notification.
"""

import asyncio
import logging
from collections import deque
from typing import Callable, Deque, Iterable, List, Optional

from pydantic import BaseModel

from src.app.services.email_sender import IEmailSender, NotificationEmail
from src.app.services.retry import compute_delay
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Notification
from src.domain.timestamps import to_iso

logger = logging.getLogger(__name__)

DEAD_LETTER_LIMIT = 1000
MAX_BACKOFF_SECONDS = 30.0


class DeadLetter(BaseModel):
    """
    A notification whose email could not be delivered.

    ``email`` is None when the email itself could not be built, in which case
    redelivery builds it again from ``notification``.
    """

    notification_id: Optional[str] = None
    notification: Notification
    email: Optional[NotificationEmail] = None
    error: str
    attempts: int
    failed_at: str


class NotificationDispatcher:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        email_sender: IEmailSender,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        dead_letter_limit: int = DEAD_LETTER_LIMIT,
    ):
        self.uow_factory = uow_factory
        self.email_sender = email_sender
        self.max_attempts = max(1, max_attempts)
        self.base_delay = base_delay
        self.dead_letters: Deque[DeadLetter] = deque(maxlen=dead_letter_limit)
        self._queue: Optional[asyncio.Queue] = None
        self._worker: Optional[asyncio.Task] = None

    def enqueue(self, notifications: Iterable[Notification]) -> None:
        """Queue committed notifications for email delivery"""
        try:
            self._ensure_worker()
            for notification in notifications:
                self._queue.put_nowait(notification)
        except Exception as exc:
            logger.error(f"Failed to enqueue notification emails: {exc}")

    async def drain(self) -> None:
        """Wait until every queued notification has been processed"""
        if self._queue is not None:
            await self._queue.join()

    async def close(self) -> None:
        """Stop the worker and release the email sender"""
        if self._worker is not None and not self._worker.done():
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
        self._worker = None
        await self.email_sender.close()

    async def redeliver(self) -> List[DeadLetter]:
        """Retry every dead letter once more; returns those that failed again"""
        pending = list(self.dead_letters)
        self.dead_letters.clear()
        for letter in pending:
            if letter.email is None:
                await self._deliver(letter.notification)
            else:
                await self._send(letter.notification, letter.email)
        return list(self.dead_letters)

    def _ensure_worker(self) -> None:
        # Started lazily: the app may be served without lifespan events
        if self._queue is None:
            self._queue = asyncio.Queue()
        if self._worker is None or self._worker.done():
            self._worker = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        while True:
            notification = await self._queue.get()
            try:
                await self._deliver(notification)
            except Exception:
                logger.exception(f"Email dispatch failed for notification {notification.id}")
            finally:
                self._queue.task_done()

    async def _deliver(self, notification: Notification) -> bool:
        try:
            email = await self._build_email(notification)
        except Exception as exc:
            logger.error(f"Could not build email for notification {notification.id}: {exc}")
            self._park(notification, None, exc, attempts=1)
            return False
        if email is None:
            return True
        return await self._send(notification, email)

    async def _build_email(self, notification: Notification) -> Optional[NotificationEmail]:
        async with self.uow_factory() as uow:
            user = await uow.users.get(notification.user_id)
            if user is None or not user.email:
                logger.warning(
                    f"Skipping email for notification {notification.id}: "
                    f"no email on file for user {notification.user_id}"
                )
                return None

            tenant = await uow.tenants.get(notification.tenant_id)
            if tenant is None:
                logger.warning(
                    f"Skipping email for notification {notification.id}: "
                    f"tenant {notification.tenant_id} not found"
                )
                return None

        return NotificationEmail(
            notification_id=notification.id,
            user_id=user.id,
            user_email=user.email,
            user_name=user.display_name,
            tenant_id=tenant.id,
            tenant_name=tenant.name,
            notification_type=notification.type.value,
            title=notification.title,
            message=notification.message,
            metadata=notification.context,
        )

    async def _send(self, notification: Notification, email: NotificationEmail) -> bool:
        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                await self.email_sender.send(email)
                logger.info(
                    f"Notification email sent: to={email.user_email} "
                    f"type={email.notification_type} attempt={attempt}"
                )
                return True
            except Exception as exc:
                last_error = exc
                logger.warning(
                    f"Notification email failed: to={email.user_email} "
                    f"attempt={attempt}/{self.max_attempts} error={exc}"
                )
            if attempt < self.max_attempts:
                await asyncio.sleep(compute_delay(attempt, self.base_delay, MAX_BACKOFF_SECONDS))

        logger.error(
            f"Notification email exhausted retries: to={email.user_email} "
            f"notification={email.notification_id} error={last_error}"
        )
        self._park(notification, email, last_error, attempts=self.max_attempts)
        return False

    def _park(
        self,
        notification: Notification,
        email: Optional[NotificationEmail],
        error: Optional[Exception],
        attempts: int,
    ) -> None:
        # One letter per notification; a newer failure replaces the older one
        for letter in list(self.dead_letters):
            if notification.id is not None and letter.notification_id == notification.id:
                self.dead_letters.remove(letter)
        self.dead_letters.append(
            DeadLetter(
                notification_id=notification.id,
                notification=notification,
                email=email,
                error=str(error),
                attempts=attempts,
                failed_at=to_iso(utcnow()),
            )
        )
