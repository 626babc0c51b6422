from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.email_sender import HttpEmailSender, MailCollectionEmailSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.api.utils.jwt import verify_jwt

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def background_unit_of_work() -> SqlAlchemyUnitOfWork:
    """Unit of work with its own session, for work outside a request"""
    return SqlAlchemyUnitOfWork(session_factory=AsyncSessionLocal)


def build_email_sender(config) -> IEmailSender:
    if config.EMAIL_SERVICE_URL:
        return HttpEmailSender(config.EMAIL_SERVICE_URL)
    return MailCollectionEmailSender(background_unit_of_work)


def build_notification_dispatcher(config, uow_factory=background_unit_of_work) -> NotificationDispatcher:
    return NotificationDispatcher(
        uow_factory=uow_factory,
        email_sender=build_email_sender(config),
        max_attempts=config.EMAIL_MAX_ATTEMPTS,
        base_delay=config.EMAIL_RETRY_BASE_DELAY,
    )


def get_notification_dispatcher(request: Request) -> Optional[NotificationDispatcher]:
    return getattr(request.app.state, "notification_dispatcher", None)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id, tenant_id, role

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    token = credentials.credentials
    payload = verify_jwt(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload
