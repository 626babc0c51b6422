import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.depends import get_unit_of_work


class RecordingEmailSender(IEmailSender):
    def __init__(self):
        self.sent = []

    async def send(self, email):
        self.sent.append(email)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def uow(db_session):
    return SqlAlchemyUnitOfWork(db_session)


@pytest_asyncio.fixture
async def email_sender():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def dispatcher(engine, email_sender):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    dispatcher = NotificationDispatcher(
        lambda: SqlAlchemyUnitOfWork(session_factory=Session),
        email_sender,
        base_delay=0,
    )
    yield dispatcher
    await dispatcher.close()


@pytest_asyncio.fixture
async def client(db_session, dispatcher):
    from src.api.app import create_app

    app = create_app(ApplicationConfig, dispatcher=dispatcher)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
