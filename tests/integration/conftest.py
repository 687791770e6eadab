import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.fakes import FakeNotifier, FakeRemoteClient
from tests.fixtures.json_loader import TestDataLoader
from src.depends import (
    get_notification_sender,
    get_remote_identity_client,
    get_reset_settings,
    get_unit_of_work,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.password_reset import ResetSettings
from src.domain.entities import EmailTemplate, RemoteUser, WebService


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


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
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
def admin_headers():
    from config import ApplicationConfig

    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest_asyncio.fixture
def remote_client(test_data):
    return FakeRemoteClient(
        users=[
            test_data.model("remote_user", RemoteUser),
            test_data.model("suspended_user", RemoteUser),
        ]
    )


@pytest_asyncio.fixture
def notifier():
    return FakeNotifier()


@pytest_asyncio.fixture
def reset_settings():
    return ResetSettings(frontend_url="https://reset.example.edu", token_expires_in="5m")


@pytest_asyncio.fixture
async def web_service(db_session, test_data):
    web_service = test_data.model("web_service", WebService)
    db_session.add(web_service)
    await db_session.commit()
    return web_service


@pytest_asyncio.fixture
async def default_template(db_session, test_data):
    template = test_data.model("default_template", EmailTemplate)
    db_session.add(template)
    await db_session.commit()
    return template


@pytest_asyncio.fixture
async def client(session_factory, remote_client, notifier, reset_settings):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Each request gets its own session, like production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_remote_identity_client] = lambda: remote_client
    app.dependency_overrides[get_notification_sender] = lambda: notifier
    app.dependency_overrides[get_reset_settings] = lambda: reset_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
