from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.mail_sender import HttpMailSender
from src.adapter.services.moodle_client import MoodleClient
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notification_sender import INotificationSender
from src.app.services.remote_identity_client import IRemoteIdentityClient
from src.app.use_cases.password_reset import ResetSettings

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_remote_identity_client() -> IRemoteIdentityClient:
    return MoodleClient(
        timeout=ApplicationConfig.REMOTE_TIMEOUT_SECONDS,
        verify_tls=ApplicationConfig.REMOTE_VERIFY_TLS,
    )


def get_notification_sender() -> INotificationSender:
    return HttpMailSender(
        ApplicationConfig.MAIL_GATEWAY_URL,
        timeout=ApplicationConfig.MAIL_TIMEOUT_SECONDS,
        field_names=ApplicationConfig.MAIL_FIELD_NAMES,
    )


def get_reset_settings() -> ResetSettings:
    return ResetSettings.from_config()


async def create_db_and_tables() -> None:
    """Create missing tables for every SQLModel entity"""
    import src.domain.entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
