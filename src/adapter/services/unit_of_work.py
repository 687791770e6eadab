from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_record_repository import AuditRecordRepository
from src.adapter.repositories.email_template_repository import EmailTemplateRepository
from src.adapter.repositories.web_service_repository import WebServiceRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.web_services = WebServiceRepository(self.session)
        self.audit_records = AuditRecordRepository(self.session)
        self.email_templates = EmailTemplateRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
