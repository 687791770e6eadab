from abc import ABC, abstractmethod

from src.app.repositories.audit_record_repository import IAuditRecordRepository
from src.app.repositories.email_template_repository import IEmailTemplateRepository
from src.app.repositories.web_service_repository import IWebServiceRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    web_services: IWebServiceRepository
    audit_records: IAuditRecordRepository
    email_templates: IEmailTemplateRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
