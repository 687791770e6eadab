from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import EmailTemplateResponse, EmailTemplatesResponse


class ListEmailTemplatesUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[EmailTemplatesResponse]:
        async with self.uow:
            templates = await self.uow.email_templates.list_all()
            items = [EmailTemplateResponse.from_entity(t) for t in templates]
            return Return.ok(EmailTemplatesResponse(templates=items, total=len(items)))
