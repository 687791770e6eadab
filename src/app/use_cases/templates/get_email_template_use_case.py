from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import EmailTemplateResponse


class GetEmailTemplateUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, template_id: UUID) -> Result[EmailTemplateResponse]:
        async with self.uow:
            template = await self.uow.email_templates.get_by_id(template_id)
            if template is None:
                return Return.err(Error("TEMPLATE_NOT_FOUND", "Template not found"))

            return Return.ok(EmailTemplateResponse.from_entity(template))
