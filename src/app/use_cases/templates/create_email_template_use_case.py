"""
Create Email Template Use Case
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EmailTemplate

from .dtos import CreateEmailTemplateCommand, EmailTemplateResponse


class CreateEmailTemplateUseCase:
    """
    Business Rules:
    - name and subject are stored trimmed
    - Creating a default template clears the previous default in the same
      transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateEmailTemplateCommand) -> Result[EmailTemplateResponse]:
        name = command.name.strip()
        subject = command.subject.strip()
        if not name or not subject or not command.content:
            return Return.err(
                Error("INVALID_TEMPLATE", "Template name, subject and content are required")
            )

        async with self.uow:
            if command.is_default:
                await self.uow.email_templates.clear_defaults()

            template = await self.uow.email_templates.create(
                EmailTemplate(
                    name=name,
                    description=command.description,
                    subject=subject,
                    content=command.content,
                    type=command.type,
                    is_active=command.is_active,
                    is_default=command.is_default,
                )
            )
            await self.uow.commit()

            return Return.ok(EmailTemplateResponse.from_entity(template))
