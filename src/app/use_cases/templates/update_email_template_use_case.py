"""
Update Email Template Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import EmailTemplateResponse, UpdateEmailTemplateCommand

REQUIRED_FIELDS = ("name", "subject", "content")
NON_NULL_FIELDS = ("type", "is_active", "is_default")


class UpdateEmailTemplateUseCase:
    """
    Business Rules:
    - Only fields present in the command are changed
    - name and subject are stored trimmed; name, subject and content may not
      be blanked
    - Making a template default clears the previous default in the same
      transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, template_id: UUID, command: UpdateEmailTemplateCommand
    ) -> Result[EmailTemplateResponse]:
        changes = {
            name: value
            for name, value in command.model_dump(exclude_unset=True).items()
            if value is not None or name not in NON_NULL_FIELDS
        }
        for name in ("name", "subject"):
            if changes.get(name) is not None:
                changes[name] = changes[name].strip()

        blank = [name for name in REQUIRED_FIELDS if name in changes and not changes[name]]
        if blank:
            return Return.err(
                Error("INVALID_TEMPLATE", "Template name, subject and content are required")
            )

        async with self.uow:
            template = await self.uow.email_templates.get_by_id(template_id)
            if template is None:
                return Return.err(Error("TEMPLATE_NOT_FOUND", "Template not found"))

            if changes.get("is_default") and not template.is_default:
                await self.uow.email_templates.clear_defaults()

            for name, value in changes.items():
                setattr(template, name, value)
            template = await self.uow.email_templates.update(template)
            await self.uow.commit()

            return Return.ok(EmailTemplateResponse.from_entity(template))
