from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import DeleteEmailTemplateResponse


class DeleteEmailTemplateUseCase:
    """Deleting the default template leaves resets unconfigured until another is set"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, template_id: UUID) -> Result[DeleteEmailTemplateResponse]:
        async with self.uow:
            template = await self.uow.email_templates.get_by_id(template_id)
            if template is None:
                return Return.err(Error("TEMPLATE_NOT_FOUND", "Template not found"))

            await self.uow.email_templates.delete(template)
            await self.uow.commit()

            return Return.ok(
                DeleteEmailTemplateResponse(id=str(template_id), message="Template deleted")
            )
