from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.email_template_repository import IEmailTemplateRepository
from src.domain.base import utcnow
from src.domain.entities import EmailTemplate


class EmailTemplateRepository(IEmailTemplateRepository):
    """EmailTemplate repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, template_id: UUID) -> Optional[EmailTemplate]:
        """Get email template by ID"""
        stmt = select(EmailTemplate).where(EmailTemplate.id == template_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[EmailTemplate]:
        """List every template, newest first"""
        stmt = select(EmailTemplate).order_by(EmailTemplate.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_default(self) -> Optional[EmailTemplate]:
        """Get the template that is both default and active"""
        stmt = select(EmailTemplate).where(
            EmailTemplate.is_default == True,  # noqa: E712
            EmailTemplate.is_active == True,  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, template: EmailTemplate) -> EmailTemplate:
        """Create a new email template"""
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template

    async def clear_defaults(self) -> int:
        """Unset is_default on every template, returning the number changed"""
        stmt = (
            update(EmailTemplate)
            .where(EmailTemplate.is_default == True)  # noqa: E712
            .values(is_default=False, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def update(self, template: EmailTemplate) -> EmailTemplate:
        """Update existing email template"""
        template.updated_at = utcnow()
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template

    async def delete(self, template: EmailTemplate) -> None:
        """Delete an email template"""
        await self.session.delete(template)
        await self.session.flush()
