from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import EmailTemplate


class IEmailTemplateRepository(ABC):
    """EmailTemplate repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, template_id: UUID) -> Optional[EmailTemplate]:
        """Get email template by ID"""
        pass

    @abstractmethod
    async def list_all(self) -> List[EmailTemplate]:
        """List every template, newest first"""
        pass

    @abstractmethod
    async def get_default(self) -> Optional[EmailTemplate]:
        """Get the template that is both default and active"""
        pass

    @abstractmethod
    async def create(self, template: EmailTemplate) -> EmailTemplate:
        """Create a new email template"""
        pass

    @abstractmethod
    async def clear_defaults(self) -> int:
        """Unset is_default on every template, returning the number changed"""
        pass

    @abstractmethod
    async def update(self, template: EmailTemplate) -> EmailTemplate:
        """Update existing email template"""
        pass

    @abstractmethod
    async def delete(self, template: EmailTemplate) -> None:
        """Delete an email template"""
        pass
