from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import EmailTemplate, TemplateType


class CreateEmailTemplateCommand(BaseModel):
    name: str
    subject: str
    content: str
    description: Optional[str] = None
    type: TemplateType = TemplateType.html
    is_active: bool = True
    is_default: bool = False


class EmailTemplateResponse(BaseModel):
    id: str
    name: str
    description: Optional[str]
    subject: str
    content: str
    type: TemplateType
    is_active: bool
    is_default: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, template: EmailTemplate) -> "EmailTemplateResponse":
        return cls(
            id=str(template.id),
            name=template.name,
            description=template.description,
            subject=template.subject,
            content=template.content,
            type=template.type,
            is_active=template.is_active,
            is_default=template.is_default,
            created_at=template.created_at,
            updated_at=template.updated_at,
        )


class UpdateEmailTemplateCommand(BaseModel):
    """Partial update; only fields explicitly set are applied"""

    name: Optional[str] = None
    subject: Optional[str] = None
    content: Optional[str] = None
    description: Optional[str] = None
    type: Optional[TemplateType] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None


class EmailTemplatesResponse(BaseModel):
    templates: List[EmailTemplateResponse]
    total: int


class DeleteEmailTemplateResponse(BaseModel):
    id: str
    message: str
