"""
EmailTemplate Entity

Subject/body pair rendered for outbound notifications.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from src.domain.base import utcnow

from .enums import TemplateType


class EmailTemplate(SQLModel, table=True):
    """
    EmailTemplate entity - notification template with {{variable}} placeholders.

    Business Rules:
    - At most one template has is_default=True
    - The reset workflow uses the template that is both default and active
    - name and subject are stored trimmed
    """

    __tablename__ = "email_templates"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    subject: str = Field(max_length=200)
    content: str = Field(sa_column=Column(Text, nullable=False))
    type: TemplateType = Field(default=TemplateType.html)

    is_active: bool = Field(default=True)
    is_default: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_email_template_default_active", "is_default", "is_active"),)
