"""
Email Template Use Cases
"""

from .create_email_template_use_case import CreateEmailTemplateUseCase
from .delete_email_template_use_case import DeleteEmailTemplateUseCase
from .get_email_template_use_case import GetEmailTemplateUseCase
from .list_email_templates_use_case import ListEmailTemplatesUseCase
from .set_default_template_use_case import SetDefaultTemplateUseCase
from .update_email_template_use_case import UpdateEmailTemplateUseCase
from .dtos import (
    CreateEmailTemplateCommand,
    DeleteEmailTemplateResponse,
    EmailTemplateResponse,
    EmailTemplatesResponse,
    UpdateEmailTemplateCommand,
)

__all__ = [
    "CreateEmailTemplateUseCase",
    "DeleteEmailTemplateUseCase",
    "GetEmailTemplateUseCase",
    "ListEmailTemplatesUseCase",
    "SetDefaultTemplateUseCase",
    "UpdateEmailTemplateUseCase",
    "CreateEmailTemplateCommand",
    "DeleteEmailTemplateResponse",
    "EmailTemplateResponse",
    "EmailTemplatesResponse",
    "UpdateEmailTemplateCommand",
]
