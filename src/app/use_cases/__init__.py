"""
Use Cases

Organized into domain folders:
- password_reset/: Reset request, token validation and password change
- web_services/: Remote Moodle connection profiles
- templates/: Email templates
- audit/: Password reset ledger
"""

from .password_reset import (
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
    MarkTokenUsedUseCase,
    ChangePasswordUseCase,
)
from .web_services import (
    CreateWebServiceUseCase,
    DeleteWebServiceUseCase,
    FindRemoteUserUseCase,
    GetWebServiceUseCase,
    ListWebServiceUrlsUseCase,
    ListWebServicesUseCase,
    UpdateWebServiceUseCase,
)
from .templates import (
    CreateEmailTemplateUseCase,
    DeleteEmailTemplateUseCase,
    GetEmailTemplateUseCase,
    ListEmailTemplatesUseCase,
    SetDefaultTemplateUseCase,
    UpdateEmailTemplateUseCase,
)
from .audit import (
    GetAuditRecordsUseCase,
    GetAuditRecordUseCase,
)

__all__ = [
    # Password reset
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "MarkTokenUsedUseCase",
    "ChangePasswordUseCase",
    # Web services
    "CreateWebServiceUseCase",
    "DeleteWebServiceUseCase",
    "FindRemoteUserUseCase",
    "GetWebServiceUseCase",
    "ListWebServiceUrlsUseCase",
    "ListWebServicesUseCase",
    "UpdateWebServiceUseCase",
    # Templates
    "CreateEmailTemplateUseCase",
    "DeleteEmailTemplateUseCase",
    "GetEmailTemplateUseCase",
    "ListEmailTemplatesUseCase",
    "SetDefaultTemplateUseCase",
    "UpdateEmailTemplateUseCase",
    # Audit
    "GetAuditRecordsUseCase",
    "GetAuditRecordUseCase",
]
