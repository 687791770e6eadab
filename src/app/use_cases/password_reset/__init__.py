"""
Password Reset Use Cases

The reset workflow: request -> notify -> validate -> change password / consume.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .validate_reset_token_use_case import ValidateResetTokenUseCase
from .mark_token_used_use_case import MarkTokenUsedUseCase
from .change_password_use_case import ChangePasswordUseCase
from .settings import ResetSettings
from .dtos import (
    ChangePasswordResponse,
    RemoteUserSummary,
    RequestContext,
    RequestPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "MarkTokenUsedUseCase",
    "ChangePasswordUseCase",
    # Settings
    "ResetSettings",
    # DTOs
    "RequestContext",
    "RemoteUserSummary",
    "RequestPasswordResetResponse",
    "ChangePasswordResponse",
]
