"""
Reset Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuditStatus,
    IdentifierField,
    TemplateType,
    WebServiceProtocol,
)

# Export all entities
from .web_service import DEFAULT_ROUTE, WebService, normalize_host, normalize_route
from .audit_record import AuditRecord
from .email_template import EmailTemplate
from .remote_user import RemoteUser, ResetTokenClaims, UpdateOutcome, UpdateWarning

__all__ = [
    # Enums
    "AuditStatus",
    "IdentifierField",
    "TemplateType",
    "WebServiceProtocol",
    # Entities
    "WebService",
    "AuditRecord",
    "EmailTemplate",
    # Value objects
    "RemoteUser",
    "ResetTokenClaims",
    "UpdateOutcome",
    "UpdateWarning",
    # Helpers
    "DEFAULT_ROUTE",
    "normalize_host",
    "normalize_route",
]
