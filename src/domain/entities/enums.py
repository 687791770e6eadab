"""
Reset Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AuditStatus(str, Enum):
    """Outcome of a password reset attempt"""

    pending = "pending"
    success = "success"
    error = "error"


class WebServiceProtocol(str, Enum):
    """Scheme used to reach a remote Moodle instance"""

    http = "http"
    https = "https"


class TemplateType(str, Enum):
    """Email template body format"""

    html = "html"
    text = "text"


class IdentifierField(str, Enum):
    """Remote user lookup field (exactly one per lookup)"""

    email = "email"
    username = "username"
