"""
Password reset error codes

Token failures are distinct internally but share a small set of messages.
"""

from src.api.utils.jwt import INVALID_TOKEN, INVALID_TOKEN_TYPE, TOKEN_EXPIRED

INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
INVALID_HOST = "INVALID_HOST"
INVALID_PASSWORD = "INVALID_PASSWORD"
USER_SUSPENDED = "USER_SUSPENDED"
WEB_SERVICE_NOT_FOUND = "WEB_SERVICE_NOT_FOUND"
TEMPLATE_NOT_CONFIGURED = "TEMPLATE_NOT_CONFIGURED"
PERSISTENCE_ERROR = "PERSISTENCE_ERROR"

TOKEN_REQUIRED = "TOKEN_REQUIRED"
TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
TOKEN_ALREADY_USED = "TOKEN_ALREADY_USED"

MSG_INVALID_TOKEN = "Invalid token"
MSG_TOKEN_USED = "Token already used or expired"
MSG_TOKEN_EXPIRED = "Token expired. Request a new password reset."
MSG_GENERIC_SENT = "If the user exists, a password reset email will be sent"

# Ledger descriptions
DESC_SUSPENDED = "suspended"
DESC_EXPIRED = "expired"
DESC_USED = "used successfully"
DESC_PENDING = "password reset started"
DESC_SENT = "email sent"
DESC_SEND_FAILED = "email delivery failed"
DESC_NO_TEMPLATE = "template not configured"
DESC_INVALID_TYPE = "invalid token type"
DESC_INVALID_SIGNATURE = "invalid token signature"

__all__ = [
    "INVALID_IDENTIFIER",
    "INVALID_HOST",
    "INVALID_PASSWORD",
    "USER_SUSPENDED",
    "WEB_SERVICE_NOT_FOUND",
    "TEMPLATE_NOT_CONFIGURED",
    "PERSISTENCE_ERROR",
    "TOKEN_REQUIRED",
    "TOKEN_NOT_FOUND",
    "TOKEN_ALREADY_USED",
    "TOKEN_EXPIRED",
    "INVALID_TOKEN",
    "INVALID_TOKEN_TYPE",
]
