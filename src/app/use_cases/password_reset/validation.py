import re
from typing import Optional, Tuple

from libs.result import Error, Result, Return
from src.domain.entities import IdentifierField, normalize_host

from .errors import INVALID_HOST, INVALID_IDENTIFIER, INVALID_PASSWORD

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_MIN_LENGTH = 2


def validate_lookup(
    host: Optional[str], email: Optional[str], username: Optional[str]
) -> Result[Tuple[str, IdentifierField, str]]:
    """
    Validate a lookup request before any remote call.

    Returns:
        Result with (normalized host, field, value), or Error
    """
    if not host or not normalize_host(host):
        return Return.err(Error(INVALID_HOST, "Moodle host is required"))

    if email and username:
        return Return.err(Error(INVALID_IDENTIFIER, "Provide either email or username, not both"))

    if not email and not username:
        return Return.err(Error(INVALID_IDENTIFIER, "Provide email or username"))

    if email:
        if not EMAIL_PATTERN.match(email):
            return Return.err(Error(INVALID_IDENTIFIER, "Invalid email format"))
        return Return.ok((normalize_host(host), IdentifierField.email, email))

    if len(username) < USERNAME_MIN_LENGTH:
        return Return.err(
            Error(INVALID_IDENTIFIER, f"Username must be at least {USERNAME_MIN_LENGTH} characters")
        )
    return Return.ok((normalize_host(host), IdentifierField.username, username))


def validate_password(password: Optional[str], min_length: int, max_length: int) -> Result[None]:
    if not password:
        return Return.err(Error(INVALID_PASSWORD, "New password is required"))

    if len(password) < min_length:
        return Return.err(
            Error(INVALID_PASSWORD, f"Password must be at least {min_length} characters long")
        )

    if len(password) > max_length:
        return Return.err(
            Error(INVALID_PASSWORD, f"Password too long (maximum {max_length} characters)")
        )

    return Return.ok(None)
