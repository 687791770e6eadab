import secrets
import time
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.domain.entities import RemoteUser, ResetTokenClaims

ALGORITHM = "HS256"
PASSWORD_RESET_TYPE = "password_reset"

TOKEN_EXPIRED = "TOKEN_EXPIRED"
INVALID_TOKEN = "INVALID_TOKEN"
INVALID_TOKEN_TYPE = "INVALID_TOKEN_TYPE"


def generate_reset_token(
    user: RemoteUser,
    connection_host: str,
    expires_delta: timedelta,
    secret: Optional[str] = None,
) -> str:
    """
    Generate signed password reset token

    Args:
        user: Remote user the token is issued for
        connection_host: Host of the connection profile the user lives on
        expires_delta: Token lifetime
        secret: Signing key (defaults to JWT_RESET_SECRET)

    Returns:
        JWT token string (HS256) carrying the "password_reset" discriminator
    """
    now = datetime.now(UTC)
    payload = {
        "remote_user_id": user.id,
        "username": user.username,
        "email": user.email,
        "connection_host": connection_host,
        "type": PASSWORD_RESET_TYPE,
        "issued_at": int(time.time() * 1000),
        "jti": secrets.token_hex(8),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, secret or ApplicationConfig.JWT_RESET_SECRET, algorithm=ALGORITHM)


def decode_reset_token(token: str, secret: Optional[str] = None) -> Result[ResetTokenClaims]:
    """
    Verify signature, expiry and discriminator of a reset token

    Returns:
        Result with decoded claims, or Error
        - TOKEN_EXPIRED: signature valid but exp has passed
        - INVALID_TOKEN: bad signature or malformed payload
        - INVALID_TOKEN_TYPE: signed token that is not a password reset token
    """
    try:
        payload = jwt.decode(
            token, secret or ApplicationConfig.JWT_RESET_SECRET, algorithms=[ALGORITHM]
        )
    except ExpiredSignatureError:
        return Return.err(Error(TOKEN_EXPIRED, "Token expired. Request a new password reset."))
    except JWTError:
        return Return.err(Error(INVALID_TOKEN, "Invalid token"))

    if payload.get("type") != PASSWORD_RESET_TYPE:
        return Return.err(Error(INVALID_TOKEN_TYPE, "Invalid token"))

    try:
        claims = ResetTokenClaims.model_validate(payload)
    except ValidationError:
        return Return.err(Error(INVALID_TOKEN, "Invalid token"))

    return Return.ok(claims)
