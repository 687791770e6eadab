from datetime import timedelta
from typing import Optional

from src.api.utils.jwt import generate_reset_token
from src.domain.base import utcnow
from src.domain.entities import AuditRecord, AuditStatus, RemoteUser, WebService


def issued_record(
    remote_user: RemoteUser,
    web_service: WebService,
    lifetime: timedelta = timedelta(minutes=5),
    ledger_expires_at: Optional[timedelta] = None,
    token: Optional[str] = None,
    consumed: bool = False,
) -> AuditRecord:
    """Audit record as left by a successful reset request"""
    token = token or generate_reset_token(remote_user, web_service.url, lifetime)
    expires_at = utcnow() + (ledger_expires_at if ledger_expires_at is not None else lifetime)
    return AuditRecord(
        remote_user_id=remote_user.id,
        username=remote_user.username,
        email=remote_user.email,
        web_service_id=web_service.id,
        token_user=token,
        token_consumed=consumed,
        notification_sent=True,
        token_expires_at=expires_at,
        status=AuditStatus.success,
        description="email sent",
    )
