import logging

from libs.result import Error, Result, Return
from src.api.utils.jwt import INVALID_TOKEN_TYPE, TOKEN_EXPIRED, decode_reset_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditRecord, AuditStatus, ResetTokenClaims

from .errors import DESC_EXPIRED, DESC_INVALID_SIGNATURE, DESC_INVALID_TYPE, MSG_TOKEN_EXPIRED


async def _reject(uow: UnitOfWork, record: AuditRecord, description: str) -> None:
    record.status = AuditStatus.error
    record.description = description
    await uow.audit_records.update(record)
    await uow.commit()


async def verify_token_record(
    uow: UnitOfWork, record: AuditRecord, token: str, logger: logging.Logger
) -> Result[ResetTokenClaims]:
    """
    Expiry and signature checks for a token whose ledger record exists and is
    not yet consumed.

    The ledger's token_expires_at is authoritative; the signed exp and the
    discriminator are checked after it. Any failure marks the record as error.
    """
    if record.token_expires_at is not None and utcnow() > record.token_expires_at:
        logger.warning(f"Reset token expired per ledger: record={record.id}")
        await _reject(uow, record, DESC_EXPIRED)
        return Return.err(Error(TOKEN_EXPIRED, MSG_TOKEN_EXPIRED))

    decoded = decode_reset_token(token)
    if decoded.is_err():
        code = decoded.error.code
        if code == TOKEN_EXPIRED:
            description = DESC_EXPIRED
        elif code == INVALID_TOKEN_TYPE:
            description = DESC_INVALID_TYPE
        else:
            description = DESC_INVALID_SIGNATURE
        logger.warning(f"Reset token rejected ({code}): record={record.id}")
        await _reject(uow, record, description)
        return decoded

    return decoded
