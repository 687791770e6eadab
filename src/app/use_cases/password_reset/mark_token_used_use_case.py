"""
Mark Token Used Use Case

Consumes a reset token in the audit ledger. This is the only place
token_consumed is set.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditStatus

from .errors import (
    DESC_USED,
    MSG_INVALID_TOKEN,
    MSG_TOKEN_USED,
    PERSISTENCE_ERROR,
    TOKEN_ALREADY_USED,
    TOKEN_NOT_FOUND,
    TOKEN_REQUIRED,
)
from .token_checks import verify_token_record


class MarkTokenUsedUseCase:
    """
    Use case for consuming a password reset token.

    Business Rules:
    - Fails if the token is unknown, already consumed or expired
    - Re-verifies signature and discriminator
    - The flip is a conditional update; of two concurrent calls exactly one
      succeeds and the other gets TOKEN_ALREADY_USED
    """

    def __init__(self, uow: UnitOfWork, logger: Optional[logging.Logger] = None):
        self.uow = uow
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, token: str) -> Result[bool]:
        """
        Execute mark token used use case.

        Args:
            token: Reset token text

        Returns:
            Result with True once consumed, or Error
        """
        if not token:
            return Return.err(Error(TOKEN_REQUIRED, "Token is required"))

        try:
            async with self.uow:
                record = await self.uow.audit_records.get_by_token(token)

                if record is None:
                    self.logger.warning("Token to consume not found in audit ledger")
                    return Return.err(Error(TOKEN_NOT_FOUND, MSG_INVALID_TOKEN))

                if record.token_consumed:
                    self.logger.warning(f"Attempt to reuse consumed token: record={record.id}")
                    return Return.err(Error(TOKEN_ALREADY_USED, MSG_TOKEN_USED))

                checked = await verify_token_record(self.uow, record, token, self.logger)
                if checked.is_err():
                    return Return.err(checked.error)

                record_id = record.id
                consumed = await self.uow.audit_records.mark_token_consumed(
                    record_id, AuditStatus.success, DESC_USED
                )
                if not consumed:
                    # Lost the race against a concurrent consumer
                    await self.uow.rollback()
                    self.logger.warning(f"Token consumed concurrently: record={record_id}")
                    return Return.err(Error(TOKEN_ALREADY_USED, MSG_TOKEN_USED))

                await self.uow.commit()
                self.logger.info(f"Token marked as used: record={record_id}")
                return Return.ok(True)
        except SQLAlchemyError as e:
            self.logger.error(f"Audit ledger failure consuming token: {e}")
            return Return.err(Error(PERSISTENCE_ERROR, "Internal error consuming token"))
