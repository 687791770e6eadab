"""
Validate Reset Token Use Case

Checks that a reset token is known to the ledger, unconsumed, unexpired and
correctly signed. Does not consume it.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ResetTokenClaims

from .errors import (
    MSG_INVALID_TOKEN,
    MSG_TOKEN_USED,
    PERSISTENCE_ERROR,
    TOKEN_ALREADY_USED,
    TOKEN_NOT_FOUND,
    TOKEN_REQUIRED,
)
from .token_checks import verify_token_record


class ValidateResetTokenUseCase:
    """
    Use case for validating a password reset token.

    Business Rules:
    - Token must exist in the audit ledger (looked up by literal text)
    - Consumed tokens fail with "Token already used or expired"
    - Ledger expiry, then signature expiry and discriminator, are verified;
      failures mark the ledger record as error
    - A valid token leaves the ledger untouched
    """

    def __init__(self, uow: UnitOfWork, logger: Optional[logging.Logger] = None):
        self.uow = uow
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, token: str) -> Result[ResetTokenClaims]:
        """
        Execute validate reset token use case.

        Args:
            token: Reset token text received by email

        Returns:
            Result with decoded ResetTokenClaims, or Error

        Errors:
            - TOKEN_REQUIRED: Empty token
            - TOKEN_NOT_FOUND: No ledger record for this token
            - TOKEN_ALREADY_USED: Token already consumed
            - TOKEN_EXPIRED: Ledger or signature expiry passed
            - INVALID_TOKEN / INVALID_TOKEN_TYPE: Bad signature or not a reset token
        """
        if not token:
            return Return.err(Error(TOKEN_REQUIRED, "Token is required"))

        try:
            async with self.uow:
                record = await self.uow.audit_records.get_by_token(token)

                if record is None:
                    self.logger.warning("Reset token not found in audit ledger")
                    return Return.err(Error(TOKEN_NOT_FOUND, MSG_INVALID_TOKEN))

                if record.token_consumed:
                    self.logger.warning(f"Reset token already consumed: record={record.id}")
                    return Return.err(Error(TOKEN_ALREADY_USED, MSG_TOKEN_USED))

                checked = await verify_token_record(self.uow, record, token, self.logger)
                if checked.is_ok():
                    self.logger.info(f"Reset token valid: record={record.id}")
                return checked
        except SQLAlchemyError as e:
            self.logger.error(f"Audit ledger failure validating reset token: {e}")
            return Return.err(Error(PERSISTENCE_ERROR, "Internal error validating token"))
