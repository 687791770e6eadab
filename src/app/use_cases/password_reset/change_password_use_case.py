"""
Change Password Use Case

Applies a new password on the remote Moodle using a valid reset token, then
consumes the token.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.remote_identity_client import IRemoteIdentityClient
from src.app.services.unit_of_work import UnitOfWork

from .dtos import ChangePasswordResponse
from .errors import PERSISTENCE_ERROR, WEB_SERVICE_NOT_FOUND
from .mark_token_used_use_case import MarkTokenUsedUseCase
from .settings import ResetSettings
from .validate_reset_token_use_case import ValidateResetTokenUseCase
from .validation import validate_password


class ChangePasswordUseCase:
    """
    Use case for changing a remote password with a reset token.

    Business Rules:
    - Password policy is checked first; a rejected password touches nothing
    - Token must pass ValidateResetTokenUseCase
    - The remote update is not transactional with the ledger: if consuming
      the token fails after the remote update succeeded, the change stands and
      the failure is only logged
    """

    def __init__(
        self,
        uow: UnitOfWork,
        remote_client: IRemoteIdentityClient,
        settings: Optional[ResetSettings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.remote_client = remote_client
        self.settings = settings or ResetSettings.from_config()
        self.logger = logger or logging.getLogger(__name__)
        self.validate_token = ValidateResetTokenUseCase(uow, logger=self.logger)
        self.mark_token_used = MarkTokenUsedUseCase(uow, logger=self.logger)

    async def execute(self, token: str, new_password: str) -> Result[ChangePasswordResponse]:
        """
        Execute change password use case.

        Args:
            token: Reset token text received by email
            new_password: New password to set on the remote system

        Returns:
            Result with ChangePasswordResponse, or Error

        Errors:
            - INVALID_PASSWORD: Password outside length bounds
            - TOKEN_*: Any token validation failure
            - WEB_SERVICE_NOT_FOUND: Token host no longer has an active profile
            - REMOTE_*: Remote update failed
        """
        password_check = validate_password(
            new_password,
            self.settings.password_min_length,
            self.settings.password_max_length,
        )
        if password_check.is_err():
            return Return.err(password_check.error)

        validation = await self.validate_token.execute(token)
        if validation.is_err():
            return Return.err(validation.error)
        claims = validation.value

        try:
            async with self.uow:
                web_service = await self.uow.web_services.get_active_by_host(
                    claims.connection_host
                )
                if web_service is None:
                    self.logger.error(f"No active web service for host {claims.connection_host}")
                    return Return.err(Error(WEB_SERVICE_NOT_FOUND, "Web service not found"))

                # Read-only session here: no row locks are held across the call
                updated = await self.remote_client.update_user(
                    web_service, claims.remote_user_id, {"password": new_password}
                )
        except SQLAlchemyError as e:
            self.logger.error(f"Database failure loading web service: {e}")
            return Return.err(Error(PERSISTENCE_ERROR, "Internal error changing password"))

        if updated.is_err():
            self.logger.error(
                f"Remote password update failed for user id={claims.remote_user_id}: "
                f"{updated.error.code}"
            )
            return Return.err(updated.error)

        marked = await self.mark_token_used.execute(token)
        if marked.is_err():
            self.logger.warning(
                f"Password changed but token could not be marked as used: {marked.error.code}"
            )

        self.logger.info(f"Password changed for user id={claims.remote_user_id}")

        return Return.ok(
            ChangePasswordResponse(
                status="success",
                message="Password changed successfully",
                email=claims.email,
                username=claims.username,
                url=claims.connection_host,
            )
        )
