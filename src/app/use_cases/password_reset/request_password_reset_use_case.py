"""
Request Password Reset Use Case

Looks up the remote user, issues a signed reset token, records the attempt in
the audit ledger and sends the templated notification.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_reset_token
from src.app.services.notification_sender import NOTIFICATION_FAILED, INotificationSender
from src.app.services.remote_identity_client import IRemoteIdentityClient
from src.app.services.template_renderer import extract_user_variables, render
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditRecord, AuditStatus, IdentifierField

from .dtos import RemoteUserSummary, RequestContext, RequestPasswordResetResponse
from .errors import (
    DESC_NO_TEMPLATE,
    DESC_PENDING,
    DESC_SEND_FAILED,
    DESC_SENT,
    DESC_SUSPENDED,
    MSG_GENERIC_SENT,
    PERSISTENCE_ERROR,
    TEMPLATE_NOT_CONFIGURED,
    USER_SUSPENDED,
    WEB_SERVICE_NOT_FOUND,
)
from .settings import ResetSettings
from .validation import validate_lookup


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset on a remote Moodle.

    Business Rules:
    - Exactly one of email/username, validated before any remote call
    - Lookup failures of any kind (unknown host, user not found, remote
      unreachable) are recorded as error and reported as the generic success
    - Suspended users are recorded as error and reported as a failure
    - Token is a signed JWT with the "password_reset" discriminator
    - Ledger record is pending until the email is sent (success) or fails (error)
    - Template or email failures are reported as failures
    """

    def __init__(
        self,
        uow: UnitOfWork,
        remote_client: IRemoteIdentityClient,
        notifier: INotificationSender,
        settings: Optional[ResetSettings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.remote_client = remote_client
        self.notifier = notifier
        self.settings = settings or ResetSettings.from_config()
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _masked_response() -> RequestPasswordResetResponse:
        return RequestPasswordResetResponse(status="sent", message=MSG_GENERIC_SENT)

    async def execute(
        self,
        host: str,
        email: Optional[str] = None,
        username: Optional[str] = None,
        request_context: Optional[RequestContext] = None,
    ) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            host: Moodle host of the connection profile (scheme optional)
            email: User's email (mutually exclusive with username)
            username: User's login (mutually exclusive with email)
            request_context: Caller IP / user agent, logged only

        Returns:
            Result with RequestPasswordResetResponse, or Error

        Errors:
            - INVALID_HOST / INVALID_IDENTIFIER: Bad input, nothing recorded
            - USER_SUSPENDED: Remote account suspended
            - TEMPLATE_NOT_CONFIGURED: No default active email template
            - NOTIFICATION_FAILED: Email could not be sent
            - PERSISTENCE_ERROR: Ledger write failed
        """
        lookup = validate_lookup(host, email, username)
        if lookup.is_err():
            return Return.err(lookup.error)
        host, field, value = lookup.value

        context = request_context or RequestContext()
        self.logger.info(
            f"Password reset requested on {host} by {field.value} "
            f"(ip={context.ip}, agent={context.user_agent})"
        )

        try:
            async with self.uow:
                return await self._run(host, field, value, email, username)
        except SQLAlchemyError as e:
            self.logger.error(f"Audit ledger failure during password reset: {e}")
            return Return.err(Error(PERSISTENCE_ERROR, "Internal error processing password reset"))

    async def _run(
        self,
        host: str,
        field: IdentifierField,
        value: str,
        email: Optional[str],
        username: Optional[str],
    ) -> Result[RequestPasswordResetResponse]:
        web_service = await self.uow.web_services.get_active_by_host(host)

        if web_service is None:
            self.logger.warning(f"No active web service for host {host}")
            lookup_error = Error(WEB_SERVICE_NOT_FOUND, "Web service not found")
        else:
            found = await self.remote_client.find_user(web_service, field, value)
            lookup_error = found.error if found.is_err() else None

        # Masked path: never reveal whether the user exists
        if lookup_error is not None:
            await self.uow.audit_records.create(
                AuditRecord(
                    remote_user_id=None,
                    username=username,
                    email=email,
                    web_service_id=web_service.id if web_service else None,
                    token_user=None,
                    status=AuditStatus.error,
                    description=f"User lookup failed: {lookup_error.code}",
                )
            )
            await self.uow.commit()
            self.logger.warning(
                f"Reset lookup failed ({lookup_error.code}) on {host}; returning generic success"
            )
            return Return.ok(self._masked_response())

        user = found.value

        if user.suspended:
            await self.uow.audit_records.create(
                AuditRecord(
                    remote_user_id=user.id,
                    username=user.username,
                    email=user.email,
                    web_service_id=web_service.id,
                    token_user=None,
                    status=AuditStatus.error,
                    description=DESC_SUSPENDED,
                )
            )
            await self.uow.commit()
            self.logger.warning(f"Reset refused for suspended user id={user.id} on {host}")
            return Return.err(
                Error(USER_SUSPENDED, "Suspended users cannot request a password reset")
            )

        lifetime = self.settings.token_lifetime
        reset_token = generate_reset_token(user, web_service.url, lifetime)
        token_expires_at = utcnow() + lifetime

        record = await self.uow.audit_records.create(
            AuditRecord(
                remote_user_id=user.id,
                username=user.username,
                email=user.email,
                web_service_id=web_service.id,
                token_user=reset_token,
                token_consumed=False,
                notification_sent=False,
                token_expires_at=token_expires_at,
                status=AuditStatus.pending,
                description=DESC_PENDING,
            )
        )
        await self.uow.commit()
        audit_id = str(record.id)

        template = await self.uow.email_templates.get_default()
        if template is None:
            self.logger.error("No default active email template configured")
            record.status = AuditStatus.error
            record.description = DESC_NO_TEMPLATE
            await self.uow.audit_records.update(record)
            await self.uow.commit()
            return Return.err(Error(TEMPLATE_NOT_CONFIGURED, "Email template not configured"))

        variables = extract_user_variables(
            user,
            web_service,
            {
                "reset_link": self.settings.reset_link(reset_token),
                "reset_token": reset_token,
                "expiration_time": self.settings.token_lifetime_text,
            },
            system_name=self.settings.system_name,
        )
        subject = render(template.subject, variables)
        body = render(template.content, variables)
        self.logger.info(f"Rendering reset email with template '{template.name}'")

        sent = await self.notifier.send(user.email or "", subject, body)
        if sent.is_err():
            self.logger.error(f"Reset email failed for user id={user.id}: {sent.error.message}")
            record.status = AuditStatus.error
            record.description = DESC_SEND_FAILED
            record.notification_sent = False
            await self.uow.audit_records.update(record)
            await self.uow.commit()
            return Return.err(Error(NOTIFICATION_FAILED, "Failed to send password reset email"))

        record.status = AuditStatus.success
        record.description = DESC_SENT
        record.notification_sent = True
        await self.uow.audit_records.update(record)
        await self.uow.commit()

        self.logger.info(f"Reset email sent for user id={user.id} on {host}")

        return Return.ok(
            RequestPasswordResetResponse(
                status="sent",
                message=MSG_GENERIC_SENT,
                user=RemoteUserSummary(
                    id=user.id,
                    username=user.username,
                    fullname=user.fullname,
                    email=user.email,
                ),
                expires_in=self.settings.token_lifetime_text,
                audit_id=audit_id,
            )
        )
