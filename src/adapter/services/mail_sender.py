"""
HTTP Mail Gateway Sender

Posts rendered notifications to an HTTP mail gateway.
"""

import logging
import re
from typing import Dict, Optional

import httpx

from libs.result import Error, Result, Return
from src.app.services.notification_sender import (
    INVALID_NOTIFICATION,
    NOTIFICATION_FAILED,
    INotificationSender,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Gateway JSON keys for recipient, subject and body
DEFAULT_FIELD_NAMES = {"to": "email", "subject": "assunto", "body": "mensagem"}


class HttpMailSender(INotificationSender):
    """httpx implementation of the notification capability"""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        field_names: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.field_names = {**DEFAULT_FIELD_NAMES, **(field_names or {})}
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)

    async def send(self, to: str, subject: str, body: str) -> Result[None]:
        if not to or not subject or not body:
            return Return.err(Error(INVALID_NOTIFICATION, "Recipient, subject and body are required"))

        if not EMAIL_PATTERN.match(to):
            return Return.err(Error(INVALID_NOTIFICATION, "Invalid recipient email format"))

        payload = {
            self.field_names["to"]: to,
            self.field_names["subject"]: subject,
            self.field_names["body"]: body,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url, json=payload, headers={"User-Agent": "OxyPass-API/1.0"}
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.error(f"Mail gateway returned {e.response.status_code}: {e.response.text[:500]}")
            return Return.err(Error(NOTIFICATION_FAILED, "Failed to send email"))
        except httpx.HTTPError as e:
            self.logger.error(f"Mail gateway unreachable: {e}")
            return Return.err(Error(NOTIFICATION_FAILED, "Failed to send email"))

        self.logger.info("Notification email accepted by gateway")
        return Return.ok(None)
