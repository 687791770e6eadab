"""
Moodle Remote Identity Client

Calls the Moodle REST webservice (core_user_get_users_by_field and
core_user_update_users) on behalf of the reset workflow.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from libs.result import Error, Result, Return
from src.app.services.remote_identity_client import (
    REMOTE_COMMUNICATION_ERROR,
    REMOTE_ERROR,
    REMOTE_UPDATE_REJECTED,
    USER_NOT_FOUND,
    IRemoteIdentityClient,
)
from src.domain.entities import (
    IdentifierField,
    RemoteUser,
    UpdateOutcome,
    UpdateWarning,
    WebService,
)

USER_AGENT = "OxyPass-API/1.0"
REST_FORMAT = "json"
FIND_FUNCTION = "core_user_get_users_by_field"
UPDATE_FUNCTION = "core_user_update_users"

# Substrings that turn an update warning into a rejection
CRITICAL_WARNING_MARKERS = ("error", "invalid")


class MoodleClient(IRemoteIdentityClient):
    """
    httpx implementation of the remote identity capability.

    One AsyncClient is opened per call, bounded by `timeout`. No retries.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify_tls: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)

    async def find_user(
        self, web_service: WebService, field: IdentifierField, value: str
    ) -> Result[RemoteUser]:
        params = {
            "wsfunction": FIND_FUNCTION,
            "field": field.value,
            "values[0]": value,
        }
        self.logger.info(f"Looking up remote user by {field.value} on {web_service.url}")

        call = await self._call(web_service, params)
        if call.is_err():
            return call
        data = call.value

        if isinstance(data, dict) and data.get("errorcode"):
            self.logger.error(f"Moodle error: {data.get('errorcode')} - {data.get('message')}")
            return Return.err(
                Error(REMOTE_ERROR, f"Remote error: {data.get('message') or data.get('errorcode')}")
            )

        if not isinstance(data, list) or len(data) == 0:
            self.logger.info(f"Remote user not found by {field.value} on {web_service.url}")
            return Return.err(Error(USER_NOT_FOUND, "User not found"))

        try:
            user = RemoteUser.model_validate(data[0])
        except ValidationError as e:
            self.logger.error(f"Malformed user payload from {web_service.url}: {e}")
            return Return.err(
                Error(REMOTE_COMMUNICATION_ERROR, "Malformed response from remote system")
            )

        self.logger.info(f"Remote user found: id={user.id} on {web_service.url}")
        return Return.ok(user)

    async def update_user(
        self, web_service: WebService, remote_user_id: int, fields: Dict[str, Any]
    ) -> Result[UpdateOutcome]:
        params: Dict[str, Any] = {
            "wsfunction": UPDATE_FUNCTION,
            "users[0][id]": remote_user_id,
        }
        for key, value in fields.items():
            if value is not None:
                params[f"users[0][{key}]"] = value

        self.logger.info(f"Updating remote user id={remote_user_id} on {web_service.url}")

        call = await self._call(web_service, params)
        if call.is_err():
            return call
        return self._process_update_response(call.value, remote_user_id, fields)

    def _process_update_response(
        self, data: Any, remote_user_id: int, fields: Dict[str, Any]
    ) -> Result[UpdateOutcome]:
        # core_user_update_users answers null on older Moodle versions
        if data is None:
            data = {}

        if not isinstance(data, dict):
            return Return.err(
                Error(REMOTE_COMMUNICATION_ERROR, "Malformed response from remote system")
            )

        if data.get("errorcode"):
            self.logger.error(f"Moodle update error: {data.get('errorcode')} - {data.get('message')}")
            return Return.err(
                Error(REMOTE_ERROR, data.get("message") or "Remote update failed")
            )

        warnings = self._parse_warnings(data.get("warnings") or [])
        for warning in warnings:
            self.logger.warning(f"Update warning: {warning.warningcode} - {warning.message}")

        critical = [
            w for w in warnings
            if any(marker in w.warningcode for marker in CRITICAL_WARNING_MARKERS)
        ]
        if critical:
            return Return.err(
                Error(REMOTE_UPDATE_REJECTED, f"Update rejected: {critical[0].message}")
            )

        self.logger.info(f"Remote user updated: id={remote_user_id}")
        return Return.ok(
            UpdateOutcome(
                remote_user_id=remote_user_id,
                updated_fields=list(fields.keys()),
                warnings=warnings,
            )
        )

    @staticmethod
    def _parse_warnings(raw: List[Any]) -> List[UpdateWarning]:
        warnings = []
        for item in raw:
            if isinstance(item, dict):
                warnings.append(
                    UpdateWarning(
                        warningcode=str(item.get("warningcode") or ""),
                        message=str(item.get("message") or ""),
                        item=item.get("item"),
                        itemid=item.get("itemid"),
                    )
                )
        return warnings

    async def _call(self, web_service: WebService, params: Dict[str, Any]) -> Result[Any]:
        query = {"wstoken": web_service.token or "", "moodlewsrestformat": REST_FORMAT, **params}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, verify=self.verify_tls, transport=self.transport
            ) as client:
                response = await client.get(
                    web_service.endpoint,
                    params=query,
                    headers={"User-Agent": USER_AGENT},
                )
                response.raise_for_status()
                return Return.ok(response.json())
        except httpx.TimeoutException:
            self.logger.error(f"Timeout calling {web_service.url}")
            return Return.err(Error(REMOTE_COMMUNICATION_ERROR, "Remote system timed out"))
        except httpx.HTTPStatusError as e:
            self.logger.error(
                f"Remote HTTP {e.response.status_code} from {web_service.url}: {e.response.text[:500]}"
            )
            return Return.err(Error(REMOTE_COMMUNICATION_ERROR, "Remote system returned an error status"))
        except httpx.HTTPError as e:
            self.logger.error(f"Transport error calling {web_service.url}: {e}")
            return Return.err(Error(REMOTE_COMMUNICATION_ERROR, "Remote system unreachable"))
        except ValueError:
            self.logger.error(f"Non-JSON response from {web_service.url}")
            return Return.err(
                Error(REMOTE_COMMUNICATION_ERROR, "Malformed response from remote system")
            )
