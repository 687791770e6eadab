from abc import ABC, abstractmethod
from typing import Any, Dict

from libs.result import Result
from src.domain.entities import IdentifierField, RemoteUser, UpdateOutcome, WebService

# Error codes returned by remote identity clients
USER_NOT_FOUND = "USER_NOT_FOUND"
REMOTE_COMMUNICATION_ERROR = "REMOTE_COMMUNICATION_ERROR"
REMOTE_ERROR = "REMOTE_ERROR"
REMOTE_UPDATE_REJECTED = "REMOTE_UPDATE_REJECTED"


class IRemoteIdentityClient(ABC):
    """
    Remote identity capability - application layer.

    Implementations never raise for transport problems: timeouts, connection
    failures and malformed responses come back as REMOTE_COMMUNICATION_ERROR.
    """

    @abstractmethod
    async def find_user(
        self, web_service: WebService, field: IdentifierField, value: str
    ) -> Result[RemoteUser]:
        """
        Look up exactly one user by email or username.

        Errors:
            - USER_NOT_FOUND: Lookup succeeded but returned no user
            - REMOTE_ERROR: Remote system answered with an error payload
            - REMOTE_COMMUNICATION_ERROR: Remote system unreachable or malformed reply
        """
        pass

    @abstractmethod
    async def update_user(
        self, web_service: WebService, remote_user_id: int, fields: Dict[str, Any]
    ) -> Result[UpdateOutcome]:
        """
        Apply a partial update (e.g. new password) to a remote user.

        Errors:
            - REMOTE_UPDATE_REJECTED: Remote validation warnings rejected the update
            - REMOTE_ERROR: Remote system answered with an error payload
            - REMOTE_COMMUNICATION_ERROR: Remote system unreachable or malformed reply
        """
        pass
