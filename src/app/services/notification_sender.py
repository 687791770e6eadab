from abc import ABC, abstractmethod

from libs.result import Result

NOTIFICATION_FAILED = "NOTIFICATION_FAILED"
INVALID_NOTIFICATION = "INVALID_NOTIFICATION"


class INotificationSender(ABC):
    """Outbound email capability - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> Result[None]:
        """Send one message; failures are returned, never raised"""
        pass
