from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import WebService


class IWebServiceRepository(ABC):
    """WebService repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, web_service_id: UUID) -> Optional[WebService]:
        """Get web service by ID"""
        pass

    @abstractmethod
    async def get_active_by_host(self, host: str) -> Optional[WebService]:
        """Get the active web service whose url equals host (scheme stripped)"""
        pass

    @abstractmethod
    async def list_active(self) -> List[WebService]:
        """List active web services ordered by service name"""
        pass

    @abstractmethod
    async def list_all(self) -> List[WebService]:
        """List every web service, active or not, ordered by service name"""
        pass

    @abstractmethod
    async def create(self, web_service: WebService) -> WebService:
        """Create a new web service"""
        pass

    @abstractmethod
    async def update(self, web_service: WebService) -> WebService:
        """Update existing web service"""
        pass

    @abstractmethod
    async def delete(self, web_service: WebService) -> None:
        """Delete a web service"""
        pass
