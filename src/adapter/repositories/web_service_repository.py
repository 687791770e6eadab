from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.web_service_repository import IWebServiceRepository
from src.domain.base import utcnow
from src.domain.entities import WebService, normalize_host


class WebServiceRepository(IWebServiceRepository):
    """WebService repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, web_service_id: UUID) -> Optional[WebService]:
        """Get web service by ID"""
        stmt = select(WebService).where(WebService.id == web_service_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_host(self, host: str) -> Optional[WebService]:
        """Get the active web service whose url equals host (scheme stripped)"""
        stmt = select(WebService).where(
            WebService.url == normalize_host(host),
            WebService.is_active == True,  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_active(self) -> List[WebService]:
        """List active web services ordered by service name"""
        stmt = (
            select(WebService)
            .where(WebService.is_active == True)  # noqa: E712
            .order_by(WebService.service_name)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_all(self) -> List[WebService]:
        """List every web service, active or not, ordered by service name"""
        stmt = select(WebService).order_by(WebService.service_name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, web_service: WebService) -> WebService:
        """Create a new web service"""
        self.session.add(web_service)
        await self.session.flush()
        await self.session.refresh(web_service)
        return web_service

    async def update(self, web_service: WebService) -> WebService:
        """Update existing web service"""
        web_service.updated_at = utcnow()
        self.session.add(web_service)
        await self.session.flush()
        await self.session.refresh(web_service)
        return web_service

    async def delete(self, web_service: WebService) -> None:
        """Delete a web service"""
        await self.session.delete(web_service)
        await self.session.flush()
