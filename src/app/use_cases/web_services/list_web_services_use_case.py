from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import WebServiceResponse, WebServicesResponse


class ListWebServicesUseCase:
    """Lists every connection profile, inactive ones included"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[WebServicesResponse]:
        async with self.uow:
            web_services = await self.uow.web_services.list_all()
            items = [WebServiceResponse.from_entity(ws) for ws in web_services]
            return Return.ok(WebServicesResponse(web_services=items, total=len(items)))
