from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset.errors import WEB_SERVICE_NOT_FOUND

from .dtos import WebServiceResponse


class GetWebServiceUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, web_service_id: UUID) -> Result[WebServiceResponse]:
        async with self.uow:
            web_service = await self.uow.web_services.get_by_id(web_service_id)
            if web_service is None:
                return Return.err(Error(WEB_SERVICE_NOT_FOUND, "Web service not found"))

            return Return.ok(WebServiceResponse.from_entity(web_service))
