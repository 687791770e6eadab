"""
Delete Web Service Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset.errors import WEB_SERVICE_NOT_FOUND

from .dtos import DeleteWebServiceResponse

WEB_SERVICE_IN_USE = "WEB_SERVICE_IN_USE"


class DeleteWebServiceUseCase:
    """
    Business Rules:
    - A profile still referenced by audit records cannot be removed on a
      database that enforces foreign keys; deactivate it instead
    """

    def __init__(self, uow: UnitOfWork, logger: Optional[logging.Logger] = None):
        self.uow = uow
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, web_service_id: UUID) -> Result[DeleteWebServiceResponse]:
        try:
            async with self.uow:
                web_service = await self.uow.web_services.get_by_id(web_service_id)
                if web_service is None:
                    return Return.err(Error(WEB_SERVICE_NOT_FOUND, "Web service not found"))

                service_name = web_service.service_name
                await self.uow.web_services.delete(web_service)
                await self.uow.commit()
        except IntegrityError as e:
            self.logger.warning(f"Web service {web_service_id} still referenced: {e}")
            return Return.err(
                Error(WEB_SERVICE_IN_USE, "Web service is referenced by audit records")
            )

        self.logger.info(f"Web service deleted: {service_name}")
        return Return.ok(
            DeleteWebServiceResponse(id=str(web_service_id), message="Web service deleted")
        )
