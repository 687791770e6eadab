"""
Create Web Service Use Case

Registers a remote Moodle connection profile.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import WebService

from .dtos import CreateWebServiceCommand, WebServiceResponse
from .profile_fields import (
    check_host_available,
    normalize_profile_fields,
    validate_profile_fields,
)


class CreateWebServiceUseCase:
    """
    Business Rules:
    - url, token and service_name are required
    - url is stored without scheme; route defaults to the Moodle REST path
    - At most one active profile per host
    """

    def __init__(self, uow: UnitOfWork, logger: Optional[logging.Logger] = None):
        self.uow = uow
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, command: CreateWebServiceCommand) -> Result[WebServiceResponse]:
        checked = validate_profile_fields(normalize_profile_fields(command.model_dump()))
        if checked.is_err():
            return Return.err(checked.error)
        fields = checked.value

        async with self.uow:
            available = await check_host_available(self.uow, fields)
            if available.is_err():
                return Return.err(available.error)

            web_service = await self.uow.web_services.create(WebService(**fields))
            await self.uow.commit()

            self.logger.info(f"Web service created: {web_service.service_name} ({web_service.url})")
            return Return.ok(WebServiceResponse.from_entity(web_service))
