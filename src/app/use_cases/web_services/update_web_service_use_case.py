"""
Update Web Service Use Case

Applies a partial update to a connection profile.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset.errors import WEB_SERVICE_NOT_FOUND

from .dtos import UpdateWebServiceCommand, WebServiceResponse
from .profile_fields import (
    PROFILE_FIELDS,
    check_host_available,
    normalize_profile_fields,
    validate_profile_fields,
)


class UpdateWebServiceUseCase:
    """
    Business Rules:
    - Only fields present in the command are changed
    - The merged profile must still satisfy the create rules
    - Deactivating a profile is how it is taken out of the reset workflow
    """

    def __init__(self, uow: UnitOfWork, logger: Optional[logging.Logger] = None):
        self.uow = uow
        self.logger = logger or logging.getLogger(__name__)

    async def execute(
        self, web_service_id: UUID, command: UpdateWebServiceCommand
    ) -> Result[WebServiceResponse]:
        changes = normalize_profile_fields(command.model_dump(exclude_unset=True))

        async with self.uow:
            web_service = await self.uow.web_services.get_by_id(web_service_id)
            if web_service is None:
                return Return.err(Error(WEB_SERVICE_NOT_FOUND, "Web service not found"))

            current = {name: getattr(web_service, name) for name in PROFILE_FIELDS}
            checked = validate_profile_fields({**current, **changes})
            if checked.is_err():
                return Return.err(checked.error)
            fields = checked.value

            available = await check_host_available(self.uow, fields, own_id=web_service.id)
            if available.is_err():
                return Return.err(available.error)

            for name, value in changes.items():
                setattr(web_service, name, value)
            web_service = await self.uow.web_services.update(web_service)
            await self.uow.commit()

            self.logger.info(f"Web service updated: {web_service.id} ({', '.join(changes)})")
            return Return.ok(WebServiceResponse.from_entity(web_service))
