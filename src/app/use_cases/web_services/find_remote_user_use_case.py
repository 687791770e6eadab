"""
Find Remote User Use Case

Administrative lookup of a remote Moodle user. Unlike the reset request, a
missing user is reported as such.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.remote_identity_client import IRemoteIdentityClient
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset.errors import WEB_SERVICE_NOT_FOUND
from src.app.use_cases.password_reset.validation import validate_lookup

from .dtos import FindRemoteUserResponse, WebServiceInfo


class FindRemoteUserUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        remote_client: IRemoteIdentityClient,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.remote_client = remote_client
        self.logger = logger or logging.getLogger(__name__)

    async def execute(
        self, host: str, email: Optional[str] = None, username: Optional[str] = None
    ) -> Result[FindRemoteUserResponse]:
        lookup = validate_lookup(host, email, username)
        if lookup.is_err():
            return Return.err(lookup.error)
        host, field, value = lookup.value

        async with self.uow:
            web_service = await self.uow.web_services.get_active_by_host(host)
            if web_service is None:
                return Return.err(Error(WEB_SERVICE_NOT_FOUND, "Web service not found"))

            found = await self.remote_client.find_user(web_service, field, value)
            if found.is_err():
                return Return.err(found.error)

            self.logger.info(f"Admin lookup found user id={found.value.id} on {host}")
            return Return.ok(
                FindRemoteUserResponse(
                    user=found.value,
                    web_service=WebServiceInfo(
                        service_name=web_service.service_name, url=web_service.url
                    ),
                )
            )
