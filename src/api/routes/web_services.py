"""
Web Service API Routes

Administration of remote Moodle connection profiles (admin API key).
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.web_services import (
    CreateWebServiceCommand,
    CreateWebServiceUseCase,
    DeleteWebServiceResponse,
    DeleteWebServiceUseCase,
    GetWebServiceUseCase,
    ListWebServicesUseCase,
    UpdateWebServiceCommand,
    UpdateWebServiceUseCase,
    WebServiceResponse,
    WebServicesResponse,
)
from src.depends import get_unit_of_work
from src.domain.entities import WebServiceProtocol

router = APIRouter(
    prefix="/webservices", tags=["Web Services"], dependencies=[Depends(verify_admin_api_key)]
)

ERROR_STATUS = {
    "INVALID_WEB_SERVICE": status.HTTP_400_BAD_REQUEST,
    "WEB_SERVICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "WEB_SERVICE_CONFLICT": status.HTTP_409_CONFLICT,
    "WEB_SERVICE_IN_USE": status.HTTP_409_CONFLICT,
}


class CreateWebServiceRequest(BaseModel):
    protocol: WebServiceProtocol = WebServiceProtocol.https
    url: str = Field(..., min_length=1, max_length=255, description="Moodle host, scheme optional")
    token: str = Field(..., min_length=1, description="Moodle webservice token (wstoken)")
    service_name: str = Field(..., min_length=1, max_length=100)
    route: Optional[str] = Field(None, max_length=255, description="Defaults to the REST endpoint")
    moodle_user: Optional[str] = Field(None, max_length=100)
    moodle_password: Optional[str] = Field(None, max_length=255)
    is_active: bool = True


class UpdateWebServiceRequest(BaseModel):
    protocol: Optional[WebServiceProtocol] = None
    url: Optional[str] = Field(None, max_length=255)
    token: Optional[str] = None
    service_name: Optional[str] = Field(None, max_length=100)
    route: Optional[str] = Field(None, max_length=255)
    moodle_user: Optional[str] = Field(None, max_length=100)
    moodle_password: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None


def _raise_for(error):
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=WebServiceResponse)
async def create_web_service(
    request: CreateWebServiceRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Register a Moodle connection profile

    Raises:
        - 400 Bad Request: Blank url, token or service name
        - 401 Unauthorized: Missing or invalid admin API key
        - 409 Conflict: Another active profile already serves the host
    """
    command = CreateWebServiceCommand(**request.model_dump())

    use_case = CreateWebServiceUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=WebServicesResponse)
async def list_web_services(uow: UnitOfWork = Depends(get_unit_of_work)):
    use_case = ListWebServicesUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "/{web_service_id}", status_code=status.HTTP_200_OK, response_model=WebServiceResponse
)
async def get_web_service(web_service_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    use_case = GetWebServiceUseCase(uow)
    result = await use_case.execute(web_service_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.put(
    "/{web_service_id}", status_code=status.HTTP_200_OK, response_model=WebServiceResponse
)
async def update_web_service(
    web_service_id: UUID,
    request: UpdateWebServiceRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update a connection profile; omitted fields are left unchanged

    Raises:
        - 400 Bad Request: Update would blank a required field
        - 404 Not Found: Web service not found
        - 409 Conflict: Another active profile already serves the host
    """
    command = UpdateWebServiceCommand(**request.model_dump(exclude_unset=True))

    use_case = UpdateWebServiceUseCase(uow)
    result = await use_case.execute(web_service_id, command)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.delete(
    "/{web_service_id}", status_code=status.HTTP_200_OK, response_model=DeleteWebServiceResponse
)
async def delete_web_service(web_service_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Delete a connection profile

    Raises:
        - 404 Not Found: Web service not found
        - 409 Conflict: Profile still referenced by audit records
    """
    use_case = DeleteWebServiceUseCase(uow)
    result = await use_case.execute(web_service_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value
