from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import RemoteUser, WebService, WebServiceProtocol


class WebServiceInfo(BaseModel):
    service_name: str
    url: str


class FindRemoteUserResponse(BaseModel):
    """Response for admin find remote user use case"""

    user: RemoteUser
    web_service: WebServiceInfo


class WebServiceUrl(BaseModel):
    url: str


class WebServiceUrlsResponse(BaseModel):
    """Response for list web service urls use case"""

    urls: List[WebServiceUrl]
    total: int
    base: str


class CreateWebServiceCommand(BaseModel):
    protocol: WebServiceProtocol = WebServiceProtocol.https
    url: str
    token: str
    service_name: str
    route: Optional[str] = None
    moodle_user: Optional[str] = None
    moodle_password: Optional[str] = None
    is_active: bool = True


class UpdateWebServiceCommand(BaseModel):
    """Partial update; only fields explicitly set are applied"""

    protocol: Optional[WebServiceProtocol] = None
    url: Optional[str] = None
    token: Optional[str] = None
    service_name: Optional[str] = None
    route: Optional[str] = None
    moodle_user: Optional[str] = None
    moodle_password: Optional[str] = None
    is_active: Optional[bool] = None


class WebServiceResponse(BaseModel):
    """Connection profile as returned by the admin API; secrets are never included"""

    id: str
    protocol: WebServiceProtocol
    url: str
    route: str
    service_name: str
    moodle_user: Optional[str]
    has_token: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, web_service: WebService) -> "WebServiceResponse":
        return cls(
            id=str(web_service.id),
            protocol=web_service.protocol,
            url=web_service.url,
            route=web_service.route,
            service_name=web_service.service_name,
            moodle_user=web_service.moodle_user,
            has_token=bool(web_service.token),
            is_active=web_service.is_active,
            created_at=web_service.created_at,
            updated_at=web_service.updated_at,
        )


class WebServicesResponse(BaseModel):
    web_services: List[WebServiceResponse]
    total: int


class DeleteWebServiceResponse(BaseModel):
    id: str
    message: str
