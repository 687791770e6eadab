"""
Web Service Use Cases

Administration of remote Moodle connection profiles, plus lookups against
them.
"""

from .create_web_service_use_case import CreateWebServiceUseCase
from .delete_web_service_use_case import DeleteWebServiceUseCase
from .find_remote_user_use_case import FindRemoteUserUseCase
from .get_web_service_use_case import GetWebServiceUseCase
from .list_web_service_urls_use_case import ListWebServiceUrlsUseCase
from .list_web_services_use_case import ListWebServicesUseCase
from .update_web_service_use_case import UpdateWebServiceUseCase
from .dtos import (
    CreateWebServiceCommand,
    DeleteWebServiceResponse,
    FindRemoteUserResponse,
    UpdateWebServiceCommand,
    WebServiceInfo,
    WebServiceResponse,
    WebServicesResponse,
    WebServiceUrl,
    WebServiceUrlsResponse,
)

__all__ = [
    "CreateWebServiceUseCase",
    "DeleteWebServiceUseCase",
    "FindRemoteUserUseCase",
    "GetWebServiceUseCase",
    "ListWebServiceUrlsUseCase",
    "ListWebServicesUseCase",
    "UpdateWebServiceUseCase",
    "CreateWebServiceCommand",
    "DeleteWebServiceResponse",
    "FindRemoteUserResponse",
    "UpdateWebServiceCommand",
    "WebServiceInfo",
    "WebServiceResponse",
    "WebServicesResponse",
    "WebServiceUrl",
    "WebServiceUrlsResponse",
]
