from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.notification_sender import NOTIFICATION_FAILED, INotificationSender
from src.app.services.remote_identity_client import (
    IRemoteIdentityClient,
    REMOTE_COMMUNICATION_ERROR,
    REMOTE_ERROR,
    REMOTE_UPDATE_REJECTED,
    USER_NOT_FOUND,
)
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset import (
    ChangePasswordResponse,
    ChangePasswordUseCase,
    RequestContext,
    RequestPasswordResetUseCase,
    ResetSettings,
    ValidateResetTokenUseCase,
)
from src.app.use_cases.password_reset.errors import (
    INVALID_HOST,
    INVALID_IDENTIFIER,
    INVALID_PASSWORD,
    INVALID_TOKEN,
    INVALID_TOKEN_TYPE,
    TEMPLATE_NOT_CONFIGURED,
    TOKEN_ALREADY_USED,
    TOKEN_EXPIRED,
    TOKEN_NOT_FOUND,
    TOKEN_REQUIRED,
    USER_SUSPENDED,
    WEB_SERVICE_NOT_FOUND,
)
from src.app.use_cases.web_services import (
    FindRemoteUserResponse,
    FindRemoteUserUseCase,
    ListWebServiceUrlsUseCase,
    WebServiceUrlsResponse,
)
from src.depends import (
    get_notification_sender,
    get_remote_identity_client,
    get_reset_settings,
    get_unit_of_work,
)
from src.domain.base import utcnow

router = APIRouter(prefix="/moodle", tags=["Moodle"])

TOKEN_CLIENT_ERRORS = (
    TOKEN_REQUIRED,
    TOKEN_NOT_FOUND,
    TOKEN_ALREADY_USED,
    INVALID_TOKEN,
    INVALID_TOKEN_TYPE,
)
REMOTE_FAILURES = (REMOTE_COMMUNICATION_ERROR, REMOTE_ERROR, REMOTE_UPDATE_REJECTED)


class LookupRequest(BaseModel):
    """Exactly one of email or username identifies the remote user"""

    moodle_url: str = Field(..., description="Moodle host, with or without scheme")
    email: Optional[str] = Field(None, description="User email (use email OR username)")
    username: Optional[str] = Field(None, description="Username (use email OR username)")


class ResetPasswordResponse(BaseModel):
    """Public body: identical whether or not the user exists"""

    status: str
    message: str
    timestamp: str


class ValidateResetTokenRequest(BaseModel):
    token: Optional[str] = Field(None, description="Reset token received by email")


class ValidateResetTokenResponse(BaseModel):
    status: str
    message: str
    username: Optional[str]
    email: Optional[str]
    moodle_url: str
    token_valid: bool


class ChangePasswordRequest(BaseModel):
    token: Optional[str] = Field(None, description="Reset token received by email")
    new_password: str = Field(..., description="New password")


def _request_context(request: Request) -> RequestContext:
    return RequestContext(
        ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


@router.get("/urls", status_code=status.HTTP_200_OK, response_model=WebServiceUrlsResponse)
async def list_urls(
    base: str = Query("simple", description='"simple" (host only) or "full" (with scheme)'),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List active web service URLs (public)
    """
    use_case = ListWebServiceUrlsUseCase(uow)
    result = await use_case.execute(base=base)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_BASE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.post(
    "/find-user",
    status_code=status.HTTP_200_OK,
    response_model=FindRemoteUserResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def find_user(
    request: LookupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    remote_client: IRemoteIdentityClient = Depends(get_remote_identity_client),
):
    """
    Find a remote Moodle user (admin)

    Raises:
        - 400 Bad Request: Invalid host or identifier
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: Web service or user not found
        - 502 Bad Gateway: Remote Moodle failure
    """
    use_case = FindRemoteUserUseCase(uow, remote_client)
    result = await use_case.execute(
        host=request.moodle_url, email=request.email, username=request.username
    )

    if result.is_err():
        error = result.error
        if error.code in (INVALID_HOST, INVALID_IDENTIFIER):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code in (WEB_SERVICE_NOT_FOUND, USER_NOT_FOUND):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code in REMOTE_FAILURES:
            raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
        raise ServerError(error)

    return result.value


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse
)
async def reset_password(
    body: LookupRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    remote_client: IRemoteIdentityClient = Depends(get_remote_identity_client),
    notifier: INotificationSender = Depends(get_notification_sender),
    settings: ResetSettings = Depends(get_reset_settings),
):
    """
    Request a password reset (public)

    Always answers with the same body when the user cannot be resolved, so the
    response does not reveal whether an account exists.

    Raises:
        - 400 Bad Request: Both or neither identifier, bad email, missing host
        - 403 Forbidden: Remote account suspended
        - 502 Bad Gateway: Notification could not be sent
        - 503 Service Unavailable: No default email template configured
        - 500 Internal Server Error: Server error
    """
    use_case = RequestPasswordResetUseCase(uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(
        host=body.moodle_url,
        email=body.email,
        username=body.username,
        request_context=_request_context(request),
    )

    if result.is_err():
        error = result.error
        if error.code in (INVALID_HOST, INVALID_IDENTIFIER):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == USER_SUSPENDED:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        if error.code == NOTIFICATION_FAILED:
            raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
        if error.code == TEMPLATE_NOT_CONFIGURED:
            raise ClientError(error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
        raise ServerError(error)

    return ResetPasswordResponse(
        status=result.value.status,
        message=result.value.message,
        timestamp=utcnow().isoformat() + "Z",
    )


@router.post(
    "/validate-reset-token",
    status_code=status.HTTP_200_OK,
    response_model=ValidateResetTokenResponse,
)
async def validate_reset_token(
    request: ValidateResetTokenRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Validate a reset token without consuming it

    Raises:
        - 400 Bad Request: Token missing, unknown, already used or invalid
        - 410 Gone: Token expired
        - 500 Internal Server Error: Server error
    """
    use_case = ValidateResetTokenUseCase(uow)
    result = await use_case.execute(request.token)

    if result.is_err():
        error = result.error
        if error.code in TOKEN_CLIENT_ERRORS:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == TOKEN_EXPIRED:
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    claims = result.value
    return ValidateResetTokenResponse(
        status="valid",
        message="Valid token",
        username=claims.username,
        email=claims.email,
        moodle_url=claims.connection_host,
        token_valid=True,
    )


@router.post(
    "/change-password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    remote_client: IRemoteIdentityClient = Depends(get_remote_identity_client),
    settings: ResetSettings = Depends(get_reset_settings),
):
    """
    Change the remote password with a reset token

    Raises:
        - 400 Bad Request: Password policy or token failure
        - 404 Not Found: Token host has no active web service
        - 410 Gone: Token expired
        - 502 Bad Gateway: Remote Moodle failure
        - 500 Internal Server Error: Server error
    """
    use_case = ChangePasswordUseCase(uow, remote_client, settings=settings)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code == INVALID_PASSWORD or error.code in TOKEN_CLIENT_ERRORS:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == TOKEN_EXPIRED:
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        if error.code == WEB_SERVICE_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code in REMOTE_FAILURES or error.code == USER_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
        raise ServerError(error)

    return result.value
