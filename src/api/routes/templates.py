"""
Email Template API Routes
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.template_renderer import available_variables
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.templates import (
    CreateEmailTemplateCommand,
    CreateEmailTemplateUseCase,
    DeleteEmailTemplateResponse,
    DeleteEmailTemplateUseCase,
    EmailTemplateResponse,
    EmailTemplatesResponse,
    GetEmailTemplateUseCase,
    ListEmailTemplatesUseCase,
    SetDefaultTemplateUseCase,
    UpdateEmailTemplateCommand,
    UpdateEmailTemplateUseCase,
)
from src.depends import get_unit_of_work
from src.domain.entities import TemplateType

router = APIRouter(prefix="/templates", tags=["Templates"])

ERROR_STATUS = {
    "INVALID_TEMPLATE": status.HTTP_400_BAD_REQUEST,
    "TEMPLATE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class CreateEmailTemplateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Template name")
    subject: str = Field(..., min_length=1, max_length=200, description="Email subject")
    content: str = Field(..., min_length=1, description="Email body with {{variables}}")
    description: Optional[str] = Field(None, max_length=500)
    type: TemplateType = TemplateType.html
    is_active: bool = True
    is_default: bool = False


class UpdateEmailTemplateRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    subject: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = None
    description: Optional[str] = Field(None, max_length=500)
    type: Optional[TemplateType] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None


def _raise_for(error):
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


class TemplateVariable(BaseModel):
    category: str
    key: str
    description: str
    example: str
    usage: str


class TemplateVariablesResponse(BaseModel):
    variables: List[TemplateVariable]
    total: int


@router.get(
    "/variables",
    status_code=status.HTTP_200_OK,
    response_model=TemplateVariablesResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def list_template_variables():
    """
    List every variable usable in email templates (admin)
    """
    variables = available_variables()
    return {"variables": variables, "total": len(variables)}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=EmailTemplateResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def create_template(
    request: CreateEmailTemplateRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Create an email template (admin)

    When is_default is set, any previous default is cleared in the same
    transaction.

    Raises:
        - 400 Bad Request: Blank name, subject or content
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    command = CreateEmailTemplateCommand(**request.model_dump())

    use_case = CreateEmailTemplateUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.post(
    "/{template_id}/set-default",
    status_code=status.HTTP_200_OK,
    response_model=EmailTemplateResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def set_default_template(template_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Make a template the default used for password reset emails (admin)

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: Template not found
    """
    use_case = SetDefaultTemplateUseCase(uow)
    result = await use_case.execute(template_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=EmailTemplatesResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def list_templates(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    List every email template, newest first (admin)
    """
    use_case = ListEmailTemplatesUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "/{template_id}",
    status_code=status.HTTP_200_OK,
    response_model=EmailTemplateResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def get_template(template_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    use_case = GetEmailTemplateUseCase(uow)
    result = await use_case.execute(template_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.put(
    "/{template_id}",
    status_code=status.HTTP_200_OK,
    response_model=EmailTemplateResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def update_template(
    template_id: UUID,
    request: UpdateEmailTemplateRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update an email template; omitted fields are left unchanged (admin)

    Raises:
        - 400 Bad Request: Update would blank name, subject or content
        - 404 Not Found: Template not found
    """
    command = UpdateEmailTemplateCommand(**request.model_dump(exclude_unset=True))

    use_case = UpdateEmailTemplateUseCase(uow)
    result = await use_case.execute(template_id, command)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.delete(
    "/{template_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteEmailTemplateResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def delete_template(template_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    use_case = DeleteEmailTemplateUseCase(uow)
    result = await use_case.execute(template_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value
