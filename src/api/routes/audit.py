"""
Audit API Routes

Read access to the password reset ledger (admin API key).
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetAuditRecordsUseCase, GetAuditRecordUseCase
from src.depends import get_unit_of_work

router = APIRouter(
    prefix="/audit", tags=["Audit"], dependencies=[Depends(verify_admin_api_key)]
)


class AuditRecordResponse(BaseModel):
    """Single ledger entry; the token text is never returned"""

    id: str
    remote_user_id: Optional[int]
    username: Optional[str]
    email: Optional[str]
    web_service_id: Optional[str]
    has_token: bool
    token_consumed: bool
    notification_sent: bool
    token_expires_at: Optional[str]
    status: str
    description: Optional[str]
    created_at: str
    updated_at: str


class AuditRecordsResponse(BaseModel):
    """GET /audit/records response payload"""

    records: List[AuditRecordResponse]
    next_cursor: Optional[str]


@router.get("/records", status_code=status.HTTP_200_OK, response_model=AuditRecordsResponse)
async def get_audit_records(
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=200, description="Maximum number of records to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    List password reset audit records, newest first

    Query Parameters:
        - limit: Maximum number of records to return (1-200, default 50)
        - cursor: Pagination cursor for fetching next page

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = GetAuditRecordsUseCase(uow)
    result = await use_case.execute(limit=limit, cursor=cursor)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/records/{record_id}", status_code=status.HTTP_200_OK, response_model=AuditRecordResponse
)
async def get_audit_record(record_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    use_case = GetAuditRecordUseCase(uow)
    result = await use_case.execute(record_id)

    if result.is_err():
        error = result.error
        if error.code == "AUDIT_RECORD_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
