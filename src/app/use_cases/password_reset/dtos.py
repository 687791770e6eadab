"""
Password Reset Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the password reset domain.
"""

from typing import Optional

from pydantic import BaseModel


class RequestContext(BaseModel):
    """Caller metadata recorded in logs only"""

    ip: Optional[str] = None
    user_agent: Optional[str] = None


class RemoteUserSummary(BaseModel):
    """Basic identity of the remote user a reset was sent to"""

    id: int
    username: Optional[str] = None
    fullname: Optional[str] = None
    email: Optional[str] = None


class RequestPasswordResetResponse(BaseModel):
    """
    Response for request password reset use case

    status and message are identical for masked and real sends; user,
    expires_in and audit_id are internal and only set on a real send.
    """

    status: str
    message: str
    user: Optional[RemoteUserSummary] = None
    expires_in: Optional[str] = None
    audit_id: Optional[str] = None


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str
    email: Optional[str] = None
    username: Optional[str] = None
    url: str
