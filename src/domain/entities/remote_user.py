"""
Remote identity value objects

Shapes returned by the remote identity system. Not persisted.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class RemoteUser(BaseModel):
    """User record as returned by core_user_get_users_by_field"""

    id: int
    username: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    fullname: Optional[str] = None
    email: Optional[str] = None
    idnumber: Optional[str] = None
    suspended: bool = False
    confirmed: bool = True
    address: Optional[str] = None
    phone1: Optional[str] = None
    phone2: Optional[str] = None
    department: Optional[str] = None
    institution: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class UpdateWarning(BaseModel):
    warningcode: str = ""
    message: str = ""
    item: Optional[str] = None
    itemid: Optional[int] = None


class UpdateOutcome(BaseModel):
    """Result of a successful core_user_update_users call"""

    remote_user_id: int
    updated_fields: List[str] = Field(default_factory=list)
    warnings: List[UpdateWarning] = Field(default_factory=list)


class ResetTokenClaims(BaseModel):
    """Decoded payload of a valid password reset token"""

    remote_user_id: int
    username: Optional[str] = None
    email: Optional[str] = None
    connection_host: str
    issued_at: int
