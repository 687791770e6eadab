"""
AuditRecord Entity

Durable ledger entry for one password reset attempt.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from src.domain.base import utcnow

from .enums import AuditStatus


class AuditRecord(SQLModel, table=True):
    """
    AuditRecord entity - one row per password reset attempt.

    Business Rules:
    - Created for every attempt, including failed lookups (token_user is None)
    - A record with token_user set has token_expires_at set and starts pending
    - token_consumed only ever flips False -> True, via a conditional update
    - The record looked up by the literal token text is the authority on
      whether that token may still be used
    - Never deleted by the reset workflow
    """

    __tablename__ = "audit_records"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Moodle user id, not related to any local table
    remote_user_id: Optional[int] = Field(default=None)
    username: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)

    web_service_id: Optional[UUID] = Field(default=None, foreign_key="webservices.id")

    token_user: Optional[str] = Field(default=None, sa_column=Column(Text))
    token_consumed: bool = Field(default=False)
    notification_sent: bool = Field(default=False)
    token_expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    status: AuditStatus = Field(default=AuditStatus.pending)
    description: Optional[str] = Field(default=None, max_length=255)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_record_created_at", "created_at"),
        Index("idx_audit_record_status", "status"),
    )
