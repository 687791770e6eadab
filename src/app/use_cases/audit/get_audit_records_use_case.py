"""
Get Audit Records Use Case

Retrieves password reset ledger entries with pagination.
"""

from typing import Any, Dict, Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditRecord

MAX_LIMIT = 200


def serialize_record(record: AuditRecord) -> Dict[str, Any]:
    # The token text itself is never exposed
    return {
        "id": str(record.id),
        "remote_user_id": record.remote_user_id,
        "username": record.username,
        "email": record.email,
        "web_service_id": str(record.web_service_id) if record.web_service_id else None,
        "has_token": record.token_user is not None,
        "token_consumed": record.token_consumed,
        "notification_sent": record.notification_sent,
        "token_expires_at": (
            record.token_expires_at.isoformat() + "Z" if record.token_expires_at else None
        ),
        "status": record.status.value,
        "description": record.description,
        "created_at": record.created_at.isoformat() + "Z",
        "updated_at": record.updated_at.isoformat() + "Z",
    }


class GetAuditRecordsUseCase:
    """
    Use case for listing audit records.

    Business Rules:
    - Results ordered by newest first
    - Supports cursor-based pagination
    - limit is clamped to 1..200
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, limit: int = 50, cursor: Optional[str] = None
    ) -> Result[Dict[str, Any]]:
        limit = max(1, min(limit, MAX_LIMIT))

        async with self.uow:
            records, next_cursor = await self.uow.audit_records.get_paginated(
                limit=limit, cursor=cursor
            )

            return Return.ok(
                {
                    "records": [serialize_record(record) for record in records],
                    "next_cursor": next_cursor,
                }
            )
