import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_record_repository import IAuditRecordRepository
from src.domain.base import utcnow
from src.domain.entities import AuditRecord, AuditStatus


class AuditRecordRepository(IAuditRecordRepository):
    """AuditRecord repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, record: AuditRecord) -> AuditRecord:
        """Create a new audit record"""
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def get_by_id(self, record_id: UUID) -> Optional[AuditRecord]:
        """Get audit record by ID"""
        stmt = select(AuditRecord).where(AuditRecord.id == record_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(self, token: str) -> Optional[AuditRecord]:
        """Get audit record by the literal issued token text"""
        stmt = select(AuditRecord).where(AuditRecord.token_user == token)
        result = await self.session.exec(stmt)
        return result.first()

    async def update(self, record: AuditRecord) -> AuditRecord:
        """Update existing audit record"""
        record.updated_at = utcnow()
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def mark_token_consumed(
        self, record_id: UUID, status: AuditStatus, description: str
    ) -> bool:
        """
        Conditional update: UPDATE ... WHERE token_consumed = false.

        Two concurrent callers can both read token_consumed=False, but only
        one of them matches the WHERE clause here.
        """
        stmt = (
            update(AuditRecord)
            .where(
                AuditRecord.id == record_id,
                AuditRecord.token_consumed == False,  # noqa: E712
            )
            .values(
                token_consumed=True,
                status=status,
                description=description,
                updated_at=utcnow(),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def get_paginated(
        self, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditRecord], Optional[str]]:
        """
        Get audit records with cursor-based pagination.

        Cursor format: base64-encoded "<created_at ISO>|<id>" of the last
        record returned. Ordering is (created_at, id) descending, so rows that
        share a timestamp are split across pages without loss.
        """
        stmt = select(AuditRecord)

        if cursor:
            try:
                timestamp_str, id_str = base64.b64decode(cursor).decode("utf-8").split("|", 1)
                cursor_timestamp = datetime.fromisoformat(timestamp_str)
                cursor_id = UUID(id_str)
                stmt = stmt.where(
                    or_(
                        AuditRecord.created_at < cursor_timestamp,
                        and_(
                            AuditRecord.created_at == cursor_timestamp,
                            AuditRecord.id < cursor_id,
                        ),
                    )
                )
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        # Newest first, one extra row to detect another page
        stmt = stmt.order_by(AuditRecord.created_at.desc(), AuditRecord.id.desc())
        stmt = stmt.limit(limit + 1)

        result = await self.session.exec(stmt)
        records = list(result.all())

        has_more = len(records) > limit
        if has_more:
            records = records[:limit]

        next_cursor = None
        if has_more and records:
            last = records[-1]
            cursor_str = f"{last.created_at.isoformat()}|{last.id}"
            next_cursor = base64.b64encode(cursor_str.encode("utf-8")).decode("utf-8")

        return records, next_cursor
