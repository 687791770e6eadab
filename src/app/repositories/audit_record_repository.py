from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import AuditRecord, AuditStatus


class IAuditRecordRepository(ABC):
    """AuditRecord repository interface - application layer"""

    @abstractmethod
    async def create(self, record: AuditRecord) -> AuditRecord:
        """Create a new audit record"""
        pass

    @abstractmethod
    async def get_by_id(self, record_id: UUID) -> Optional[AuditRecord]:
        """Get audit record by ID"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[AuditRecord]:
        """Get audit record by the literal issued token text"""
        pass

    @abstractmethod
    async def update(self, record: AuditRecord) -> AuditRecord:
        """Update existing audit record"""
        pass

    @abstractmethod
    async def mark_token_consumed(
        self, record_id: UUID, status: AuditStatus, description: str
    ) -> bool:
        """
        Flip token_consumed to True only if it is still False.

        Returns:
            True if this call performed the flip, False if the token was
            already consumed (or the record does not exist)
        """
        pass

    @abstractmethod
    async def get_paginated(
        self, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditRecord], Optional[str]]:
        """
        Get audit records with cursor-based pagination.

        Returns:
            Tuple of (records list, next_cursor)
            - records: List of audit records ordered by (created_at, id) DESC
            - next_cursor: Cursor for next page, None if no more records
        """
        pass
