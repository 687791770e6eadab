from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .get_audit_records_use_case import serialize_record


class GetAuditRecordUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, record_id: UUID) -> Result[Dict[str, Any]]:
        async with self.uow:
            record = await self.uow.audit_records.get_by_id(record_id)
            if record is None:
                return Return.err(Error("AUDIT_RECORD_NOT_FOUND", "Audit record not found"))

            return Return.ok(serialize_record(record))
