"""
Audit Use Cases

Read access to the password reset ledger.
"""

from .get_audit_records_use_case import GetAuditRecordsUseCase
from .get_audit_record_use_case import GetAuditRecordUseCase

__all__ = [
    "GetAuditRecordsUseCase",
    "GetAuditRecordUseCase",
]
