"""
Unit tests for audit ledger read use cases
"""
from uuid import uuid4

import pytest

from src.app.use_cases.audit import GetAuditRecordsUseCase, GetAuditRecordUseCase
from src.domain.entities import AuditRecord, AuditStatus


@pytest.mark.asyncio
async def test_list_records_hides_token_text(mock_uow):
    record = AuditRecord(
        remote_user_id=11085,
        username="asilva",
        email="ana.silva@example.edu",
        token_user="secret-token-text",
        status=AuditStatus.pending,
    )
    mock_uow.audit_records.get_paginated.return_value = ([record], "next-page")

    result = await GetAuditRecordsUseCase(mock_uow).execute(limit=10)

    assert result.is_ok()
    assert result.value["next_cursor"] == "next-page"
    item = result.value["records"][0]
    assert item["id"] == str(record.id)
    assert item["has_token"] is True
    assert item["status"] == "pending"
    assert "secret-token-text" not in str(result.value)
    mock_uow.audit_records.get_paginated.assert_called_once_with(limit=10, cursor=None)


@pytest.mark.asyncio
async def test_list_records_clamps_limit(mock_uow):
    await GetAuditRecordsUseCase(mock_uow).execute(limit=10_000, cursor="abc")

    mock_uow.audit_records.get_paginated.assert_called_once_with(limit=200, cursor="abc")


@pytest.mark.asyncio
async def test_get_record_not_found(mock_uow):
    result = await GetAuditRecordUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "AUDIT_RECORD_NOT_FOUND"
