"""
Unit tests for RequestPasswordResetUseCase

Tests all business logic with mocked unit of work and fake collaborators.
"""
from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from libs.result import Error
from src.api.utils.jwt import decode_reset_token
from src.app.services.remote_identity_client import REMOTE_COMMUNICATION_ERROR
from src.app.use_cases.password_reset import RequestContext, RequestPasswordResetUseCase
from src.domain.base import utcnow
from src.domain.entities import AuditStatus
from tests.fixtures.fakes import FakeNotifier, FakeRemoteClient

GENERIC_MESSAGE = "If the user exists, a password reset email will be sent"


def created_records(mock_uow):
    return [call.args[0] for call in mock_uow.audit_records.create.call_args_list]


@pytest.mark.asyncio
async def test_successful_password_reset_request(
    mock_uow, web_service, default_template, remote_client, notifier, settings
):
    """Found user gets a token, a pending record that ends in success, and an email"""
    mock_uow.web_services.get_active_by_host.return_value = web_service
    mock_uow.email_templates.get_default.return_value = default_template

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)

    result = await use_case.execute(
        host="https://moodle.example.edu",
        email="ana.silva@example.edu",
        request_context=RequestContext(ip="10.0.0.1", user_agent="pytest"),
    )

    assert result.is_ok()
    data = result.value
    assert data.status == "sent"
    assert data.message == GENERIC_MESSAGE
    assert data.user.id == 11085
    assert data.user.fullname == "Ana Silva"
    assert data.expires_in == "5 minutes"

    # Scheme is stripped before the profile lookup
    mock_uow.web_services.get_active_by_host.assert_called_once_with("moodle.example.edu")

    records = created_records(mock_uow)
    assert len(records) == 1
    record = records[0]
    assert record.token_user is not None
    assert record.remote_user_id == 11085
    assert record.web_service_id == web_service.id
    assert record.token_consumed is False
    assert record.status == AuditStatus.success
    assert record.notification_sent is True
    assert data.audit_id == str(record.id)

    expires_in = record.token_expires_at - utcnow()
    assert timedelta(minutes=4) < expires_in <= timedelta(minutes=5)

    claims = decode_reset_token(record.token_user)
    assert claims.is_ok()
    assert claims.value.remote_user_id == 11085
    assert claims.value.connection_host == "moodle.example.edu"

    assert len(notifier.sent) == 1
    email = notifier.sent[0]
    assert email["to"] == "ana.silva@example.edu"
    assert email["subject"] == "OxyPass password reset"
    assert "Hello Ana Silva" in email["body"]
    assert f"token={record.token_user}" in email["body"]
    assert (
        f"link=https://reset.example.edu/reset-password?token={record.token_user}" in email["body"]
    )
    assert "expires in 5 minutes" in email["body"]


@pytest.mark.asyncio
async def test_password_reset_by_username(
    mock_uow, web_service, default_template, remote_client, notifier, settings
):
    mock_uow.web_services.get_active_by_host.return_value = web_service
    mock_uow.email_templates.get_default.return_value = default_template

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host="moodle.example.edu", username="asilva")

    assert result.is_ok()
    assert remote_client.find_calls[0][1].value == "username"
    assert remote_client.find_calls[0][2] == "asilva"
    assert len(notifier.sent) == 1


@pytest.mark.asyncio
async def test_password_reset_unknown_user_is_masked(
    mock_uow, web_service, default_template, remote_client, notifier, settings
):
    """Unknown user: error record without token, caller sees the generic success"""
    mock_uow.web_services.get_active_by_host.return_value = web_service
    mock_uow.email_templates.get_default.return_value = default_template

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host="moodle.example.edu", email="nobody@example.edu")

    assert result.is_ok()
    assert result.value.status == "sent"
    assert result.value.message == GENERIC_MESSAGE
    assert result.value.user is None
    assert result.value.audit_id is None

    records = created_records(mock_uow)
    assert len(records) == 1
    assert records[0].status == AuditStatus.error
    assert records[0].token_user is None
    assert records[0].email == "nobody@example.edu"
    assert "USER_NOT_FOUND" in records[0].description

    assert notifier.sent == []
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,username",
    [
        ("ghost@example.edu", None),
        ("a.b@c.io", None),
        ("UPPER@EXAMPLE.EDU", None),
        (None, "ghost"),
        (None, "x1"),
        (None, "very-long-username-that-does-not-exist-anywhere"),
    ],
)
async def test_password_reset_not_found_always_reports_success(
    mock_uow, web_service, remote_client, notifier, settings, email, username
):
    mock_uow.web_services.get_active_by_host.return_value = web_service

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host="moodle.example.edu", email=email, username=username)

    assert result.is_ok()
    assert result.value.status == "sent"
    assert result.value.message == GENERIC_MESSAGE


@pytest.mark.asyncio
async def test_password_reset_unknown_host_is_masked(mock_uow, remote_client, notifier, settings):
    mock_uow.web_services.get_active_by_host.return_value = None

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host="unknown.example.edu", email="ana.silva@example.edu")

    assert result.is_ok()
    assert result.value.message == GENERIC_MESSAGE
    assert remote_client.find_calls == []

    records = created_records(mock_uow)
    assert len(records) == 1
    assert records[0].web_service_id is None
    assert "WEB_SERVICE_NOT_FOUND" in records[0].description


@pytest.mark.asyncio
async def test_password_reset_remote_unreachable_is_masked(
    mock_uow, web_service, notifier, settings
):
    mock_uow.web_services.get_active_by_host.return_value = web_service
    remote_client = FakeRemoteClient(
        find_error=Error(REMOTE_COMMUNICATION_ERROR, "Remote system timed out")
    )

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host="moodle.example.edu", email="ana.silva@example.edu")

    assert result.is_ok()
    assert result.value.message == GENERIC_MESSAGE
    assert "REMOTE_COMMUNICATION_ERROR" in created_records(mock_uow)[0].description


@pytest.mark.asyncio
async def test_password_reset_suspended_user_is_reported(
    mock_uow, web_service, default_template, remote_client, notifier, settings
):
    """Suspension is not masked"""
    mock_uow.web_services.get_active_by_host.return_value = web_service
    mock_uow.email_templates.get_default.return_value = default_template

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host="moodle.example.edu", email="bruno.souza@example.edu")

    assert result.is_err()
    assert result.error.code == "USER_SUSPENDED"

    records = created_records(mock_uow)
    assert len(records) == 1
    assert records[0].status == AuditStatus.error
    assert records[0].description == "suspended"
    assert records[0].token_user is None
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_password_reset_without_template(
    mock_uow, web_service, remote_client, notifier, settings
):
    mock_uow.web_services.get_active_by_host.return_value = web_service
    mock_uow.email_templates.get_default.return_value = None

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host="moodle.example.edu", email="ana.silva@example.edu")

    assert result.is_err()
    assert result.error.code == "TEMPLATE_NOT_CONFIGURED"

    record = created_records(mock_uow)[0]
    assert record.token_user is not None
    assert record.status == AuditStatus.error
    assert record.description == "template not configured"
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_password_reset_send_failure_is_reported(
    mock_uow, web_service, default_template, remote_client, settings
):
    mock_uow.web_services.get_active_by_host.return_value = web_service
    mock_uow.email_templates.get_default.return_value = default_template
    notifier = FakeNotifier(fail=True)

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host="moodle.example.edu", email="ana.silva@example.edu")

    assert result.is_err()
    assert result.error.code == "NOTIFICATION_FAILED"

    record = created_records(mock_uow)[0]
    assert record.token_user is not None
    assert record.status == AuditStatus.error
    assert record.notification_sent is False
    mock_uow.audit_records.update.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "host,email,username,code",
    [
        ("", "ana.silva@example.edu", None, "INVALID_HOST"),
        ("https://", "ana.silva@example.edu", None, "INVALID_HOST"),
        ("moodle.example.edu", "ana.silva@example.edu", "asilva", "INVALID_IDENTIFIER"),
        ("moodle.example.edu", None, None, "INVALID_IDENTIFIER"),
        ("moodle.example.edu", "not-an-email", None, "INVALID_IDENTIFIER"),
        ("moodle.example.edu", None, "a", "INVALID_IDENTIFIER"),
    ],
)
async def test_password_reset_input_errors_have_no_side_effects(
    mock_uow, remote_client, notifier, settings, host, email, username, code
):
    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host=host, email=email, username=username)

    assert result.is_err()
    assert result.error.code == code
    mock_uow.web_services.get_active_by_host.assert_not_called()
    mock_uow.audit_records.create.assert_not_called()
    assert remote_client.find_calls == []


@pytest.mark.asyncio
async def test_password_reset_ledger_failure(
    mock_uow, web_service, remote_client, notifier, settings
):
    mock_uow.web_services.get_active_by_host.return_value = web_service
    mock_uow.audit_records.create.side_effect = OperationalError("INSERT", {}, Exception("disk full"))

    use_case = RequestPasswordResetUseCase(mock_uow, remote_client, notifier, settings=settings)
    result = await use_case.execute(host="moodle.example.edu", email="ana.silva@example.edu")

    assert result.is_err()
    assert result.error.code == "PERSISTENCE_ERROR"
    assert notifier.sent == []
