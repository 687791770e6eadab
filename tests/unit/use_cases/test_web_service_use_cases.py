"""
Unit tests for FindRemoteUserUseCase and ListWebServiceUrlsUseCase
"""
import pytest

from libs.result import Error
from src.app.services.remote_identity_client import REMOTE_ERROR
from src.app.use_cases.web_services import FindRemoteUserUseCase, ListWebServiceUrlsUseCase
from src.domain.entities import WebService, WebServiceProtocol
from tests.fixtures.fakes import FakeRemoteClient


@pytest.mark.asyncio
async def test_find_user_returns_profile(mock_uow, web_service, remote_client):
    mock_uow.web_services.get_active_by_host.return_value = web_service

    result = await FindRemoteUserUseCase(mock_uow, remote_client).execute(
        host="http://moodle.example.edu", username="asilva"
    )

    assert result.is_ok()
    assert result.value.user.id == 11085
    assert result.value.user.email == "ana.silva@example.edu"
    assert result.value.web_service.service_name == "Example Moodle"
    assert result.value.web_service.url == "moodle.example.edu"


@pytest.mark.asyncio
async def test_find_user_not_found_is_not_masked(mock_uow, web_service, remote_client):
    mock_uow.web_services.get_active_by_host.return_value = web_service

    result = await FindRemoteUserUseCase(mock_uow, remote_client).execute(
        host="moodle.example.edu", email="nobody@example.edu"
    )

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
    mock_uow.audit_records.create.assert_not_called()


@pytest.mark.asyncio
async def test_find_user_unknown_host(mock_uow, remote_client):
    result = await FindRemoteUserUseCase(mock_uow, remote_client).execute(
        host="unknown.example.edu", email="ana.silva@example.edu"
    )

    assert result.is_err()
    assert result.error.code == "WEB_SERVICE_NOT_FOUND"
    assert remote_client.find_calls == []


@pytest.mark.asyncio
async def test_find_user_remote_error(mock_uow, web_service):
    mock_uow.web_services.get_active_by_host.return_value = web_service
    remote_client = FakeRemoteClient(find_error=Error(REMOTE_ERROR, "Remote error: invalidtoken"))

    result = await FindRemoteUserUseCase(mock_uow, remote_client).execute(
        host="moodle.example.edu", email="ana.silva@example.edu"
    )

    assert result.is_err()
    assert result.error.code == REMOTE_ERROR


@pytest.mark.asyncio
async def test_find_user_rejects_both_identifiers(mock_uow, remote_client):
    result = await FindRemoteUserUseCase(mock_uow, remote_client).execute(
        host="moodle.example.edu", email="ana.silva@example.edu", username="asilva"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_IDENTIFIER"


@pytest.mark.asyncio
async def test_list_urls_simple_and_full(mock_uow, web_service):
    plain = WebService(
        protocol=WebServiceProtocol.http,
        url="intranet.example.edu",
        service_name="Intranet",
    )
    mock_uow.web_services.list_active.return_value = [web_service, plain]

    simple = await ListWebServiceUrlsUseCase(mock_uow).execute("simple")
    full = await ListWebServiceUrlsUseCase(mock_uow).execute("full")

    assert simple.is_ok()
    assert [u.url for u in simple.value.urls] == ["moodle.example.edu", "intranet.example.edu"]
    assert simple.value.total == 2
    assert simple.value.base == "simple"

    assert full.is_ok()
    assert [u.url for u in full.value.urls] == [
        "https://moodle.example.edu",
        "http://intranet.example.edu",
    ]


@pytest.mark.asyncio
async def test_list_urls_rejects_unknown_base(mock_uow):
    result = await ListWebServiceUrlsUseCase(mock_uow).execute("everything")

    assert result.is_err()
    assert result.error.code == "INVALID_BASE"
    mock_uow.web_services.list_active.assert_not_called()
