import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fixtures.fakes import FakeNotifier, FakeRemoteClient
from tests.fixtures.json_loader import TestDataLoader
from src.app.use_cases.password_reset import ResetSettings
from src.domain.entities import EmailTemplate, RemoteUser, WebService


def _returns_argument(value):
    return value


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.web_services = MagicMock()
    uow.web_services.get_active_by_host = AsyncMock(return_value=None)
    uow.web_services.list_active = AsyncMock(return_value=[])
    uow.web_services.list_all = AsyncMock(return_value=[])
    uow.web_services.get_by_id = AsyncMock(return_value=None)
    uow.web_services.create = AsyncMock(side_effect=_returns_argument)
    uow.web_services.update = AsyncMock(side_effect=_returns_argument)
    uow.web_services.delete = AsyncMock()

    uow.audit_records = MagicMock()
    uow.audit_records.create = AsyncMock(side_effect=_returns_argument)
    uow.audit_records.update = AsyncMock(side_effect=_returns_argument)
    uow.audit_records.get_by_id = AsyncMock(return_value=None)
    uow.audit_records.get_by_token = AsyncMock(return_value=None)
    uow.audit_records.mark_token_consumed = AsyncMock(return_value=True)
    uow.audit_records.get_paginated = AsyncMock(return_value=([], None))

    uow.email_templates = MagicMock()
    uow.email_templates.get_default = AsyncMock(return_value=None)
    uow.email_templates.get_by_id = AsyncMock(return_value=None)
    uow.email_templates.create = AsyncMock(side_effect=_returns_argument)
    uow.email_templates.update = AsyncMock(side_effect=_returns_argument)
    uow.email_templates.clear_defaults = AsyncMock(return_value=0)
    uow.email_templates.list_all = AsyncMock(return_value=[])
    uow.email_templates.delete = AsyncMock()
    return uow


@pytest.fixture
def web_service():
    return TestDataLoader.model("web_service", WebService)


@pytest.fixture
def remote_user():
    return TestDataLoader.model("remote_user", RemoteUser)


@pytest.fixture
def suspended_user():
    return TestDataLoader.model("suspended_user", RemoteUser)


@pytest.fixture
def default_template():
    return TestDataLoader.model("default_template", EmailTemplate)


@pytest.fixture
def remote_client(remote_user, suspended_user):
    return FakeRemoteClient(users=[remote_user, suspended_user])


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def settings():
    return ResetSettings(
        token_expires_in="5m",
        frontend_url="https://reset.example.edu,https://other.example.edu",
        reset_password_path="reset-password?token",
        system_name="OxyPass",
    )


@pytest.fixture
def moodle_user_response():
    return TestDataLoader.get_copy("moodle_user_response")
