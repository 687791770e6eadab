"""
Integration tests for web service URL listing, admin user lookup and health
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import WebService


@pytest_asyncio.fixture
async def inactive_web_service(db_session: AsyncSession, test_data):
    web_service = test_data.model("inactive_web_service", WebService)
    db_session.add(web_service)
    await db_session.commit()
    return web_service


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_list_urls_only_active(client: AsyncClient, web_service, inactive_web_service):
    response = await client.get("/api/moodle/urls")

    assert response.status_code == 200
    assert response.json() == {
        "urls": [{"url": "moodle.example.edu"}],
        "total": 1,
        "base": "simple",
    }

    response = await client.get("/api/moodle/urls", params={"base": "full"})
    assert response.json()["urls"] == [{"url": "https://moodle.example.edu"}]


@pytest.mark.asyncio
async def test_list_urls_invalid_base(client: AsyncClient):
    response = await client.get("/api/moodle/urls", params={"base": "everything"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_BASE"


@pytest.mark.asyncio
async def test_find_user_as_admin(client: AsyncClient, web_service, admin_headers):
    response = await client.post(
        "/api/moodle/find-user",
        json={"moodle_url": "https://moodle.example.edu", "email": "ana.silva@example.edu"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == 11085
    assert data["user"]["fullname"] == "Ana Silva"
    assert data["web_service"] == {"service_name": "Example Moodle", "url": "moodle.example.edu"}


@pytest.mark.asyncio
async def test_find_user_not_found_as_admin(client: AsyncClient, web_service, admin_headers):
    response = await client.post(
        "/api/moodle/find-user",
        json={"moodle_url": "moodle.example.edu", "username": "ghost"},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_find_user_requires_admin_key(client: AsyncClient, web_service):
    response = await client.post(
        "/api/moodle/find-user",
        json={"moodle_url": "moodle.example.edu", "username": "asilva"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_find_user_inactive_host(
    client: AsyncClient, inactive_web_service, admin_headers
):
    response = await client.post(
        "/api/moodle/find-user",
        json={"moodle_url": "old-moodle.example.edu", "username": "asilva"},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "WEB_SERVICE_NOT_FOUND"
