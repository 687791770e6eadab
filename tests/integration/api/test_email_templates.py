"""
Integration tests for email template endpoints
"""
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import EmailTemplate


async def create_template(client: AsyncClient, headers, **overrides):
    payload = {
        "name": "Reset",
        "subject": "Reset your password",
        "content": "<p>Hello {{user.firstname}}, {{reset.link}}</p>",
        **overrides,
    }
    return await client.post("/api/templates", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_list_template_variables(client: AsyncClient, admin_headers):
    response = await client.get("/api/templates/variables", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    keys = {v["key"] for v in data["variables"]}
    assert {"user.fullname", "reset.link", "reset.token", "system.name", "webservice.url"} <= keys
    assert data["total"] == len(data["variables"])


@pytest.mark.asyncio
async def test_template_variables_require_admin_key(client: AsyncClient):
    response = await client.get("/api/templates/variables")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_template_requires_admin_key(client: AsyncClient):
    response = await create_template(client, {})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_template(client: AsyncClient, admin_headers):
    response = await create_template(
        client, admin_headers, name="  Welcome back  ", subject=" Reset "
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Welcome back"
    assert data["subject"] == "Reset"
    assert data["type"] == "html"
    assert data["is_default"] is False


@pytest.mark.asyncio
async def test_set_default_clears_previous_default(
    client: AsyncClient, db_session: AsyncSession, admin_headers
):
    first = (await create_template(client, admin_headers, name="First", is_default=True)).json()
    second = (await create_template(client, admin_headers, name="Second")).json()
    assert first["is_default"] is True

    response = await client.post(
        f"/api/templates/{second['id']}/set-default", headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["is_default"] is True

    db_session.expire_all()
    result = await db_session.exec(
        select(EmailTemplate).where(EmailTemplate.is_default == True)  # noqa: E712
    )
    defaults = list(result.all())
    assert [t.name for t in defaults] == ["Second"]


@pytest.mark.asyncio
async def test_creating_default_template_replaces_default(
    client: AsyncClient, db_session: AsyncSession, admin_headers
):
    await create_template(client, admin_headers, name="Old", is_default=True)
    await create_template(client, admin_headers, name="New", is_default=True)

    db_session.expire_all()
    result = await db_session.exec(
        select(EmailTemplate).where(EmailTemplate.is_default == True)  # noqa: E712
    )
    assert [t.name for t in result.all()] == ["New"]


@pytest.mark.asyncio
async def test_set_default_unknown_template(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/templates/00000000-0000-0000-0000-000000000000/set-default",
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TEMPLATE_NOT_FOUND"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "n" * 101},
        {"subject": "s" * 201},
        {"description": "d" * 501},
    ],
)
async def test_create_template_rejects_values_longer_than_columns(
    client: AsyncClient, admin_headers, overrides
):
    response = await create_template(client, admin_headers, **overrides)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_template_accepts_values_at_column_limits(client: AsyncClient, admin_headers):
    response = await create_template(
        client, admin_headers, name="n" * 100, subject="s" * 200, description="d" * 500
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_list_get_update_delete_template(
    client: AsyncClient, db_session: AsyncSession, admin_headers
):
    first = (await create_template(client, admin_headers, name="First", is_default=True)).json()
    second = (await create_template(client, admin_headers, name="Second")).json()

    response = await client.get("/api/templates", headers=admin_headers)
    assert response.status_code == 200
    listing = response.json()
    assert listing["total"] == 2
    assert {t["name"] for t in listing["templates"]} == {"First", "Second"}

    response = await client.get(f"/api/templates/{second['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Second"

    response = await client.put(
        f"/api/templates/{second['id']}",
        json={"subject": "  Updated subject ", "is_default": True},
        headers=admin_headers,
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["subject"] == "Updated subject"
    assert updated["is_default"] is True
    assert updated["content"] == second["content"]

    db_session.expire_all()
    result = await db_session.exec(
        select(EmailTemplate).where(EmailTemplate.is_default == True)  # noqa: E712
    )
    assert [t.name for t in result.all()] == ["Second"]

    response = await client.delete(f"/api/templates/{first['id']}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get(f"/api/templates/{first['id']}", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_template_rejects_blank_name(client: AsyncClient, admin_headers):
    created = (await create_template(client, admin_headers)).json()

    response = await client.put(
        f"/api/templates/{created['id']}", json={"name": "   "}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TEMPLATE"


@pytest.mark.asyncio
async def test_template_crud_requires_admin_key(client: AsyncClient):
    response = await client.get("/api/templates")
    assert response.status_code == 401

    response = await client.delete(f"/api/templates/{uuid4()}")
    assert response.status_code == 401
