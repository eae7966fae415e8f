import pytest
from httpx import AsyncClient
from sqlalchemy import select

from pairchat.infrastructure import models

TEST_PASSWORD = "testpassword"

pytestmark = pytest.mark.asyncio


async def test_health(client: AsyncClient):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_register_user(client: AsyncClient, security_service):
    response = await client.post(
        "/api/v1/register", json={"username": "newuser", "password": "newpassword"}
    )
    assert response.status_code == 201
    body = response.json()
    assert body["error"] is None
    assert security_service.decode_access_token(body["accessToken"]) is not None


async def test_register_duplicate_username(client: AsyncClient):
    credentials = {"username": "twice", "password": "newpassword"}
    first = await client.post("/api/v1/register", json=credentials)
    second = await client.post("/api/v1/register", json=credentials)

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json() == {"error": "Username already in use"}


async def test_register_missing_fields(client: AsyncClient):
    response = await client.post("/api/v1/register", json={"password": "newpassword"})
    assert response.status_code == 400
    assert response.json() == {"error": "Username is a required field"}

    response = await client.post("/api/v1/register", json={"username": "someone"})
    assert response.status_code == 400
    assert response.json() == {"error": "Password is a required field"}


async def test_register_malformed_body(client: AsyncClient):
    response = await client.post(
        "/api/v1/register",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid argument for request."}


async def test_login_user(client: AsyncClient, test_user, database):
    response = await client.post(
        "/api/v1/login",
        json={"username": test_user.username, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    assert response.json()["accessToken"]

    async with database.session() as session:
        activities = (await session.scalars(select(models.Activity))).all()
    assert [(a.owner, a.type) for a in activities] == [
        (test_user.id, "USER_LOGGED_IN")
    ]


async def test_login_wrong_password(client: AsyncClient, test_user, database):
    response = await client.post(
        "/api/v1/login",
        json={"username": test_user.username, "password": "wrongpassword"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid password"}

    async with database.session() as session:
        activities = (await session.scalars(select(models.Activity))).all()
    assert activities == []


async def test_login_unknown_user(client: AsyncClient):
    response = await client.post(
        "/api/v1/login", json={"username": "nobody", "password": "whatever"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid username"}


async def test_dashboard_requires_token(client: AsyncClient):
    response = await client.get("/api/v1/dashboard/getChats")
    assert response.status_code == 401
    assert response.json() == {"error": "You must be logged in to access this."}

    response = await client.get(
        "/api/v1/dashboard/getChats", headers={"Authorization": "Bearer garbage"}
    )
    assert response.status_code == 401
