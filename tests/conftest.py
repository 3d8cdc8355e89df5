import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="wms-tests-")

# config is read at import time
os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["SQLITE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["BOOTSTRAP_ADMIN_USERNAME"] = "admin"
os.environ["BOOTSTRAP_ADMIN_PASSWORD"] = "12345"

import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.core.db import AsyncSessionLocal, reset_models
from app.services.auth.bootstrap_service import seed_initial_data
from main import app


@pytest_asyncio.fixture
async def seeded_db():
    await reset_models()

    async with AsyncSessionLocal() as session:
        await seed_initial_data(session)

    yield


@pytest_asyncio.fixture
async def client(seeded_db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def _login(client, username, password) -> dict:
    resp = await client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    token = resp.json()["data"]["auth"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def login(client):
    async def _do(username, password):
        return await _login(client, username, password)
    return _do


@pytest_asyncio.fixture
async def admin_headers(client):
    return await _login(client, "admin", "12345")


def scoped(headers: dict, client_id) -> dict:
    return {**headers, "X-Client-Id": str(client_id)}


@pytest_asyncio.fixture
async def tenants(client, admin_headers):
    ids = {}
    for key, name in (("a", "Acme"), ("b", "Globex")):
        resp = await client.post("/api/clients/", json={"name": name}, headers=admin_headers)
        assert resp.status_code == 201, resp.text
        ids[key] = resp.json()["data"]["id"]
    return ids


@pytest_asyncio.fixture
async def make_location(client, admin_headers):
    async def _make(client_id, name="Main site"):
        resp = await client.post(
            "/api/locations/",
            json={"name": name},
            headers=scoped(admin_headers, client_id),
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make


@pytest_asyncio.fixture
async def make_warehouse(client, admin_headers):
    async def _make(client_id, location_id, **dimensions):
        body = {"name": dimensions.pop("name", "WH-1"), "location_id": location_id, **dimensions}
        resp = await client.post(
            "/api/warehouses/",
            json=body,
            headers=scoped(admin_headers, client_id),
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make
