from conftest import scoped


async def test_login_returns_token_and_user(client):
    resp = await client.post("/api/auth/login", json={"username": "admin", "password": "12345"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["auth"]["token_type"] == "bearer"
    assert data["user"]["username"] == "admin"
    assert data["user"]["is_system_admin"] is True
    assert "warehouses_create" in data["user"]["permissions"]


async def test_bad_password_rejected(client):
    resp = await client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["error_code"] == "AUTH_INVALID_CREDENTIALS"


async def test_me_requires_token(client, admin_headers):
    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401

    resp = await client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401

    resp = await client.get("/api/auth/me", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["username"] == "admin"
    assert "password_hash" not in resp.json()["data"]


async def test_logout_invalidates_token(client, admin_headers):
    resp = await client.post("/api/auth/logout", headers=admin_headers)
    assert resp.status_code == 200

    resp = await client.get("/api/auth/me", headers=admin_headers)
    assert resp.status_code == 401


async def test_inactive_user_blocked(client, admin_headers, login):
    resp = await client.post(
        "/api/users/",
        json={"username": "temp", "password": "secret1"},
        headers=admin_headers,
    )
    user_id = resp.json()["data"]["id"]
    headers = await login("temp", "secret1")

    resp = await client.put(f"/api/users/{user_id}", json={"is_active": False}, headers=admin_headers)
    assert resp.status_code == 200

    resp = await client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 403

    resp = await client.post("/api/auth/login", json={"username": "temp", "password": "secret1"})
    assert resp.status_code == 403
    assert resp.json()["error_code"] == "AUTH_USER_INACTIVE"


async def test_health(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_login_is_audited(client, admin_headers, tenants):
    resp = await client.get("/api/activities/", headers=admin_headers)
    assert resp.status_code == 200
    messages = [a["message"] for a in resp.json()["data"]["items"]]
    assert any("logged in" in m for m in messages)
    assert any("created client Acme" in m for m in messages)

    resp = await client.get("/api/activities/", headers=scoped(admin_headers, tenants["a"]))
    assert all(a["client_id"] == tenants["a"] for a in resp.json()["data"]["items"])
