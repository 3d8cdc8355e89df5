import pytest_asyncio

from app.constants.permissions import PERMISSION_DEFINITIONS
from conftest import scoped


async def _permission_ids(client, headers, *names):
    resp = await client.get("/api/permissions/", headers=headers)
    by_name = {p["name"]: p["id"] for p in resp.json()["data"]["items"]}
    return [by_name[n] for n in names]


@pytest_asyncio.fixture
async def operator(client, admin_headers, tenants, login):
    """A client-A user whose role may only list warehouses and locations."""
    permission_ids = await _permission_ids(client, admin_headers, "warehouses_list", "locations_list")
    resp = await client.post(
        "/api/roles/",
        json={"name": "operator", "permission_ids": permission_ids},
        headers=scoped(admin_headers, tenants["a"]),
    )
    assert resp.status_code == 201, resp.text
    role = resp.json()["data"]

    resp = await client.post(
        "/api/users/",
        json={
            "username": "operator1",
            "password": "secret1",
            "role_id": role["id"],
            "client_ids": [tenants["a"]],
        },
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text

    return {"role": role, "user": resp.json()["data"], "headers": await login("operator1", "secret1")}


async def test_seeded_permissions_match_table(client, admin_headers):
    resp = await client.get("/api/permissions/", headers=admin_headers)
    names = {p["name"] for p in resp.json()["data"]["items"]}
    assert names == {d.action for d in PERMISSION_DEFINITIONS}

    resp = await client.post("/api/permissions/sync", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "created": 0,
        "updated": 0,
        "deleted": 0,
        "total": len(PERMISSION_DEFINITIONS),
    }


async def test_client_role_and_user(operator, tenants):
    assert operator["role"]["scope"] == "client"
    assert operator["role"]["client_id"] == tenants["a"]
    assert {p["name"] for p in operator["role"]["permissions"]} == {"warehouses_list", "locations_list"}
    assert operator["user"]["client_ids"] == [tenants["a"]]
    assert operator["user"]["role_name"] == "operator"


async def test_operator_tenant_rules(client, operator, tenants):
    headers = operator["headers"]

    resp = await client.get("/api/warehouses/", headers=scoped(headers, tenants["a"]))
    assert resp.status_code == 200

    resp = await client.get("/api/warehouses/", headers=scoped(headers, tenants["b"]))
    assert resp.status_code == 403
    assert resp.json()["error_code"] == "CLIENT_ACCESS_DENIED"

    resp = await client.get("/api/warehouses/", headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "CLIENT_CONTEXT_REQUIRED"

    resp = await client.get("/api/warehouses/", headers={**headers, "X-Client-Id": "not-a-number"})
    assert resp.status_code == 400


async def test_operator_needs_permission(client, operator, tenants):
    resp = await client.post(
        "/api/locations/",
        json={"name": "Nope"},
        headers=scoped(operator["headers"], tenants["a"]),
    )
    assert resp.status_code == 403
    assert resp.json()["error_code"] == "PERMISSION_DENIED"

    resp = await client.get("/api/clients/", headers=operator["headers"])
    assert resp.status_code == 403


async def test_role_listing_by_client(client, admin_headers, operator, tenants):
    resp = await client.get("/api/roles/", headers=scoped(admin_headers, tenants["a"]))
    names = [(r["name"], r["scope"]) for r in resp.json()["data"]]
    assert ("systemadmin", "global") in names
    assert ("operator", "client") in names

    resp = await client.get("/api/roles/", headers=scoped(admin_headers, tenants["b"]))
    assert "operator" not in [r["name"] for r in resp.json()["data"]]

    resp = await client.get(
        f"/api/roles/{operator['role']['id']}", headers=scoped(admin_headers, tenants["b"])
    )
    assert resp.status_code == 404


async def test_role_names_unique_per_scope(client, admin_headers, operator, tenants):
    resp = await client.post(
        "/api/roles/", json={"name": "operator"}, headers=scoped(admin_headers, tenants["a"])
    )
    assert resp.status_code == 409
    assert resp.json()["error_code"] == "ROLE_NAME_EXISTS"

    resp = await client.post(
        "/api/roles/", json={"name": "operator"}, headers=scoped(admin_headers, tenants["b"])
    )
    assert resp.status_code == 201


async def test_system_admin_role_is_protected(client, admin_headers):
    resp = await client.get("/api/roles/", headers=admin_headers)
    admin_role = next(r for r in resp.json()["data"] if r["name"] == "systemadmin")
    assert admin_role["scope"] == "global"

    resp = await client.delete(f"/api/roles/{admin_role['id']}", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "ROLE_PROTECTED"


async def test_assign_permissions(client, admin_headers, operator):
    role_id = operator["role"]["id"]

    resp = await client.post(
        f"/api/roles/{role_id}/permissions", json={"permission_ids": [999999]}, headers=admin_headers
    )
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "PERMISSION_NOT_FOUND"

    (perm_id,) = await _permission_ids(client, admin_headers, "locations_create")
    resp = await client.post(
        f"/api/roles/{role_id}/permissions", json={"permission_ids": [perm_id]}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()["data"]["permissions"]] == ["locations_create"]


async def test_user_crud(client, admin_headers, tenants):
    resp = await client.post(
        "/api/users/", json={"username": "clerk", "password": "secret1"}, headers=admin_headers
    )
    assert resp.status_code == 201
    user_id = resp.json()["data"]["id"]

    resp = await client.post(
        "/api/users/", json={"username": "clerk", "password": "secret1"}, headers=admin_headers
    )
    assert resp.status_code == 409
    assert resp.json()["error_code"] == "USER_USERNAME_EXISTS"

    resp = await client.post(
        "/api/users/", json={"username": "ghost", "password": "secret1", "role_id": 4242}, headers=admin_headers
    )
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "USER_ROLE_INVALID"

    resp = await client.put(
        f"/api/users/{user_id}", json={"client_ids": [tenants["b"]]}, headers=admin_headers
    )
    assert resp.json()["data"]["client_ids"] == [tenants["b"]]

    resp = await client.get("/api/users/", headers=scoped(admin_headers, tenants["b"]))
    assert [u["username"] for u in resp.json()["data"]["items"]] == ["clerk"]

    resp = await client.delete(f"/api/users/{user_id}", headers=admin_headers)
    assert resp.status_code == 200

    resp = await client.get(f"/api/users/{user_id}", headers=admin_headers)
    assert resp.status_code == 404
