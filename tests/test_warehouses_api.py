from sqlalchemy import select, func

from app.core.db import AsyncSessionLocal
from app.models.warehouses.warehouse_models import Warehouse
from app.schemas.warehouses.warehouse_schemas import MAX_DIMENSION_COUNT
from conftest import scoped


async def _warehouse_count() -> int:
    async with AsyncSessionLocal() as session:
        return await session.scalar(select(func.count(Warehouse.id)))


async def test_create_with_other_clients_location_writes_nothing(client, admin_headers, tenants, make_location):
    foreign = await make_location(tenants["b"], name="Globex yard")

    resp = await client.post(
        "/api/warehouses/",
        json={"name": "Sneaky", "location_id": foreign["id"]},
        headers=scoped(admin_headers, tenants["a"]),
    )

    assert resp.status_code == 404
    assert resp.json()["error_code"] == "LOCATION_NOT_FOUND"
    assert await _warehouse_count() == 0


async def test_create_requires_selected_client(client, admin_headers, tenants, make_location):
    location = await make_location(tenants["a"])

    resp = await client.post(
        "/api/warehouses/",
        json={"name": "WH", "location_id": location["id"]},
        headers=admin_headers,
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["error_code"] == "CLIENT_CONTEXT_REQUIRED"
    assert body["message"] == "Client must be selected to create a warehouse."


async def test_dimension_count_must_be_in_range(client, admin_headers, tenants, make_location, make_warehouse):
    location = await make_location(tenants["a"])

    resp = await client.post(
        "/api/warehouses/",
        json={"name": "WH", "location_id": location["id"], "aisle_type": "numeric", "aisle_count": 0},
        headers=scoped(admin_headers, tenants["a"]),
    )
    assert resp.status_code == 422

    resp = await client.post(
        "/api/warehouses/",
        json={"name": "WH", "location_id": location["id"], "aisle_type": "roman", "aisle_count": 2},
        headers=scoped(admin_headers, tenants["a"]),
    )
    assert resp.status_code == 422

    resp = await client.post(
        "/api/warehouses/",
        json={"name": "WH", "location_id": location["id"], "bin_type": "alphabetic", "bin_count": 10**8},
        headers=scoped(admin_headers, tenants["a"]),
    )
    assert resp.status_code == 422

    warehouse = await make_warehouse(tenants["a"], location["id"], aisle_type="numeric", aisle_count=MAX_DIMENSION_COUNT)
    resp = await client.put(
        f"/api/warehouses/{warehouse['id']}",
        json={"aisle_count": MAX_DIMENSION_COUNT + 1},
        headers=scoped(admin_headers, tenants["a"]),
    )
    assert resp.status_code == 422


async def test_list_is_filtered_by_client(client, admin_headers, tenants, make_location, make_warehouse):
    loc_a = await make_location(tenants["a"])
    loc_b = await make_location(tenants["b"])
    wh_a = await make_warehouse(tenants["a"], loc_a["id"], name="A-1")
    wh_b = await make_warehouse(tenants["b"], loc_b["id"], name="B-1")

    resp = await client.get("/api/warehouses/", headers=scoped(admin_headers, tenants["a"]))
    data = resp.json()["data"]
    assert data["total"] == 1
    assert [w["id"] for w in data["items"]] == [wh_a["id"]]

    resp = await client.get("/api/warehouses/", headers=admin_headers)
    assert {w["id"] for w in resp.json()["data"]["items"]} == {wh_a["id"], wh_b["id"]}

    resp = await client.get(f"/api/warehouses/{wh_b['id']}", headers=scoped(admin_headers, tenants["a"]))
    assert resp.status_code == 404


async def test_update_cannot_move_to_foreign_location(client, admin_headers, tenants, make_location, make_warehouse):
    loc_a = await make_location(tenants["a"])
    loc_b = await make_location(tenants["b"])
    warehouse = await make_warehouse(tenants["a"], loc_a["id"])

    resp = await client.put(
        f"/api/warehouses/{warehouse['id']}",
        json={"location_id": loc_b["id"]},
        headers=scoped(admin_headers, tenants["a"]),
    )
    assert resp.status_code == 404

    resp = await client.get(f"/api/warehouses/{warehouse['id']}", headers=admin_headers)
    assert resp.json()["data"]["location_id"] == loc_a["id"]


async def test_update_and_clear_dimension(client, admin_headers, tenants, make_location, make_warehouse):
    location = await make_location(tenants["a"])
    warehouse = await make_warehouse(
        tenants["a"], location["id"], bay_type="alphabetic", bay_count=4
    )
    headers = scoped(admin_headers, tenants["a"])

    resp = await client.put(
        f"/api/warehouses/{warehouse['id']}",
        json={"name": "Renamed", "bay_type": None, "bay_count": None},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["name"] == "Renamed"
    assert data["bay_type"] is None and data["bay_count"] is None

    resp = await client.get(f"/api/warehouse-exclusions/warehouse/{warehouse['id']}", headers=headers)
    assert resp.json()["data"]["possibleValues"]["bay"] == []


async def test_location_with_warehouses_cannot_be_deleted(client, admin_headers, tenants, make_location, make_warehouse):
    location = await make_location(tenants["a"])
    await make_warehouse(tenants["a"], location["id"])

    resp = await client.delete(
        f"/api/locations/{location['id']}", headers=scoped(admin_headers, tenants["a"])
    )
    assert resp.status_code == 409
    assert resp.json()["error_code"] == "LOCATION_IN_USE"
