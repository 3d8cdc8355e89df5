from sqlalchemy import select, func

from app.core.db import AsyncSessionLocal
from app.models.warehouses.warehouse_models import WarehouseExclusion
from conftest import scoped

BASE = "/api/warehouse-exclusions"


async def _scenario_warehouse(tenants, make_location, make_warehouse):
    location = await make_location(tenants["a"])
    return await make_warehouse(
        tenants["a"],
        location["id"],
        aisle_type="numeric",
        aisle_count=3,
        bin_type="alphabetic",
        bin_count=26,
    )


async def test_possible_values_and_exclusion_lifecycle(client, admin_headers, tenants, make_location, make_warehouse):
    warehouse = await _scenario_warehouse(tenants, make_location, make_warehouse)
    headers = scoped(admin_headers, tenants["a"])

    resp = await client.get(f"{BASE}/warehouse/{warehouse['id']}", headers=headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["exclusions"] == []
    values = data["possibleValues"]
    assert values["aisle"] == ["1", "2", "3"]
    assert values["bay"] == []
    assert values["level"] == []
    assert values["bin"][0] == "A" and values["bin"][-1] == "Z" and len(values["bin"]) == 26

    # accepted
    resp = await client.post(
        f"{BASE}/",
        json={"warehouseId": warehouse["id"], "aisleFrom": "2", "binFrom": "A", "binTo": "C"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    rule = resp.json()["data"]
    assert rule["warehouseId"] == warehouse["id"]
    assert rule["aisleFrom"] == "2" and rule["aisleTo"] is None
    assert rule["binFrom"] == "A" and rule["binTo"] == "C"

    # out of range
    resp = await client.post(
        f"{BASE}/", json={"warehouseId": warehouse["id"], "aisleFrom": "4"}, headers=headers
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["error_code"] == "EXCLUSION_UNKNOWN_VALUE"
    assert body["details"] == {"dimension": "aisle"}

    # bay has no values at all
    resp = await client.post(
        f"{BASE}/", json={"warehouseId": warehouse["id"], "bayFrom": "1"}, headers=headers
    )
    assert resp.status_code == 400
    assert resp.json()["details"] == {"dimension": "bay"}

    resp = await client.get(f"{BASE}/warehouse/{warehouse['id']}", headers=headers)
    assert [e["id"] for e in resp.json()["data"]["exclusions"]] == [rule["id"]]


async def test_vacuous_and_inverted_rules_rejected(client, admin_headers, tenants, make_location, make_warehouse):
    warehouse = await _scenario_warehouse(tenants, make_location, make_warehouse)
    headers = scoped(admin_headers, tenants["a"])

    resp = await client.post(f"{BASE}/", json={"warehouseId": warehouse["id"]}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "EXCLUSION_EMPTY"

    resp = await client.post(
        f"{BASE}/",
        json={"warehouseId": warehouse["id"], "aisleFrom": "3", "aisleTo": "1"},
        headers=headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "EXCLUSION_RANGE_INVERTED"

    resp = await client.post(
        f"{BASE}/",
        json={"warehouseId": warehouse["id"], "aisleFrom": "1", "binTo": "C"},
        headers=headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "EXCLUSION_TO_WITHOUT_FROM"
    assert resp.json()["details"] == {"dimension": "bin"}

    resp = await client.get(f"{BASE}/warehouse/{warehouse['id']}", headers=headers)
    assert resp.json()["data"]["exclusions"] == []


async def test_update_merges_and_revalidates(client, admin_headers, tenants, make_location, make_warehouse):
    warehouse = await _scenario_warehouse(tenants, make_location, make_warehouse)
    headers = scoped(admin_headers, tenants["a"])

    created = (
        await client.post(
            f"{BASE}/",
            json={"warehouseId": warehouse["id"], "aisleFrom": "1", "aisleTo": "2"},
            headers=headers,
        )
    ).json()["data"]

    resp = await client.put(
        f"{BASE}/{created['id']}",
        json={"warehouseId": warehouse["id"], "binFrom": "B"},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    updated = resp.json()["data"]
    assert updated["aisleFrom"] == "1" and updated["aisleTo"] == "2"
    assert updated["binFrom"] == "B"

    # merged result would be inverted
    resp = await client.put(
        f"{BASE}/{created['id']}",
        json={"warehouseId": warehouse["id"], "aisleFrom": "3"},
        headers=headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "EXCLUSION_RANGE_INVERTED"

    resp = await client.get(
        f"{BASE}/{created['id']}", params={"warehouseId": warehouse["id"]}, headers=headers
    )
    assert resp.json()["data"]["aisleFrom"] == "1"


async def test_validation_uses_current_configuration(client, admin_headers, tenants, make_location, make_warehouse):
    warehouse = await _scenario_warehouse(tenants, make_location, make_warehouse)
    headers = scoped(admin_headers, tenants["a"])

    resp = await client.put(
        f"/api/warehouses/{warehouse['id']}", json={"aisle_count": 2}, headers=headers
    )
    assert resp.status_code == 200, resp.text

    resp = await client.post(
        f"{BASE}/", json={"warehouseId": warehouse["id"], "aisleFrom": "3"}, headers=headers
    )
    assert resp.status_code == 400


async def test_check_slot(client, admin_headers, tenants, make_location, make_warehouse):
    warehouse = await _scenario_warehouse(tenants, make_location, make_warehouse)
    headers = scoped(admin_headers, tenants["a"])

    rule = (
        await client.post(
            f"{BASE}/",
            json={"warehouseId": warehouse["id"], "aisleFrom": "2", "binFrom": "A", "binTo": "C"},
            headers=headers,
        )
    ).json()["data"]

    resp = await client.get(
        f"{BASE}/warehouse/{warehouse['id']}/check",
        params={"aisle": "2", "bin": "B"},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["excluded"] is True
    assert data["matchedExclusionIds"] == [rule["id"]]

    resp = await client.get(
        f"{BASE}/warehouse/{warehouse['id']}/check",
        params={"aisle": "2", "bin": "D"},
        headers=headers,
    )
    assert resp.json()["data"]["excluded"] is False

    whole_aisle = (
        await client.post(
            f"{BASE}/", json={"warehouseId": warehouse["id"], "aisleFrom": "3"}, headers=headers
        )
    ).json()["data"]

    # no bin given: only rules leaving bin unconstrained apply
    resp = await client.get(
        f"{BASE}/warehouse/{warehouse['id']}/check", params={"aisle": "2"}, headers=headers
    )
    assert resp.json()["data"]["excluded"] is False

    resp = await client.get(
        f"{BASE}/warehouse/{warehouse['id']}/check", params={"aisle": "3"}, headers=headers
    )
    data = resp.json()["data"]
    assert data["excluded"] is True
    assert data["matchedExclusionIds"] == [whole_aisle["id"]]


async def test_delete_exclusion(client, admin_headers, tenants, make_location, make_warehouse):
    warehouse = await _scenario_warehouse(tenants, make_location, make_warehouse)
    headers = scoped(admin_headers, tenants["a"])

    rule = (
        await client.post(
            f"{BASE}/", json={"warehouseId": warehouse["id"], "aisleFrom": "1"}, headers=headers
        )
    ).json()["data"]

    resp = await client.delete(
        f"{BASE}/{rule['id']}", params={"warehouseId": warehouse["id"]}, headers=headers
    )
    assert resp.status_code == 200

    resp = await client.get(
        f"{BASE}/{rule['id']}", params={"warehouseId": warehouse["id"]}, headers=headers
    )
    assert resp.status_code == 404
    assert resp.json()["error_code"] == "EXCLUSION_NOT_FOUND"


async def test_exclusions_hidden_from_other_clients(client, admin_headers, tenants, make_location, make_warehouse):
    warehouse = await _scenario_warehouse(tenants, make_location, make_warehouse)

    resp = await client.get(
        f"{BASE}/warehouse/{warehouse['id']}", headers=scoped(admin_headers, tenants["b"])
    )
    assert resp.status_code == 404
    assert resp.json()["error_code"] == "WAREHOUSE_NOT_FOUND"

    resp = await client.post(
        f"{BASE}/",
        json={"warehouseId": warehouse["id"], "aisleFrom": "1"},
        headers=scoped(admin_headers, tenants["b"]),
    )
    assert resp.status_code == 404

    # administrative context sees everything
    resp = await client.get(f"{BASE}/warehouse/{warehouse['id']}", headers=admin_headers)
    assert resp.status_code == 200


async def test_deleting_warehouse_removes_its_exclusions(client, admin_headers, tenants, make_location, make_warehouse):
    warehouse = await _scenario_warehouse(tenants, make_location, make_warehouse)
    headers = scoped(admin_headers, tenants["a"])

    for body in ({"aisleFrom": "1"}, {"binFrom": "C", "binTo": "F"}):
        resp = await client.post(f"{BASE}/", json={"warehouseId": warehouse["id"], **body}, headers=headers)
        assert resp.status_code == 201

    resp = await client.delete(f"/api/warehouses/{warehouse['id']}", headers=headers)
    assert resp.status_code == 200, resp.text

    async with AsyncSessionLocal() as session:
        remaining = await session.scalar(
            select(func.count(WarehouseExclusion.id)).where(
                WarehouseExclusion.warehouse_id == warehouse["id"]
            )
        )
    assert remaining == 0

    resp = await client.get(f"{BASE}/warehouse/{warehouse['id']}", headers=headers)
    assert resp.status_code == 404
