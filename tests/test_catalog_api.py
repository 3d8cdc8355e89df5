from conftest import scoped


PRODUCT = {"sku": "SKU-1", "code": "C-1", "name": "Chair", "width": 50, "height": 90, "depth": 55}


async def test_product_is_scoped_to_client(client, admin_headers, tenants):
    resp = await client.post("/api/products/", json=PRODUCT, headers=scoped(admin_headers, tenants["a"]))
    assert resp.status_code == 201, resp.text
    product = resp.json()["data"]
    assert product["client_id"] == tenants["a"]

    resp = await client.get(f"/api/products/{product['id']}", headers=scoped(admin_headers, tenants["b"]))
    assert resp.status_code == 404

    resp = await client.get("/api/products/", headers=scoped(admin_headers, tenants["b"]))
    assert resp.json()["data"]["total"] == 0

    resp = await client.put(
        f"/api/products/{product['id']}",
        json={"name": "Armchair"},
        headers=scoped(admin_headers, tenants["b"]),
    )
    assert resp.status_code == 404


async def test_product_sku_unique(client, admin_headers, tenants):
    resp = await client.post("/api/products/", json=PRODUCT, headers=scoped(admin_headers, tenants["a"]))
    assert resp.status_code == 201

    resp = await client.post("/api/products/", json=PRODUCT, headers=scoped(admin_headers, tenants["b"]))
    assert resp.status_code == 409
    assert resp.json()["error_code"] == "PRODUCT_SKU_EXISTS"


async def test_product_requires_client_on_create(client, admin_headers, tenants):
    resp = await client.post("/api/products/", json=PRODUCT, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "CLIENT_CONTEXT_REQUIRED"


async def test_order_lifecycle(client, admin_headers, tenants):
    headers = scoped(admin_headers, tenants["a"])

    resp = await client.post("/api/orders/", json={"total": "12.50"}, headers=headers)
    assert resp.status_code == 201, resp.text
    order = resp.json()["data"]
    assert order["status"] == "pending"
    assert order["client_id"] == tenants["a"]
    assert order["user_id"] is not None

    resp = await client.put(f"/api/orders/{order['id']}", json={"status": "shipped"}, headers=headers)
    assert resp.json()["data"]["status"] == "shipped"

    resp = await client.get(f"/api/orders/{order['id']}", headers=scoped(admin_headers, tenants["b"]))
    assert resp.status_code == 404

    resp = await client.delete(f"/api/orders/{order['id']}", headers=headers)
    assert resp.status_code == 200


async def test_client_in_use_cannot_be_deleted(client, admin_headers, tenants, make_location):
    await make_location(tenants["a"])

    resp = await client.delete(f"/api/clients/{tenants['a']}", headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json()["error_code"] == "CLIENT_IN_USE"

    resp = await client.delete(f"/api/clients/{tenants['b']}", headers=admin_headers)
    assert resp.status_code == 200


async def test_client_names_unique(client, admin_headers, tenants):
    resp = await client.post("/api/clients/", json={"name": "acme"}, headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json()["error_code"] == "CLIENT_NAME_EXISTS"
