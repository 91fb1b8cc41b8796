"""Product Routes: verifies CRUD, price filters and defaults."""

import pytest

PRODUCT = {
    "name": "Keyboard",
    "description": "Mechanical keyboard, US layout",
    "price": 49.9,
    "category": "peripherals",
}


@pytest.fixture
def create_product(client):
    async def _create(**overrides):
        res = await client.post("/api/v1/products", json={**PRODUCT, **overrides})
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create


async def test_create_product_applies_defaults(create_product):
    data = await create_product()
    assert data["stock"] == 0
    assert data["isActive"] is True
    assert data["price"] == 49.9


async def test_create_product_validation(client):
    res = await client.post("/api/v1/products", json={**PRODUCT, "price": -1, "name": "ab"})
    assert res.status_code == 400
    assert [d["field"] for d in res.json()["details"]] == ["name", "price"]


async def test_get_missing_product_is_404(client):
    res = await client.get("/api/v1/products/5")
    assert res.status_code == 404
    assert res.json()["message"] == "Product with ID 5 not found"


async def test_list_products_filters_by_price_range(client, create_product):
    await create_product(name="Mouse pad", price=5)
    await create_product(name="Monitor", price=199)
    await create_product(name="Headset", price=59)
    res = await client.get("/api/v1/products", params={"minPrice": 10, "maxPrice": 100})
    body = res.json()
    assert [p["name"] for p in body["data"]] == ["Headset"]
    assert body["pagination"]["totalItems"] == 1


async def test_list_products_inverted_price_range(client):
    res = await client.get("/api/v1/products", params={"minPrice": 100, "maxPrice": 10})
    assert res.status_code == 400
    assert [d["field"] for d in res.json()["details"]] == ["maxPrice"]


async def test_list_products_filters_by_category_and_active(client, create_product):
    await create_product(category="audio")
    await create_product(category="audio", isActive=False, name="Old speaker")
    await create_product(category="video")
    res = await client.get(
        "/api/v1/products", params={"category": "audio", "isActive": "true"},
    )
    assert res.json()["pagination"]["totalItems"] == 1


async def test_update_product(client, create_product):
    product = await create_product()
    res = await client.put(f"/api/v1/products/{product['id']}", json={"stock": 12})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["stock"] == 12
    assert data["name"] == "Keyboard"


async def test_delete_product(client, create_product):
    product = await create_product()
    res = await client.delete(f"/api/v1/products/{product['id']}")
    assert res.status_code == 200
    res = await client.get(f"/api/v1/products/{product['id']}")
    assert res.status_code == 404
