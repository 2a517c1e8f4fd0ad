# tests/test_cart.py
import pytest
from fastapi.testclient import TestClient
from mockshop.main import app
from mockshop.database import CARTS

client = TestClient(app)


def reset():
    client.post("/reset")


def auth_headers(email="shopper@test.com"):
    r = client.post("/auth/register", json={"email": email, "password": "CartPass123!"})
    return {"Authorization": f"Bearer {r.json()['token']}"}


def add(headers, product_id, quantity):
    return client.post("/cart/items", json={"productId": product_id, "quantity": quantity}, headers=headers)


def test_add_item_to_cart():
    reset()
    headers = auth_headers()
    r = add(headers, 1, 2)
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Item added to cart"
    assert body["cart"] == [
        {"productId": 1, "name": "Wireless Headphones", "price": 79.99, "quantity": 2}
    ]


def test_readding_product_increments_quantity():
    reset()
    headers = auth_headers()
    add(headers, 1, 2)
    body = add(headers, 1, 3).json()
    assert len(body["cart"]) == 1
    assert body["cart"][0]["quantity"] == 5


def test_lines_keep_insertion_order():
    reset()
    headers = auth_headers()
    add(headers, 3, 1)
    add(headers, 1, 1)
    body = add(headers, 3, 1).json()
    assert [line["name"] for line in body["cart"]] == ["Coffee Maker", "Wireless Headphones"]


def test_cart_total_rounded():
    reset()
    headers = auth_headers()
    add(headers, 1, 2)
    add(headers, 3, 1)
    for path in ("/cart", "/api/cart"):
        r = client.get(path, headers=headers)
        assert r.status_code == 200
        body = r.json()
        assert len(body["cart"]) == 2
        # 79.99 * 2 + 49.99 * 1
        assert body["total"] == 209.97


def test_empty_cart():
    reset()
    headers = auth_headers()
    body = client.get("/cart", headers=headers).json()
    assert body == {"cart": [], "total": 0}
    # viewing does not create a cart entry
    assert "shopper@test.com" not in CARTS


def test_carts_are_per_user():
    reset()
    alice = auth_headers("alice@test.com")
    bob = auth_headers("bob@test.com")
    add(alice, 2, 1)
    assert client.get("/api/cart", headers=bob).json()["cart"] == []
    assert len(client.get("/api/cart", headers=alice).json()["cart"]) == 1


def test_unauthenticated_add_returns_401():
    reset()
    r = client.post("/cart/items", json={"productId": 1, "quantity": 1})
    assert r.status_code == 401
    # auth is checked before the body
    r2 = client.post("/cart/items", json={"productId": "x"})
    assert r2.status_code == 401


def test_unauthenticated_json_cart_returns_401():
    reset()
    assert client.get("/cart").status_code == 401


def test_add_unknown_product_returns_404():
    reset()
    headers = auth_headers()
    r = add(headers, 999, 1)
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


@pytest.mark.parametrize("payload", [
    {"productId": 1, "quantity": 0},
    {"productId": 1, "quantity": -2},
    {"productId": 1},
    {"quantity": 1},
    {"productId": 0, "quantity": 1},
])
def test_add_invalid_payload_returns_400(payload):
    reset()
    headers = auth_headers()
    r = client.post("/cart/items", json=payload, headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "productId and quantity (>= 1) are required"}


@pytest.mark.parametrize("payload", [
    {"productId": "one", "quantity": 1},
    {"productId": True, "quantity": True},
    {"productId": "1", "quantity": "2"},
    {"productId": 1, "quantity": 1.5},
])
def test_add_wrongly_typed_payload_returns_400(payload):
    reset()
    headers = auth_headers()
    r = client.post("/cart/items", json=payload, headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}
    # nothing was coerced into a cart line
    assert "shopper@test.com" not in CARTS


def test_unauthenticated_malformed_json_returns_400():
    reset()
    # a body that does not parse is refused before the bearer check runs
    r = client.post("/cart/items", content=b"{bad", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}


def test_cart_survives_relogin(monkeypatch):
    reset()
    monkeypatch.setattr("mockshop.core._now_ms", lambda: 1_000)
    token = client.post("/auth/register", json={"email": "keep@test.com", "password": "pw"}).json()["token"]
    add({"Authorization": f"Bearer {token}"}, 2, 3)

    monkeypatch.setattr("mockshop.core._now_ms", lambda: 2_000)
    new_token = client.post("/auth/login", json={"email": "keep@test.com", "password": "pw"}).json()["token"]
    assert new_token != token

    body = client.get("/cart", headers={"Authorization": f"Bearer {new_token}"}).json()
    assert body["cart"] == [
        {"productId": 2, "name": "Running Shoes", "price": 129.99, "quantity": 3}
    ]
    assert body["total"] == 389.97


def test_price_snapshot_is_kept_on_line():
    reset()
    headers = auth_headers()
    add(headers, 2, 1)
    line = CARTS["shopper@test.com"][0]
    assert (line.product_id, line.name, line.price) == (2, "Running Shoes", 129.99)
