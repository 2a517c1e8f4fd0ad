# tests/test_products.py
from fastapi.testclient import TestClient
from mockshop.main import app
from mockshop.database import SEED_PRODUCTS

client = TestClient(app)


def reset():
    client.post("/reset")


def test_list_products_json():
    reset()
    for path in ("/products", "/api/products"):
        r = client.get(path)
        assert r.status_code == 200
        products = r.json()["products"]
        assert len(products) == len(SEED_PRODUCTS)
        by_id = {p["id"]: p for p in products}
        assert by_id[1]["name"] == "Wireless Headphones"
        assert by_id[1]["price"] == 79.99
        assert by_id[2]["price"] == 129.99


def test_search_wireless_matches_name_or_description():
    reset()
    r = client.get("/products/search", params={"q": "wireless"})
    assert r.status_code == 200
    body = r.json()
    assert body["query"] == "wireless"
    expected = {
        p["id"] for p in SEED_PRODUCTS
        if "wireless" in p["name"].lower() or "wireless" in p["description"].lower()
    }
    assert {p["id"] for p in body["products"]} == expected == {1, 5}


def test_search_is_case_insensitive_and_covers_category():
    reset()
    r = client.get("/products/search", params={"q": "KITCHEN"})
    body = r.json()
    assert [p["name"] for p in body["products"]] == ["Coffee Maker"]
    assert body["query"] == "kitchen"


def test_search_empty_or_missing_query_returns_catalog():
    reset()
    assert len(client.get("/products/search", params={"q": ""}).json()["products"]) == len(SEED_PRODUCTS)
    body = client.get("/products/search").json()
    assert len(body["products"]) == len(SEED_PRODUCTS)
    assert body["query"] == ""


def test_search_no_results():
    reset()
    body = client.get("/products/search", params={"q": "submarine"}).json()
    assert body["products"] == []


def test_get_product_by_id():
    reset()
    r = client.get("/products/1")
    assert r.status_code == 200
    product = r.json()["product"]
    assert product == SEED_PRODUCTS[0]


def test_get_product_missing_returns_404():
    reset()
    r = client.get("/products/999")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}
    # non-numeric ids are just unknown products
    assert client.get("/products/abc").status_code == 404
