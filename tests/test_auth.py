# tests/test_auth.py
from fastapi.testclient import TestClient
from mockshop.main import app
from mockshop.database import USERS

client = TestClient(app)

PASSWORD = "TestPass123!"


def reset():
    client.post("/reset")


def test_register_success():
    reset()
    r = client.post("/auth/register", json={"email": "alice@test.com", "password": PASSWORD})
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "User registered successfully"
    assert body["email"] == "alice@test.com"
    assert body["token"]
    assert USERS["alice@test.com"].token == body["token"]


def test_register_duplicate_email_conflicts():
    reset()
    client.post("/auth/register", json={"email": "bob@test.com", "password": PASSWORD})
    r = client.post("/auth/register", json={"email": "bob@test.com", "password": "other"})
    assert r.status_code == 409
    assert r.json() == {"error": "User already exists"}


def test_register_missing_fields():
    reset()
    r = client.post("/auth/register", json={"email": "", "password": ""})
    assert r.status_code == 400
    assert r.json()["error"] == "Email and password are required"
    # absent keys behave the same as empty ones
    r2 = client.post("/auth/register", json={"email": "x@test.com"})
    assert r2.status_code == 400


def test_register_non_json_body_is_bad_request():
    reset()
    r = client.post("/auth/register", content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_login_success_returns_token():
    reset()
    client.post("/auth/register", json={"email": "carol@test.com", "password": PASSWORD})
    r = client.post("/auth/login", json={"email": "carol@test.com", "password": PASSWORD})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["email"] == "carol@test.com"
    assert body["token"]


def test_login_wrong_password_and_unknown_user():
    reset()
    client.post("/auth/register", json={"email": "dave@test.com", "password": PASSWORD})
    r = client.post("/auth/login", json={"email": "dave@test.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid email or password"}
    r2 = client.post("/auth/login", json={"email": "nobody@test.com", "password": "wrongpass"})
    assert r2.status_code == 401


def test_login_missing_fields():
    reset()
    r = client.post("/auth/login", json={"email": "dave@test.com"})
    assert r.status_code == 400


def test_login_token_authorizes_cart():
    reset()
    client.post("/auth/register", json={"email": "erin@test.com", "password": PASSWORD})
    token = client.post("/auth/login", json={"email": "erin@test.com", "password": PASSWORD}).json()["token"]
    headers = {"Authorization": f"Bearer {token}"}
    assert client.get("/cart", headers=headers).status_code == 200
    r = client.post("/cart/items", json={"productId": 1, "quantity": 1}, headers=headers)
    assert r.status_code == 200


def test_relogin_supersedes_previous_token(monkeypatch):
    reset()
    monkeypatch.setattr("mockshop.core._now_ms", lambda: 1_000)
    old = client.post("/auth/register", json={"email": "frank@test.com", "password": PASSWORD}).json()["token"]
    monkeypatch.setattr("mockshop.core._now_ms", lambda: 2_000)
    new = client.post("/auth/login", json={"email": "frank@test.com", "password": PASSWORD}).json()["token"]
    assert old != new

    r_old = client.get("/api/cart", headers={"Authorization": f"Bearer {old}"})
    assert r_old.status_code == 401
    assert r_old.json() == {"error": "Unauthorized: Invalid token"}
    assert client.get("/api/cart", headers={"Authorization": f"Bearer {new}"}).status_code == 200


def test_missing_or_malformed_authorization_header():
    reset()
    r = client.get("/api/cart")
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized: Missing or invalid token"}
    r2 = client.get("/api/cart", headers={"Authorization": "Token abc"})
    assert r2.status_code == 401
    assert r2.json() == {"error": "Unauthorized: Missing or invalid token"}
    r3 = client.get("/api/cart", headers={"Authorization": "Bearer not-a-real-token"})
    assert r3.status_code == 401
    assert r3.json() == {"error": "Unauthorized: Invalid token"}
