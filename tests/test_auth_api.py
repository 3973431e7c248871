# tests/test_auth_api.py

from __future__ import annotations

from datetime import timedelta

from taskboard.models import User
from taskboard.routers.auth import create_access_token, get_password_hash, verify_password


def test_register_returns_user_and_token(client) -> None:
    resp = client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "password123", "name": "Alice"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    user = body["data"]["user"]
    assert user["email"] == "alice@example.com"
    assert user["name"] == "Alice"
    assert "hashed_password" not in user
    assert body["data"]["token"]


def test_register_rejects_duplicate_email(client, register) -> None:
    register("Alice")
    resp = client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "password123", "name": "Alice Again"},
    )
    assert resp.status_code == 409
    assert resp.json()["message"] == "Email already registered"


def test_register_validates_input(client) -> None:
    resp = client.post(
        "/api/auth/register",
        json={"email": "not-an-email", "password": "123", "name": "A"},
    )
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["errors"]}
    assert fields == {"email", "password", "name"}


def test_login_and_me(client, register) -> None:
    alice = register("Alice")

    resp = client.post("/api/auth/login", json={"email": alice.email, "password": "password123"})
    assert resp.status_code == 200
    token = resp.json()["data"]["token"]
    client.cookies.clear()

    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == alice.id


def test_login_with_wrong_password(client, register) -> None:
    alice = register("Alice")

    resp = client.post("/api/auth/login", json={"email": alice.email, "password": "wrong-pass"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid email or password"

    resp = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 401


def test_cookie_token_is_accepted_until_logout(client) -> None:
    client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "password123", "name": "Alice"},
    )
    assert client.get("/api/auth/me").status_code == 200

    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    set_cookie = resp.headers["set-cookie"].lower()
    assert set_cookie.startswith('token=""') or set_cookie.startswith("token=;")
    assert "max-age=0" in set_cookie

    # The client drops the expired cookie on its own.
    assert "token" not in client.cookies
    assert client.get("/api/auth/me").status_code == 401


def test_expired_token_is_rejected(client, register, session_factory) -> None:
    alice = register("Alice")
    with session_factory() as db:
        user = db.get(User, alice.id)
        token = create_access_token(user, expires_delta=timedelta(minutes=-1))

    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_user_search(client, register) -> None:
    alice = register("Alice")
    register("Bob")

    resp = client.get("/api/users/search?q=bob", headers=alice.headers)
    assert resp.status_code == 200
    assert [u["email"] for u in resp.json()["data"]] == ["bob@example.com"]


def test_user_search_treats_wildcards_literally(client, register) -> None:
    alice = register("Alice")
    register("Bob")
    register("Under_Score", email="under_score@example.com")

    resp = client.get("/api/users/search", params={"q": "%"}, headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == []

    resp = client.get("/api/users/search", params={"q": "_"}, headers=alice.headers)
    assert [u["email"] for u in resp.json()["data"]] == ["under_score@example.com"]


def test_password_hash_round_trip() -> None:
    hashed = get_password_hash("s3cret!")
    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("other", hashed)
