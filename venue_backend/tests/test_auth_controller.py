from __future__ import annotations

from collections.abc import Callable

from flask import Flask

CREDS = {"username": "alice", "password": "secret123"}


def test_signup_returns_201(client) -> None:
    response = client.post("/api/signup", json=CREDS)

    assert response.status_code == 201
    assert response.get_json() == {"message": "User created"}


def test_duplicate_signup_returns_400_and_keeps_one_user(app: Flask, client) -> None:
    client.post("/api/signup", json=CREDS)

    response = client.post("/api/signup", json={"username": "alice", "password": "other"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "Username already exists"
    assert app.extensions["venue_backend"].user_repository.count() == 1


def test_login_returns_token(client) -> None:
    client.post("/api/signup", json=CREDS)

    response = client.post("/api/login", json=CREDS)

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Login successful"
    assert body["token"]


def test_login_failures_share_one_shape(client) -> None:
    client.post("/api/signup", json=CREDS)

    wrong_password = client.post("/api/login", json={"username": "alice", "password": "nope"})
    unknown_user = client.post("/api/login", json={"username": "bob", "password": "secret123"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.get_json() == unknown_user.get_json()
    assert wrong_password.get_json()["error"] == "Invalid credentials"


def test_auth_body_validation(client) -> None:
    response = client.post("/api/login", json={"username": "alice"})

    assert response.status_code == 400
    assert response.get_json()["fields"] == ["password"]


def test_me_requires_bearer_token(client) -> None:
    missing = client.get("/api/me")
    malformed = client.get("/api/me", headers={"Authorization": "Bearer not-a-token"})
    wrong_scheme = client.get("/api/me", headers={"Authorization": "Basic abc"})

    assert missing.status_code == malformed.status_code == wrong_scheme.status_code == 401
    assert "error" in missing.get_json()


def test_me_returns_identity(client) -> None:
    client.post("/api/signup", json=CREDS)
    token = client.post("/api/login", json=CREDS).get_json()["token"]

    response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.get_json()["username"] == "alice"


def test_token_from_other_secret_rejected(make_app: Callable[..., Flask]) -> None:
    issuing_app = make_app(secret_key="first-secret")
    verifying_app = make_app(secret_key="second-secret")

    with issuing_app.test_client() as client:
        client.post("/api/signup", json=CREDS)
        token = client.post("/api/login", json=CREDS).get_json()["token"]

    with verifying_app.test_client() as client:
        response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_login_is_rate_limited(make_app: Callable[..., Flask]) -> None:
    app = make_app(rate_limit=True, rl_limit=2)

    with app.test_client() as client:
        statuses = [
            client.post("/api/login", json=CREDS).status_code for _ in range(3)
        ]

    assert statuses == [401, 401, 429]


def test_rotating_forwarded_for_does_not_bypass_limit(make_app: Callable[..., Flask]) -> None:
    app = make_app(rate_limit=True, rl_limit=2)

    with app.test_client() as client:
        statuses = [
            client.post(
                "/api/login", json=CREDS, headers={"X-Forwarded-For": f"10.0.0.{n}"}
            ).status_code
            for n in range(5)
        ]

    assert statuses == [401, 401, 429, 429, 429]


def test_trusted_proxy_forwarded_for_identifies_client(make_app: Callable[..., Flask]) -> None:
    app = make_app(rate_limit=True, rl_limit=2, trusted_proxies=1)

    with app.test_client() as client:
        statuses = [
            client.post(
                "/api/login", json=CREDS, headers={"X-Forwarded-For": f"10.0.0.{n}"}
            ).status_code
            for n in range(5)
        ]

    assert statuses == [401] * 5
