from __future__ import annotations

from flask import Flask

from venue_backend.infrastructure.db.models import User
from venue_backend.infrastructure.db.session import session_scope


def test_venue_lifecycle_over_sql(sql_app: Flask) -> None:
    with sql_app.test_client() as client:
        created = client.post(
            "/api/venues", json={"name": "X", "url": "http://x", "district": "Y"}
        )
        assert created.status_code == 201
        body = created.get_json()
        assert body["name"] == "X"
        venue_id = body["id"]
        assert venue_id

        listed = client.get("/api/venues").get_json()
        assert any(v["id"] == venue_id for v in listed)

        assert client.put("/api/venues/not-an-id", json=body).status_code == 400
        assert client.delete("/api/venues/999999").status_code == 404

        assert client.delete(f"/api/venues/{venue_id}").status_code == 200
        listed = client.get("/api/venues").get_json()
        assert all(v["id"] != venue_id for v in listed)


def test_signup_login_me_over_sql(sql_app: Flask) -> None:
    creds = {"username": "alice", "password": "secret123"}

    with sql_app.test_client() as client:
        assert client.post("/api/signup", json=creds).status_code == 201
        assert client.post("/api/signup", json=creds).status_code == 400

        login = client.post("/api/login", json=creds)
        assert login.status_code == 200
        token = login.get_json()["token"]

        me = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.get_json()["username"] == "alice"

        wrong = client.post("/api/login", json={**creds, "password": "nope"})
        assert wrong.status_code == 401

    factory = sql_app.extensions["venue_backend"].session_factory
    with session_scope(factory) as session:
        rows = session.query(User).all()
        assert len(rows) == 1
        assert rows[0].password_hash != "secret123"
        assert rows[0].password_hash.startswith("pbkdf2:sha256:100000$")


def test_health_over_sql(sql_app: Flask) -> None:
    with sql_app.test_client() as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json()["database"] == "ok"
