from __future__ import annotations

from collections.abc import Callable

from flask import Flask

VENUE = {"name": "X", "url": "http://x", "district": "Y"}


def test_create_returns_201_with_record(client) -> None:
    response = client.post("/api/venues", json=VENUE)

    assert response.status_code == 201
    body = response.get_json()
    assert body["name"] == "X"
    assert body["url"] == "http://x"
    assert body["district"] == "Y"
    assert body["id"]


def test_list_returns_array(client) -> None:
    client.post("/api/venues", json=VENUE)
    client.post("/api/venues", json={**VENUE, "name": "Z"})

    response = client.get("/api/venues")

    assert response.status_code == 200
    assert [v["name"] for v in response.get_json()] == ["X", "Z"]


def test_get_update_delete_by_id(client) -> None:
    venue_id = client.post("/api/venues", json=VENUE).get_json()["id"]

    assert client.get(f"/api/venues/{venue_id}").get_json()["name"] == "X"

    updated = client.put(
        f"/api/venues/{venue_id}", json={"name": "X2", "url": "http://x2", "district": "Y2"}
    )
    assert updated.status_code == 200
    assert updated.get_json() == {
        "id": venue_id,
        "name": "X2",
        "url": "http://x2",
        "district": "Y2",
    }

    deleted = client.delete(f"/api/venues/{venue_id}")
    assert deleted.status_code == 200
    assert deleted.get_json() == {"message": "Venue deleted"}
    assert client.get(f"/api/venues/{venue_id}").status_code == 404


def test_malformed_id_returns_400(client) -> None:
    for response in (
        client.put("/api/venues/not-an-id", json=VENUE),
        client.delete("/api/venues/not-an-id"),
        client.get("/api/venues/not-an-id"),
    ):
        assert response.status_code == 400
        assert response.get_json()["error"] == "Invalid ID format"


def test_malformed_id_wins_over_bad_body(client) -> None:
    response = client.put("/api/venues/not-an-id", json={"name": 1})

    assert response.status_code == 400
    assert response.get_json()["code"] == "invalid_id"


def test_missing_venue_returns_404(client) -> None:
    missing = "0" * 24

    put = client.put(f"/api/venues/{missing}", json=VENUE)
    delete = client.delete(f"/api/venues/{missing}")

    assert put.status_code == delete.status_code == 404
    assert put.get_json()["error"] == "Venue not found"


def test_bad_body_returns_400(client) -> None:
    response = client.post("/api/venues", json={"name": "X", "url": 5})

    assert response.status_code == 400
    body = response.get_json()
    assert body["code"] == "validation_error"
    assert body["fields"] == ["district", "url"]


def test_non_json_body_returns_400(client) -> None:
    response = client.post("/api/venues", data="not json", content_type="text/plain")

    assert response.status_code == 400


def test_storage_failure_returns_generic_500(app: Flask) -> None:
    from venue_backend.shared.errors import StorageError

    container = app.extensions["venue_backend"]

    def _fail():
        raise StorageError("venues_list_failed")

    container.venue_repository.list = _fail

    with app.test_client() as client:
        response = client.get("/api/venues")

    assert response.status_code == 500
    assert response.get_json()["error"] == "Internal server error"


def test_unexpected_error_returns_generic_500(app: Flask) -> None:
    container = app.extensions["venue_backend"]

    def _fail():
        raise RuntimeError("driver exploded: password=hunter2")

    container.venue_repository.list = _fail

    with app.test_client() as client:
        response = client.get("/api/venues")

    assert response.status_code == 500
    assert "hunter2" not in response.get_data(as_text=True)


def test_unknown_route_returns_json_404(client) -> None:
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert "error" in response.get_json()


def test_mutations_open_by_default(client) -> None:
    assert client.post("/api/venues", json=VENUE).status_code == 201


def test_mutations_require_token_when_configured(make_app: Callable[..., Flask]) -> None:
    app = make_app(require_auth=True)

    with app.test_client() as client:
        assert client.post("/api/venues", json=VENUE).status_code == 401
        assert client.get("/api/venues").status_code == 200

        client.post("/api/signup", json={"username": "alice", "password": "secret123"})
        token = client.post(
            "/api/login", json={"username": "alice", "password": "secret123"}
        ).get_json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        created = client.post("/api/venues", json=VENUE, headers=headers)
        assert created.status_code == 201
        venue_id = created.get_json()["id"]

        assert client.delete(f"/api/venues/{venue_id}").status_code == 401
        assert client.delete(f"/api/venues/{venue_id}", headers=headers).status_code == 200


def test_seeded_app_lists_bundled_venues(make_app: Callable[..., Flask]) -> None:
    app = make_app(seed=True)

    with app.test_client() as client:
        venues = client.get("/api/venues").get_json()

    assert len(venues) > 0


def test_health_reports_ok(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}
