from __future__ import annotations

from sqlalchemy.exc import OperationalError


def _assert_error_shape(res, *, error: str | None = None):
    data = res.json()
    assert isinstance(data, dict)
    assert isinstance(data.get("error"), str) and data["error"]
    assert isinstance(data.get("message"), str) and data["message"]
    if error is not None:
        assert data["error"] == error


def test_error_shape_400_missing_job_fields(client):
    res = client.post("/add-job", json={}, headers={"Authorization": "Bearer good-token"})
    assert res.status_code == 400
    _assert_error_shape(res, error="VALIDATION_ERROR")


def test_error_shape_401_missing_token(client):
    res = client.post("/add-job", json={"title": "t", "description": "d", "link": "l"})
    assert res.status_code == 401
    _assert_error_shape(res, error="UNAUTHORIZED")


def test_error_shape_400_bad_login(client):
    res = client.post("/login", json={"email": "nobody@example.com", "password": "x"})
    assert res.status_code == 400
    _assert_error_shape(res, error="VALIDATION_ERROR")


def test_error_shape_422_request_validation_error(client):
    res = client.post("/login", json={"email": "a@x.com"})
    assert res.status_code == 422
    _assert_error_shape(res, error="VALIDATION_ERROR")
    body = res.json()
    assert isinstance(body.get("details"), dict)
    assert isinstance(body["details"].get("errors"), list)


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_health_degraded_when_database_unreachable(client, monkeypatch):
    def broken_ping():
        raise OperationalError("SELECT 1", {}, Exception("could not connect to server"))

    monkeypatch.setattr(client.app.state.store, "ping", broken_ping)

    res = client.get("/health")

    assert res.status_code == 503
    assert res.json() == {"status": "degraded"}


def test_openapi_served_outside_prod(client):
    res = client.get("/openapi.json")
    assert res.status_code == 200
    assert res.json()["info"]["title"] == "HireLink"
