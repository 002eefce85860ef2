from __future__ import annotations


def test_health_ok(app_client):
    _app, client = app_client
    res = client.get("/health")
    assert res.status_code == 200
    data = res.get_json()
    assert data["status"] == "ok"
    assert data["db"] == "ok"
    assert "time" in data
    assert "version" in data
    assert len(data["todayBS"]) == 10


def test_version(app_client):
    _app, client = app_client
    res = client.get("/version")
    assert res.status_code == 200
    data = res.get_json()
    assert "version" in data
    assert "env" in data
    assert "time" in data


def test_request_id_is_echoed_when_safe(app_client):
    _app, client = app_client
    res = client.get("/version", headers={"X-Request-ID": "abc-123"})
    assert res.headers["X-Request-ID"] == "abc-123"

    res = client.get("/version", headers={"X-Request-ID": "bad id!"})
    assert res.headers["X-Request-ID"] != "bad id!"
    assert len(res.headers["X-Request-ID"]) == 16


def test_unknown_route_uses_error_envelope(app_client):
    _app, client = app_client
    res = client.get("/nope")
    assert res.status_code == 404
    payload = res.get_json()
    assert payload["ok"] is False
    assert payload["error"]["code"] == "NOT_FOUND"
